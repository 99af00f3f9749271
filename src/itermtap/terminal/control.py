"""Control character sending - fire-and-forget raw writes.

PUBLIC API:
  - InvalidControlCharacterError: Letter does not name a control character
  - control_code: Map a letter or named escape to its control code
  - send_control_character: Write the control character to a session
"""

import logging

from ..bridge import send_control_code
from ..types import SessionRef

logger = logging.getLogger(__name__)

# Named escapes (upper-case keys)
_NAMED_CODES = {
    "]": 29,  # group separator, telnet escape
    "ESC": 27,
    "ESCAPE": 27,
}


class InvalidControlCharacterError(ValueError):
    """Raised when the input does not name a control character."""

    def __init__(self, letter: str):
        self.letter = letter
        super().__init__(f"Invalid control character letter: {letter!r} (use A-Z, ']' or 'Escape')")


def control_code(letter: str) -> int:
    """Map a letter to its control code.

    "]" maps to 29, "Esc"/"Escape" (any case) to 27, and a single letter
    A-Z (any case) to its Control-key code, A=1 through Z=26.

    Raises:
        InvalidControlCharacterError: For anything else.
    """
    key = letter.upper()
    if key in _NAMED_CODES:
        return _NAMED_CODES[key]

    if len(key) == 1 and "A" <= key <= "Z":
        return ord(key) - 64

    raise InvalidControlCharacterError(letter)


def send_control_character(ref: SessionRef, letter: str) -> int:
    """Send a control character without waiting for any effect.

    The letter is validated before the bridge is called.

    Args:
        ref: Target session.
        letter: Letter or named escape.

    Returns:
        The control code that was written.
    """
    code = control_code(letter)
    send_control_code(ref, code)
    logger.info(f"Sent control code {code} to {ref.display}")
    return code
