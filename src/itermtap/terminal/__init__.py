"""Terminal session operations built on the bridge and process detection.

PUBLIC API:
  - execute: Dispatch a command and wait for completion
  - CommandResult: Result of execute
  - read_output: Trailing lines of a session buffer
  - send_control_character: Write a control character
  - control_code: Letter to control code mapping
  - InvalidControlCharacterError: Bad control character input
"""

from .execution import CommandResult, execute
from .output import read_output
from .control import InvalidControlCharacterError, control_code, send_control_character

__all__ = [
    "execute",
    "CommandResult",
    "read_output",
    "send_control_character",
    "control_code",
    "InvalidControlCharacterError",
]
