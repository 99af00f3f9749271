"""Send control characters to iTerm2 sessions.

PUBLIC API:
  - send_control_character: Send Control-<letter> or a named escape
"""

from typing import Any, Optional

from ..app import app
from ..bridge import BridgeError
from ..errors import markdown_error_response
from ..terminal import InvalidControlCharacterError, send_control_character as send_control
from ..types import session_ref


@app.command(
    display="markdown",
    fastmcp={
        "type": "tool",
        "mime_type": "text/markdown",
        "tags": {"input", "control"},
        "description": (
            "Sends a control character to the active iTerm terminal "
            "(e.g., Control-C, or special sequences like ']' for telnet escape)"
        ),
    },
)
def send_control_character(state, letter: str, tty_path: Optional[str] = None) -> dict[str, Any]:
    """Send a control character without waiting for its effect.

    Args:
        state: Application state (unused).
        letter: A-Z for Control-<letter>, "]" for telnet escape, "Esc"/"Escape".
        tty_path: Device path (e.g., /dev/ttys005) of the target session.
            Defaults to the focused session.

    Returns:
        Markdown formatted result naming the character sent.

    Examples:
        send_control_character("C")        # Interrupt
        send_control_character("D")        # End of input
        send_control_character("]")        # Telnet escape
        send_control_character("Escape")   # Leave insert mode
    """
    ref = session_ref(tty_path)

    try:
        code = send_control(ref, letter)
    except (InvalidControlCharacterError, BridgeError) as e:
        return markdown_error_response(e, session=ref.display)

    sent = f"Control-{letter.upper()}"
    return {
        "elements": [{"type": "text", "content": f"Sent control character: {sent}"}],
        "frontmatter": {
            "sent": sent,
            "code": code,
            "session": ref.display,
            "status": "sent",
        },
    }
