"""Read output from iTerm2 sessions.

PUBLIC API:
  - read_terminal_output: Read trailing lines from a session
"""

from typing import Any, Optional

from ..app import app
from ..bridge import BridgeError
from ..config import get_config_manager
from ..errors import markdown_error_response
from ..terminal import read_output
from ..types import session_ref


@app.command(
    display="markdown",
    fastmcp={
        "type": "tool",
        "mime_type": "text/markdown",
        "tags": {"inspection", "output"},
        "description": "Reads the output from the active iTerm terminal",
    },
)
def read_terminal_output(
    state,
    lines_of_output: Optional[int] = None,
    tty_path: Optional[str] = None,
    filter_base64: Optional[bool] = None,
) -> dict[str, Any]:
    """Read the trailing lines of a session's buffer.

    Args:
        state: Application state (unused).
        lines_of_output: Number of lines to read. Defaults to config (25).
        tty_path: Device path (e.g., /dev/ttys005) of the target session.
            Defaults to the focused session.
        filter_base64: Replace long base64 runs and inline images with
            placeholders. Defaults to config (True).

    Returns:
        Markdown formatted result with the session output.
    """
    config = get_config_manager()
    lines = lines_of_output if lines_of_output and lines_of_output > 0 else config.read_lines
    filtered = config.filter_base64 if filter_base64 is None else filter_base64
    ref = session_ref(tty_path)

    try:
        output = read_output(ref, lines=lines, filter_base64=filtered)
    except BridgeError as e:
        return markdown_error_response(e, session=ref.display)

    return {
        "elements": [{"type": "code_block", "content": output or "[No output]", "language": "text"}],
        "frontmatter": {
            "session": ref.display,
            "lines": lines,
            "filtered": filtered,
            "status": "ok",
        },
    }
