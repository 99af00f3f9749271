"""Write commands to iTerm2 sessions.

PUBLIC API:
  - write_to_terminal: Type text into a session and report new output lines
"""

from typing import Any, Optional

from ..app import app
from ..bridge import BridgeError
from ..errors import markdown_error_response
from ..process import CompletionTimeoutError
from ..terminal import execute
from ..types import session_ref
from ._helpers import build_hint, truncate_command


@app.command(
    display="markdown",
    fastmcp={
        "type": "tool",
        "mime_type": "text/markdown",
        "tags": {"execution", "shell"},
        "description": "Writes text to the active iTerm terminal - often used to run a command in the terminal",
    },
)
def write_to_terminal(state, command: str, tty_path: Optional[str] = None) -> dict[str, Any]:
    """Type text into a session and wait for the shell to be ready again.

    Args:
        state: Application state (unused).
        command: The command to run or text to write. May span lines.
        tty_path: Device path (e.g., /dev/ttys005) of the target session.
            Defaults to the focused session.

    Returns:
        Markdown formatted result with the number of new output lines.
    """
    ref = session_ref(tty_path)

    try:
        result = execute(ref, command)
    except (BridgeError, CompletionTimeoutError) as e:
        return markdown_error_response(e, session=ref.display)

    lines = result.output_lines
    elements = [
        {
            "type": "text",
            "content": (
                f"{lines} lines were output after sending the command to the terminal. "
                f"Read the last {lines} lines of terminal contents to orient yourself. "
                "Never assume that the command was executed or that it was successful."
            ),
        },
        build_hint(lines, tty_path),
    ]

    return {
        "elements": elements,
        "frontmatter": {
            "command": truncate_command(result.command),
            "session": result.session,
            "status": "completed",
            "output_lines": lines,
            "completion": result.completion.reason.value,
            "elapsed": round(result.elapsed, 2),
        },
    }
