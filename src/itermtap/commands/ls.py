"""List command - show all iTerm2 sessions."""

from typing import Optional

from ..app import app
from ..bridge import BridgeError, find_session, list_sessions
from ..errors import table_error_response


@app.command(
    display="table",
    headers=["Session", "TTY", "Name", "State"],
    fastmcp={"type": "tool", "description": "List iTerm2 sessions with their TTY device paths"},
)
def ls(state, tty_path: Optional[str] = None):
    """List every iTerm2 session (window:tab.session) with its device path."""
    try:
        sessions = list_sessions()
        if tty_path:
            sessions = [find_session(sessions, tty_path)]
    except BridgeError as e:
        return table_error_response(str(e))

    return [
        {
            "Session": info.location,
            "TTY": info.tty_path,
            "Name": info.name,
            "State": "busy" if info.is_processing else "idle",
        }
        for info in sessions
    ]
