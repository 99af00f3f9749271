"""itermtap ReplKit2 application - session-first architecture.

Main application entry point providing dual REPL/MCP functionality for driving
iTerm2 sessions through AppleScript. Built on ReplKit2 so the same commands
serve an interactive REPL and an MCP server.
"""

from dataclasses import dataclass

from replkit2 import App


@dataclass
class ITermTapState:
    """Application state for itermtap.

    Intentionally empty: every command re-resolves its session, so nothing
    is carried between calls.
    """

    pass


# Must be created before command imports for decorator registration
app = App(
    "itermtap",
    ITermTapState,
    uri_scheme="itermtap",
    fastmcp={
        "description": "Drive iTerm2 sessions: run commands, read output, send control characters",
        "tags": {"terminal", "automation", "iterm2"},
    },
)


# Command imports trigger @app.command decorator registration
from .commands import write  # noqa: E402, F401
from .commands import read  # noqa: E402, F401
from .commands import control  # noqa: E402, F401
from .commands import ls  # noqa: E402, F401
