"""iTerm2 session driver with MCP support.

Types commands into iTerm2 sessions, waits for the shell to become ready by
watching the session's busy flag and the CPU usage of its foreground process,
and reads back terminal output. Built on ReplKit2 for dual REPL/MCP
functionality.

PUBLIC API:
  - app: ReplKit2 application instance with itermtap commands
"""

from .app import app

__version__ = "0.1.0"
__all__ = ["app"]
