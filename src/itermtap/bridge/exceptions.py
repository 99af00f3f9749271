"""Bridge-specific exceptions.

PUBLIC API:
  - BridgeError: Base exception for all automation bridge operations
  - SessionNotFoundError: No open session has the requested device path
  - HostApplicationUnavailableError: Host application not running/reachable
  - BridgeInvocationError: Any other osascript failure, tagged with operation
"""


class BridgeError(Exception):
    """Base exception for all automation bridge operations."""

    pass


class SessionNotFoundError(BridgeError):
    """Raised when no open session has the requested device path."""

    def __init__(self, tty_path: str):
        self.tty_path = tty_path
        super().__init__(f"Session with TTY {tty_path} not found")


class HostApplicationUnavailableError(BridgeError):
    """Raised when the host application is not running or not reachable."""

    def __init__(self, application: str, detail: str = ""):
        self.application = application
        self.detail = detail
        message = f"{application} is not running. Start {application} and try again"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class BridgeInvocationError(BridgeError):
    """Raised for any other failure of the osascript call."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Bridge call failed during {operation}: {detail}")
