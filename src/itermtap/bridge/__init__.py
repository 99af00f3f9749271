"""Automation bridge - AppleScript access to iTerm2 sessions.

PUBLIC API:
  - invoke: Run a script with classified errors
  - encode_text: Encode text for a write
  - send_text: Type text into a session
  - send_control_code: Write one raw control character
  - is_processing: Session busy flag
  - get_contents: Full session buffer
  - get_tty: Session device path
  - list_sessions: Enumerate sessions
  - find_session: Exact device-path lookup
  - BridgeError, SessionNotFoundError, HostApplicationUnavailableError, BridgeInvocationError
"""

from .core import invoke

from .exceptions import (
    BridgeError,
    SessionNotFoundError,
    HostApplicationUnavailableError,
    BridgeInvocationError,
)

from .script import encode_text

from .session import (
    send_text,
    send_control_code,
    is_processing,
    get_contents,
    get_tty,
    list_sessions,
    find_session,
)

__all__ = [
    "invoke",
    "encode_text",
    "send_text",
    "send_control_code",
    "is_processing",
    "get_contents",
    "get_tty",
    "list_sessions",
    "find_session",
    "BridgeError",
    "SessionNotFoundError",
    "HostApplicationUnavailableError",
    "BridgeInvocationError",
]
