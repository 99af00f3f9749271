"""Session operations - everything the bridge can do to one iTerm2 session.

Each call renders a fresh script and re-resolves the session reference; no
handle is cached between calls.

PUBLIC API:
  - send_text: Type text (plus newline) into a session
  - send_control_code: Write one raw control character into a session
  - is_processing: Check the session's busy flag
  - get_contents: Fetch the session's full buffer text
  - get_tty: Get the session's device path
  - list_sessions: Enumerate every window/tab/session
  - find_session: Pick the session with an exact device path
"""

import logging
from typing import Iterable

from ..config import get_config_manager
from ..types import BridgeOperation, SessionByPath, SessionInfo, SessionRef
from .core import invoke, parse_bool
from .exceptions import BridgeInvocationError, SessionNotFoundError
from .script import (
    CONTENTS,
    FIELD_SEPARATOR,
    IS_PROCESSING,
    TTY,
    Action,
    EncodedText,
    render_list_script,
    render_session_script,
    write_control,
    write_text,
)

logger = logging.getLogger(__name__)


def _run(ref: SessionRef, action: Action, operation: BridgeOperation) -> str:
    """Render an action for a session and run it."""
    script = render_session_script(ref, action, get_config_manager().application)
    tty_path = ref.tty_path if isinstance(ref, SessionByPath) else None
    return invoke(script, operation, tty_path)


def send_text(ref: SessionRef, encoded: EncodedText) -> None:
    """Type encoded text into a session; the host appends a newline.

    Args:
        ref: Target session.
        encoded: Output of script.encode_text.
    """
    _run(ref, write_text(encoded), "send")


def send_control_code(ref: SessionRef, code: int) -> None:
    """Write a single raw character with the given code.

    Args:
        ref: Target session.
        code: Character code (0-127).
    """
    _run(ref, write_control(code), "control")


def is_processing(ref: SessionRef) -> bool:
    """Check whether the session is still draining output."""
    return parse_bool(_run(ref, IS_PROCESSING, "busy"))


def get_contents(ref: SessionRef) -> str:
    """Get the full text contents of the session."""
    return _run(ref, CONTENTS, "read")


def get_tty(ref: SessionRef) -> str:
    """Get the device path of the session.

    A reference by path already names its device, so no call is made.

    Raises:
        BridgeInvocationError: If the focused session reports no device path.
    """
    if isinstance(ref, SessionByPath):
        if not ref.tty_path.startswith("/dev/tty"):
            logger.warning(f"Target path {ref.tty_path!r} does not look like a TTY path (e.g., /dev/ttys001)")
        return ref.tty_path

    tty = _run(ref, TTY, "tty").strip()
    if not tty:
        raise BridgeInvocationError("tty", "current session reported no device path")
    return tty


def _parse_session_row(line: str) -> SessionInfo | None:
    parts = line.split(FIELD_SEPARATOR, 5)
    if len(parts) < 6:
        return None
    try:
        return SessionInfo(
            window=int(parts[0]),
            tab=int(parts[1]),
            session=int(parts[2]),
            tty_path=parts[3],
            is_processing=parts[4].strip().lower() == "true",
            name=parts[5],
        )
    except ValueError:
        return None


def list_sessions() -> list[SessionInfo]:
    """List every session in host order (window, tab, session).

    Sessions that cannot be inspected are left out.
    """
    output = invoke(render_list_script(get_config_manager().application), "list")

    sessions = []
    for line in output.splitlines():
        if not line.strip():
            continue
        info = _parse_session_row(line)
        if info is None:
            logger.debug(f"Skipping malformed session row: {line!r}")
            continue
        sessions.append(info)
    return sessions


def find_session(sessions: Iterable[SessionInfo], tty_path: str) -> SessionInfo:
    """Find the first session whose device path equals tty_path exactly.

    Args:
        sessions: Sessions in host enumeration order.
        tty_path: Requested device path.

    Raises:
        SessionNotFoundError: If no session matches.
    """
    for info in sessions:
        if info.tty_path == tty_path:
            return info
    raise SessionNotFoundError(tty_path)
