"""Type definitions for itermtap - session-first architecture.

Every operation targets one iTerm2 session. A session is addressed either as
"whatever has focus right now" or by its pseudo-terminal device path, and the
reference is re-resolved on every call.
"""

from dataclasses import dataclass
from typing import Literal

# Session identifiers
type TtyPath = str  # e.g., "/dev/ttys005" - the session's pseudo-terminal
type SessionRef = CurrentSession | SessionByPath

# Operations the bridge can be busy with when a call fails
type BridgeOperation = Literal["send", "read", "busy", "tty", "control", "list"]

# Known shells - single source of truth
KNOWN_SHELLS = frozenset(["bash", "zsh", "fish", "sh", "dash", "ksh", "tcsh", "csh", "login"])


@dataclass(frozen=True)
class CurrentSession:
    """The session that currently has focus in the host application."""

    @property
    def display(self) -> str:
        return "current session"


@dataclass(frozen=True)
class SessionByPath:
    """A session addressed by its device path (exact match)."""

    tty_path: TtyPath

    @property
    def display(self) -> str:
        return self.tty_path


CURRENT_SESSION = CurrentSession()


def session_ref(tty_path: str | None = None) -> SessionRef:
    """Build a session reference from an optional tool argument.

    Args:
        tty_path: Device path such as "/dev/ttys005". None or blank means
            the focused session.
    """
    if tty_path is None or not str(tty_path).strip():
        return CURRENT_SESSION
    return SessionByPath(str(tty_path).strip())


@dataclass(frozen=True)
class ActiveProcess:
    """Point-in-time snapshot of the foreground process owning a session.

    Attributes:
        pid: Process ID of the representative process.
        name: Command name (ps comm).
        cpu_percent_total: Recent CPU usage summed over the foreground group.
    """

    pid: int
    name: str
    cpu_percent_total: float


@dataclass(frozen=True)
class SessionInfo:
    """One session as enumerated from the host application."""

    window: int
    tab: int
    session: int
    tty_path: TtyPath
    name: str
    is_processing: bool

    @property
    def location(self) -> str:
        """Get window:tab.session format (1-based, host order)."""
        return f"{self.window}:{self.tab}.{self.session}"
