"""Core bridge operations - shared utilities for all bridge modules.

PUBLIC API:
  - run_osascript: Execute an AppleScript and return the raw result
  - invoke: Execute an AppleScript, raising classified bridge errors
  - parse_bool: Parse an AppleScript boolean result
"""

import logging
import re
import shlex
import subprocess
from typing import Optional, Tuple

from ..config import get_config_manager
from ..types import BridgeOperation
from .exceptions import BridgeInvocationError, HostApplicationUnavailableError, SessionNotFoundError

logger = logging.getLogger(__name__)

_SESSION_NOT_FOUND = re.compile(r"Session with TTY (.*?) not found")
_APP_NOT_RUNNING = re.compile(r"isn[’']t running|\(-600\)")


def run_osascript(script: str, timeout: Optional[float] = None) -> Tuple[int, str, str]:
    """Run an AppleScript through osascript, return (returncode, stdout, stderr).

    The script is passed inside single quotes on a /bin/sh command line, so
    every single quote in it must already be written as '\\''.

    Args:
        script: AppleScript source.
        timeout: Seconds before the call is abandoned. Defaults to config.

    Raises:
        subprocess.TimeoutExpired: If osascript does not return in time.
    """
    manager = get_config_manager()
    cmd = ["/bin/sh", "-c", f"{shlex.quote(manager.osascript)} -e '{script}'"]
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout if timeout is not None else manager.bridge_timeout,
    )
    return result.returncode, result.stdout, result.stderr


def _classify_failure(operation: BridgeOperation, stderr: str, tty_path: Optional[str]) -> Exception:
    """Map osascript diagnostics onto the bridge error taxonomy."""
    detail = stderr.strip() or "osascript exited with an error"

    match = _SESSION_NOT_FOUND.search(stderr)
    if match:
        return SessionNotFoundError(tty_path or match.group(1))

    if _APP_NOT_RUNNING.search(stderr):
        return HostApplicationUnavailableError(get_config_manager().application, detail)

    return BridgeInvocationError(operation, detail)


def invoke(script: str, operation: BridgeOperation, tty_path: Optional[str] = None) -> str:
    """Run a script and return its result text.

    Args:
        script: AppleScript source (shell-quoted, see run_osascript).
        operation: What the call is doing, for error context.
        tty_path: Device path the script targets, if any.

    Returns:
        Script result with the trailing newline removed.

    Raises:
        SessionNotFoundError: If the targeted device path is not open.
        HostApplicationUnavailableError: If the host application is not running.
        BridgeInvocationError: For any other failure.
    """
    logger.debug(f"osascript {operation} -> {tty_path or 'current session'}")

    try:
        code, stdout, stderr = run_osascript(script)
    except subprocess.TimeoutExpired as e:
        raise BridgeInvocationError(operation, f"timed out after {e.timeout}s") from e
    except OSError as e:
        raise BridgeInvocationError(operation, str(e)) from e

    if code != 0:
        error = _classify_failure(operation, stderr, tty_path)
        if isinstance(error, BridgeInvocationError):
            logger.error(str(error))
        else:
            logger.warning(str(error))
        raise error

    return stdout[:-1] if stdout.endswith("\n") else stdout


def parse_bool(result: str) -> bool:
    """Parse an AppleScript boolean result ("true"/"false")."""
    return result.strip().lower() == "true"
