"""Foreground process probe using ps.

PUBLIC API:
  - ProcessRow: One ps row for a process attached to a terminal
  - interactive_group: Process group of the session's interactive shell
  - ProbeError: Raised when the process table cannot be inspected
  - probe_active_process: Get the foreground process of a device path
  - pick_active_process: Reduce ps rows to one representative process
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..config import get_config_manager
from ..types import KNOWN_SHELLS, ActiveProcess

logger = logging.getLogger(__name__)


class ProbeError(Exception):
    """Raised when the process table cannot be inspected."""

    pass


@dataclass
class ProcessRow:
    """One ps row for a process attached to a terminal.

    Attributes:
        pid: Process ID.
        ppid: Parent process ID.
        pgid: Process group ID.
        tpgid: Foreground process group of the controlling terminal.
        cpu_percent: Recent CPU usage (ps pcpu, decaying average).
        name: Command name (basename of comm).
    """

    pid: int
    ppid: int
    pgid: int
    tpgid: int
    cpu_percent: float
    name: str

    @property
    def is_foreground(self) -> bool:
        """Check if process belongs to the terminal's foreground group."""
        return self.tpgid > 0 and self.pgid == self.tpgid

    @property
    def is_shell(self) -> bool:
        """Check if process is a known shell (login shells carry a leading dash)."""
        return self.name.lstrip("-") in KNOWN_SHELLS


def _tty_name(tty_path: str) -> str:
    """Strip /dev/ for ps -t (e.g., /dev/ttys005 -> ttys005)."""
    return tty_path[len("/dev/") :] if tty_path.startswith("/dev/") else tty_path


def parse_ps_output(output: str) -> List[ProcessRow]:
    """Parse `ps -o pid=,ppid=,pgid=,tpgid=,pcpu=,comm=` output.

    Malformed rows are skipped.
    """
    rows = []
    for line in output.splitlines():
        fields = line.split(None, 5)
        if len(fields) < 6:
            continue
        try:
            rows.append(
                ProcessRow(
                    pid=int(fields[0]),
                    ppid=int(fields[1]),
                    pgid=int(fields[2]),
                    tpgid=int(fields[3]),
                    cpu_percent=float(fields[4].replace(",", ".")),
                    name=fields[5].strip().rsplit("/", 1)[-1],
                )
            )
        except ValueError:
            logger.debug(f"Skipping malformed ps row: {line!r}")
    return rows


def interactive_group(rows: List[ProcessRow]) -> Optional[int]:
    """Find the process group of the session's interactive shell.

    The root is the oldest row whose parent is not on the terminal (the
    terminal application spawned it). A `login` root is followed down to the
    shell it started.

    Returns:
        The shell's process group, or None when no root can be found.
    """
    pids = {row.pid for row in rows}
    roots = [row for row in rows if row.ppid not in pids]
    if not roots:
        return None

    shell = min(roots, key=lambda row: row.pid)
    while shell.name.lstrip("-") == "login":
        child = next((row for row in rows if row.ppid == shell.pid and row.is_shell), None)
        if child is None:
            break
        shell = child
    return shell.pgid


def pick_active_process(rows: List[ProcessRow], skip_processes: List[str]) -> Optional[ActiveProcess]:
    """Reduce ps rows to the process owning the terminal's input.

    The prompt is idle only when the terminal's foreground group is the
    interactive shell's own group. A script interpreter (`bash build.sh`)
    runs in a group of its own and counts as active even with no child.

    Args:
        rows: All processes attached to the terminal.
        skip_processes: Wrapper names to pass over when choosing a representative.

    Returns:
        ActiveProcess with CPU summed over the foreground group, or None
        when the interactive shell owns the terminal (idle prompt).
    """
    foreground = [row for row in rows if row.is_foreground]
    if not foreground:
        return None

    shell_group = interactive_group(rows)
    if shell_group is None:
        # No visible root; fall back to judging by name
        if all(row.is_shell for row in foreground):
            return None
    elif foreground[0].tpgid == shell_group:
        return None

    candidates = [row for row in foreground if not row.is_shell]
    skip = set(skip_processes)
    representative = next(
        (row for row in candidates if row.name not in skip),
        candidates[0] if candidates else foreground[0],
    )

    return ActiveProcess(
        pid=representative.pid,
        name=representative.name,
        cpu_percent_total=sum(row.cpu_percent for row in foreground),
    )


def probe_active_process(tty_path: str) -> Optional[ActiveProcess]:
    """Get the foreground process attached to a terminal device.

    Args:
        tty_path: Device path such as "/dev/ttys005".

    Returns:
        ActiveProcess, or None when the shell prompt is idle.

    Raises:
        ProbeError: If ps cannot be run or reports an error.
    """
    cmd = ["ps", "-t", _tty_name(tty_path), "-o", "pid=,ppid=,pgid=,tpgid=,pcpu=,comm="]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ProbeError(f"ps failed for {tty_path}: {e}") from e

    # ps exits 1 with no output when nothing is attached
    if result.returncode != 0 and result.stderr.strip():
        raise ProbeError(f"ps failed for {tty_path}: {result.stderr.strip()}")

    return pick_active_process(parse_ps_output(result.stdout), get_config_manager().skip_processes)
