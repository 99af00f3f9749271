"""Command completion detection - deciding when the shell is ready again.

The terminal offers no completion event. Two signals are polled instead: the
session's busy flag, then the CPU usage of whatever process owns the
terminal's foreground. A foreground process must stay below the CPU threshold
for the whole debounce window before the command counts as finished, since a
process blocked on I/O can report a single near-zero sample mid-run.

PUBLIC API:
  - CompletionDetector: Polling state machine with injectable time and probe
  - CompletionState: Busy -> SettlingIdle -> Ready
  - CompletionReason: Why the detector declared readiness
  - CompletionOutcome: Result of a completed wait
  - CompletionTimeoutError: Raised when max_wait is exceeded
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config import DetectorConfig, get_detector_config
from ..types import ActiveProcess
from .probe import ProbeError, probe_active_process

logger = logging.getLogger(__name__)


class CompletionState(Enum):
    """Detector states."""

    BUSY = "busy"
    SETTLING_IDLE = "settling_idle"
    READY = "ready"


class CompletionReason(Enum):
    """Why the detector reached READY."""

    NO_PROCESS = "no_process"  # nothing in the foreground, shell prompt
    CPU_IDLE = "cpu_idle"  # foreground process stayed idle for the debounce window
    PROBE_FAILED = "probe_failed"  # fail-open: the probe could not inspect the process


class CompletionTimeoutError(TimeoutError):
    """Raised when a command does not complete within max_wait."""

    def __init__(self, elapsed: float, limit: float, state: CompletionState):
        self.elapsed = elapsed
        self.limit = limit
        self.state = state
        super().__init__(f"Command still running after {elapsed:.1f}s (limit {limit:.1f}s, state {state.value})")


@dataclass
class CompletionOutcome:
    """Result of a completed wait.

    Attributes:
        reason: Why readiness was declared.
        elapsed: Seconds from start of wait to READY, excluding the settle delay.
        busy_polls: Number of busy-flag checks made.
        samples: Number of process probes made.
        last_process: Last foreground process seen, if any.
    """

    reason: CompletionReason
    elapsed: float
    busy_polls: int
    samples: int
    last_process: Optional[ActiveProcess] = None

    @property
    def failed_open(self) -> bool:
        """Check if readiness came from the fail-open policy."""
        return self.reason is CompletionReason.PROBE_FAILED


class CompletionDetector:
    """Polls a session until a dispatched command has finished.

    Args:
        is_busy: Returns the session's busy flag.
        resolve_tty: Returns the session's device path.
        probe: Returns the foreground process for a device path, None when
            idle; raises ProbeError when the process table is unreadable.
        config: Timing; defaults to the loaded configuration.
        sleep: Sleep function (seconds).
        clock: Monotonic clock (seconds).
    """

    def __init__(
        self,
        is_busy: Callable[[], bool],
        resolve_tty: Callable[[], str],
        probe: Callable[[str], Optional[ActiveProcess]] = probe_active_process,
        config: Optional[DetectorConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._is_busy = is_busy
        self._resolve_tty = resolve_tty
        self._probe = probe
        self.config = config or get_detector_config()
        self._sleep = sleep
        self._clock = clock

        self.state = CompletionState.BUSY
        self.idle_time = 0.0
        self._start = 0.0

    def _transition(self, state: CompletionState) -> None:
        logger.debug(f"completion: {self.state.value} -> {state.value}")
        self.state = state

    def _check_deadline(self) -> None:
        limit = self.config.max_wait
        if limit is None:
            return
        elapsed = self._clock() - self._start
        if elapsed >= limit:
            raise CompletionTimeoutError(elapsed, limit, self.state)

    def observe(self, process: Optional[ActiveProcess]) -> Optional[CompletionReason]:
        """Feed one probe result into the debounce.

        Args:
            process: Probe result for this sample.

        Returns:
            Reason when the sample completes the wait, otherwise None.
        """
        if process is None:
            return CompletionReason.NO_PROCESS

        if process.cpu_percent_total < self.config.cpu_threshold:
            self.idle_time += self.config.probe_interval
            if self.idle_time >= self.config.idle_debounce:
                return CompletionReason.CPU_IDLE
        else:
            self.idle_time = 0.0

        return None

    def wait(self) -> CompletionOutcome:
        """Block until the session is ready for input.

        Runs the busy-flag phase, then the CPU debounce, then the settle delay.

        Returns:
            CompletionOutcome describing how readiness was reached.

        Raises:
            CompletionTimeoutError: If max_wait is configured and exceeded.
            BridgeError: If the busy flag or device path cannot be read.
        """
        self._start = self._clock()
        self.state = CompletionState.BUSY
        self.idle_time = 0.0
        busy_polls = 0

        while True:
            busy_polls += 1
            if not self._is_busy():
                break
            self._check_deadline()
            self._sleep(self.config.busy_poll_interval)

        tty_path = self._resolve_tty()
        self._transition(CompletionState.SETTLING_IDLE)

        samples = 0
        process = None
        while True:
            samples += 1
            try:
                process = self._probe(tty_path)
            except ProbeError as e:
                logger.warning(f"Process probe failed for {tty_path}, treating command as complete: {e}")
                reason = CompletionReason.PROBE_FAILED
                break

            reason = self.observe(process)
            if reason is not None:
                break

            self._check_deadline()
            self._sleep(self.config.probe_interval)

        elapsed = self._clock() - self._start
        self._transition(CompletionState.READY)
        self._sleep(self.config.settle_delay)

        return CompletionOutcome(
            reason=reason,
            elapsed=elapsed,
            busy_polls=busy_polls,
            samples=samples,
            last_process=process,
        )
