"""Command dispatch with completion detection and buffer diffing.

PUBLIC API:
  - CommandResult: Outcome of one dispatched command
  - execute: Type a command into a session and wait for it to finish
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..bridge import encode_text, get_tty, is_processing, send_text
from ..config import DetectorConfig
from ..process import CompletionDetector, CompletionOutcome, probe_active_process
from ..types import ActiveProcess, SessionRef
from .output import count_lines, read_buffer, tail_lines

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one dispatched command.

    The line count is a diff of buffer line counts taken before and after the
    command, not a text diff; background writes to the same session can
    inflate or deflate it.

    Attributes:
        command: Text that was sent.
        session: Display name of the target session.
        before_lines: Buffer line count before sending.
        after_lines: Buffer line count after completion.
        buffer: Buffer snapshot taken after completion.
        completion: How the detector decided the command finished.
        elapsed: Seconds from first snapshot to last.
    """

    command: str
    session: str
    before_lines: int
    after_lines: int
    buffer: str
    completion: CompletionOutcome
    elapsed: float

    @property
    def output_lines(self) -> int:
        """Number of new lines, never negative."""
        return max(0, self.after_lines - self.before_lines)

    def output(self) -> str:
        """Trailing lines of the after-snapshot covering the new output."""
        if not self.output_lines:
            return ""
        return tail_lines(self.buffer, self.output_lines)


def execute(
    ref: SessionRef,
    command: str,
    config: Optional[DetectorConfig] = None,
    probe: Callable[[str], Optional[ActiveProcess]] = probe_active_process,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> CommandResult:
    """Type a command into a session and wait until the shell is ready again.

    Steps run strictly in order: snapshot, encode, send, wait for the busy
    flag to clear, wait for the foreground process to go idle, settle,
    snapshot again. This types literal keystrokes; there is no dry run.

    Args:
        ref: Target session.
        command: Text to type, may contain line breaks.
        config: Detector timing. Defaults to the loaded configuration.
        probe: Foreground process probe.
        sleep: Sleep function for polling.
        clock: Monotonic clock for timing.

    Returns:
        CommandResult with the before/after line counts.

    Raises:
        BridgeError: If the session cannot be reached.
        CompletionTimeoutError: If max_wait is configured and exceeded.
    """
    start = clock()

    before = read_buffer(ref)
    before_lines = count_lines(before)

    encoded = encode_text(command)
    logger.info(f"Sending {'multi-line ' if encoded.multiline else ''}command to {ref.display}")
    send_text(ref, encoded)

    detector = CompletionDetector(
        is_busy=lambda: is_processing(ref),
        resolve_tty=lambda: get_tty(ref),
        probe=probe,
        config=config,
        sleep=sleep,
        clock=clock,
    )
    completion = detector.wait()

    after = read_buffer(ref)
    result = CommandResult(
        command=command,
        session=ref.display,
        before_lines=before_lines,
        after_lines=count_lines(after),
        buffer=after,
        completion=completion,
        elapsed=clock() - start,
    )
    logger.info(
        f"Command in {ref.display} finished ({completion.reason.value}) with {result.output_lines} new lines"
    )
    return result
