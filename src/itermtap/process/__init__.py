"""Process inspection for terminal sessions.

PUBLIC API:
  - probe_active_process: Foreground process of a device path
  - ProbeError: Process table could not be inspected
  - CompletionDetector: Wait for a dispatched command to finish
  - CompletionOutcome, CompletionReason, CompletionState, CompletionTimeoutError
"""

from .probe import probe_active_process, ProbeError
from .completion import (
    CompletionDetector,
    CompletionOutcome,
    CompletionReason,
    CompletionState,
    CompletionTimeoutError,
)

__all__ = [
    "probe_active_process",
    "ProbeError",
    "CompletionDetector",
    "CompletionOutcome",
    "CompletionReason",
    "CompletionState",
    "CompletionTimeoutError",
]
