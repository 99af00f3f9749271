"""Buffer reading - whole-buffer snapshots and trailing-line slices.

PUBLIC API:
  - read_buffer: Fresh snapshot of a session's text
  - count_lines: Line count used for before/after diffs
  - tail_lines: Trailing lines of a buffer
  - read_output: Trailing lines of a session, optionally filtered
"""

from typing import Optional

from ..bridge import get_contents
from ..filters import filter_base64_content
from ..types import SessionRef


def read_buffer(ref: SessionRef) -> str:
    """Get the current text of a session, stripped of surrounding whitespace."""
    return get_contents(ref).strip()


def count_lines(buffer: str) -> int:
    """Count lines the way before/after diffs count them (split on newlines)."""
    return len(buffer.split("\n"))


def tail_lines(buffer: str, lines: Optional[int]) -> str:
    """Return the trailing lines of a buffer.

    The slice keeps one line more than requested, so a command's echoed
    prompt line stays attached to its output.

    Args:
        buffer: Full buffer text.
        lines: Lines wanted. None or non-positive returns the whole buffer.
    """
    if not lines or lines <= 0:
        return buffer
    return "\n".join(buffer.split("\n")[-(lines + 1) :])


def read_output(ref: SessionRef, lines: Optional[int] = None, filter_base64: bool = False) -> str:
    """Read the trailing lines of a session.

    Args:
        ref: Target session.
        lines: Lines wanted. None returns the whole buffer.
        filter_base64: Replace base64 payloads and inline images with placeholders.
    """
    output = tail_lines(read_buffer(ref), lines)
    if filter_base64:
        output = filter_base64_content(output)
    return output
