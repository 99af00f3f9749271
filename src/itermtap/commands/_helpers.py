"""Shared helper functions for commands.

PUBLIC API:
  - build_hint: Build "read the output" hint for write_to_terminal
  - truncate_command: Shorten a command for frontmatter display
"""

from typing import Optional

__all__ = ["build_hint", "truncate_command"]


def build_hint(lines: int, tty_path: Optional[str]) -> dict[str, str]:
    """Build "read the output" hint for action commands.

    Args:
        lines: Number of new lines to read.
        tty_path: Session device path, None for the focused session.

    Returns:
        Markdown blockquote element with hint
    """
    target = f', tty_path="{tty_path}"' if tty_path else ""
    return {
        "type": "blockquote",
        "content": f"Use `read_terminal_output(lines_of_output={lines}{target})` to see the result",
    }


def truncate_command(command: str, limit: int = 50) -> str:
    """Shorten a command to one display line."""
    first_line = command.split("\n", 1)[0]
    if len(first_line) > limit or first_line != command:
        return first_line[:limit] + "..."
    return first_line
