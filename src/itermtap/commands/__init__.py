"""itermtap commands."""

from .write import write_to_terminal
from .read import read_terminal_output
from .control import send_control_character
from .ls import ls

__all__ = ["write_to_terminal", "read_terminal_output", "send_control_character", "ls"]
