"""Tests for the tool surface.

This test suite verifies:
- write_to_terminal reports new line counts and hints
- read_terminal_output defaults and filtering flags
- send_control_character reports the character sent
- ls lists sessions
- Domain errors become error responses, not exceptions
"""

from unittest.mock import patch

from itermtap.bridge import HostApplicationUnavailableError, SessionNotFoundError
from itermtap.commands import ls, read_terminal_output, send_control_character, write_to_terminal
from itermtap.process import CompletionOutcome, CompletionReason, CompletionState, CompletionTimeoutError
from itermtap.terminal import CommandResult
from itermtap.types import CURRENT_SESSION, SessionByPath, SessionInfo


def _result(before, after, buffer="$", command="ls", session="current session"):
    return CommandResult(
        command=command,
        session=session,
        before_lines=before,
        after_lines=after,
        buffer=buffer,
        completion=CompletionOutcome(reason=CompletionReason.CPU_IDLE, elapsed=1.4, busy_polls=2, samples=4),
        elapsed=1.634,
    )


class TestWriteToTerminal:
    """Test the write_to_terminal tool."""

    def test_reports_line_count(self):
        """Test the response names the new line count."""
        with patch("itermtap.commands.write.execute", return_value=_result(10, 13)) as mock_execute:
            response = write_to_terminal(None, "ls")

        mock_execute.assert_called_once_with(CURRENT_SESSION, "ls")
        assert response["elements"][0]["content"].startswith("3 lines were output after sending the command")
        assert "Never assume" in response["elements"][0]["content"]
        assert response["frontmatter"]["output_lines"] == 3
        assert response["frontmatter"]["status"] == "completed"
        assert response["frontmatter"]["completion"] == "cpu_idle"
        assert response["frontmatter"]["elapsed"] == 1.63

    def test_zero_lines(self):
        """Test a cleared buffer reports zero."""
        with patch("itermtap.commands.write.execute", return_value=_result(40, 1)):
            response = write_to_terminal(None, "clear")

        assert response["elements"][0]["content"].startswith("0 lines were output")

    def test_targets_session_by_path(self):
        """Test tty_path selects the session and appears in the hint."""
        result = _result(1, 2, session="/dev/ttys004")
        with patch("itermtap.commands.write.execute", return_value=result) as mock_execute:
            response = write_to_terminal(None, "pwd", tty_path="/dev/ttys004")

        assert mock_execute.call_args[0][0] == SessionByPath("/dev/ttys004")
        assert 'tty_path="/dev/ttys004"' in response["elements"][1]["content"]

    def test_multiline_command_truncated_in_frontmatter(self):
        """Test only the first line of a script is shown."""
        command = "for i in 1 2\ndo echo $i\ndone"
        with patch("itermtap.commands.write.execute", return_value=_result(1, 3, command=command)):
            response = write_to_terminal(None, command)

        assert response["frontmatter"]["command"] == "for i in 1 2..."

    def test_session_not_found(self):
        """Test an unknown device path becomes an error response."""
        error = SessionNotFoundError("/dev/ttys099")
        with patch("itermtap.commands.write.execute", side_effect=error):
            response = write_to_terminal(None, "ls", tty_path="/dev/ttys099")

        assert response["frontmatter"]["status"] == "error"
        assert response["frontmatter"]["error"] == "session_not_found"
        assert response["elements"][0]["content"] == "Error: Session with TTY /dev/ttys099 not found"

    def test_timeout(self):
        """Test max_wait expiry becomes an error response."""
        error = CompletionTimeoutError(120.2, 120.0, CompletionState.SETTLING_IDLE)
        with patch("itermtap.commands.write.execute", side_effect=error):
            response = write_to_terminal(None, "sleep 999")

        assert response["frontmatter"]["error"] == "timeout"


class TestReadTerminalOutput:
    """Test the read_terminal_output tool."""

    def test_defaults(self):
        """Test default line count and filtering come from config."""
        with patch("itermtap.commands.read.read_output", return_value="$ ls\nfile") as mock_read:
            response = read_terminal_output(None)

        mock_read.assert_called_once_with(CURRENT_SESSION, lines=25, filter_base64=True)
        assert response["elements"][0] == {"type": "code_block", "content": "$ ls\nfile", "language": "text"}
        assert response["frontmatter"]["lines"] == 25

    def test_explicit_arguments(self):
        """Test explicit arguments override defaults."""
        with patch("itermtap.commands.read.read_output", return_value="x") as mock_read:
            read_terminal_output(None, lines_of_output=5, tty_path="/dev/ttys002", filter_base64=False)

        mock_read.assert_called_once_with(SessionByPath("/dev/ttys002"), lines=5, filter_base64=False)

    def test_non_positive_uses_default(self):
        """Test zero or negative counts fall back to the default."""
        with patch("itermtap.commands.read.read_output", return_value="x") as mock_read:
            read_terminal_output(None, lines_of_output=0)

        assert mock_read.call_args.kwargs["lines"] == 25

    def test_empty_output(self):
        """Test an empty buffer is shown as a placeholder."""
        with patch("itermtap.commands.read.read_output", return_value=""):
            response = read_terminal_output(None)

        assert response["elements"][0]["content"] == "[No output]"

    def test_host_not_running(self):
        """Test an unavailable host becomes an error response."""
        error = HostApplicationUnavailableError("iTerm2")
        with patch("itermtap.commands.read.read_output", side_effect=error):
            response = read_terminal_output(None)

        assert response["frontmatter"]["error"] == "host_unavailable"


class TestSendControlCharacter:
    """Test the send_control_character tool."""

    def test_sends(self):
        """Test the response names the control character."""
        with patch("itermtap.commands.control.send_control", return_value=3) as mock_send:
            response = send_control_character(None, "c")

        mock_send.assert_called_once_with(CURRENT_SESSION, "c")
        assert response["frontmatter"]["sent"] == "Control-C"
        assert response["frontmatter"]["code"] == 3
        assert response["frontmatter"]["status"] == "sent"

    def test_invalid_letter(self):
        """Test invalid input is reported without touching the bridge."""
        with patch("itermtap.terminal.control.send_control_code") as mock_bridge:
            response = send_control_character(None, "1")

        mock_bridge.assert_not_called()
        assert response["frontmatter"]["error"] == "invalid_input"


class TestLs:
    """Test the ls tool."""

    def _sessions(self):
        return [
            SessionInfo(window=1, tab=1, session=1, tty_path="/dev/ttys001", name="zsh", is_processing=False),
            SessionInfo(window=1, tab=2, session=1, tty_path="/dev/ttys002", name="make", is_processing=True),
        ]

    def test_lists_sessions(self):
        """Test each session becomes a table row."""
        with patch("itermtap.commands.ls.list_sessions", return_value=self._sessions()):
            rows = ls(None)

        assert rows[1] == {"Session": "1:2.1", "TTY": "/dev/ttys002", "Name": "make", "State": "busy"}

    def test_filter_by_tty(self):
        """Test tty_path narrows to one session."""
        with patch("itermtap.commands.ls.list_sessions", return_value=self._sessions()):
            rows = ls(None, tty_path="/dev/ttys001")

        assert [row["TTY"] for row in rows] == ["/dev/ttys001"]

    def test_error_is_empty_table(self):
        """Test bridge failures produce an empty table."""
        with patch("itermtap.commands.ls.list_sessions", side_effect=HostApplicationUnavailableError("iTerm2")):
            assert ls(None) == []
