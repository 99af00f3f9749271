"""Tests for command dispatch.

This test suite verifies:
- Before/after buffer line diffing
- Strict step ordering (snapshot, send, wait, snapshot)
- Multi-line command encoding on the way to the bridge
- Error propagation from the bridge and detector
"""

from unittest.mock import patch

import pytest

from itermtap.bridge import BridgeInvocationError
from itermtap.config import DetectorConfig
from itermtap.process import CompletionReason, CompletionTimeoutError
from itermtap.terminal import execute
from itermtap.types import CURRENT_SESSION, SessionByPath


def _run(clock, probe, buffers, busy=False, ref=CURRENT_SESSION, config=None, command="ls"):
    events = []
    snapshots = iter(buffers)

    def read_buffer(_ref):
        events.append("read")
        return next(snapshots)

    def send_text(_ref, encoded):
        events.append(("send", encoded))

    def is_processing(_ref):
        events.append("busy")
        return busy

    def get_tty(_ref):
        events.append("tty")
        return "/dev/ttys005"

    with (
        patch("itermtap.terminal.execution.read_buffer", side_effect=read_buffer),
        patch("itermtap.terminal.execution.send_text", side_effect=send_text),
        patch("itermtap.terminal.execution.is_processing", side_effect=is_processing),
        patch("itermtap.terminal.execution.get_tty", side_effect=get_tty),
    ):
        result = execute(
            ref,
            command,
            config=config or DetectorConfig(),
            probe=probe,
            sleep=clock.sleep,
            clock=clock,
        )
    return result, events


class TestLineDiff:
    """Test output line accounting."""

    def test_unchanged_buffer(self, clock, scripted_probe):
        """Test an unchanged buffer reports zero lines."""
        result, _ = _run(clock, scripted_probe([None]), ["$ true\n$", "$ true\n$"])

        assert result.output_lines == 0
        assert result.output() == ""

    def test_growth(self, clock, scripted_probe):
        """Test new lines are counted and sliced from the after-snapshot."""
        before = "$"
        after = "$ ls\na.txt\nb.txt\n$"

        result, _ = _run(clock, scripted_probe([None]), [before, after])

        assert result.before_lines == 1
        assert result.after_lines == 4
        assert result.output_lines == 3
        assert result.output() == after

    def test_shrink_is_zero(self, clock, scripted_probe):
        """Test a cleared buffer never reports negative output."""
        result, _ = _run(clock, scripted_probe([None]), ["a\nb\nc\nd", "$"], command="clear")

        assert result.output_lines == 0

    def test_metadata(self, clock, scripted_probe):
        """Test result carries the command, session and completion."""
        ref = SessionByPath("/dev/ttys005")

        result, _ = _run(clock, scripted_probe([None]), ["$", "$"], ref=ref, command="pwd")

        assert result.command == "pwd"
        assert result.session == "/dev/ttys005"
        assert result.completion.reason is CompletionReason.NO_PROCESS
        assert result.elapsed == pytest.approx(0.2)


class TestOrdering:
    """Test dispatch step order."""

    def test_steps_in_order(self, clock, scripted_probe):
        """Test snapshot, send, busy poll, tty, snapshot."""
        _, events = _run(clock, scripted_probe([None]), ["$", "$"])

        kinds = [e if isinstance(e, str) else e[0] for e in events]
        assert kinds == ["read", "send", "busy", "tty", "read"]

    def test_multiline_command_encoded(self, clock, scripted_probe):
        """Test multi-line commands reach the bridge as an expression."""
        _, events = _run(clock, scripted_probe([None]), ["$", "$"], command="echo a\necho b")

        encoded = events[1][1]
        assert encoded.multiline
        assert encoded.value == '"echo a" & return & "echo b"'

    def test_waits_for_process(self, clock, scripted_probe):
        """Test the final snapshot is taken only after the process settles."""
        probe = scripted_probe([30.0, 0.2, 0.2, 0.2])

        result, _ = _run(clock, probe, ["$", "$ make\nok\n$"], command="make")

        assert result.completion.samples == 4
        assert result.output_lines == 2


class TestErrors:
    """Test error propagation."""

    def test_bridge_failure_propagates(self, clock, scripted_probe):
        """Test send failures are raised to the caller."""
        with patch("itermtap.terminal.execution.read_buffer", return_value="$"):
            with patch(
                "itermtap.terminal.execution.send_text",
                side_effect=BridgeInvocationError("send", "boom"),
            ):
                with pytest.raises(BridgeInvocationError):
                    execute(CURRENT_SESSION, "ls", probe=scripted_probe([None]), sleep=clock.sleep, clock=clock)

    def test_timeout_propagates(self, clock, scripted_probe):
        """Test max_wait expiry is raised to the caller."""
        with pytest.raises(CompletionTimeoutError):
            _run(clock, scripted_probe([99.0]), ["$", "$"], config=DetectorConfig(max_wait=1.0))
