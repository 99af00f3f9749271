"""Pytest configuration and fixtures for itermtap tests.

No test talks to iTerm2 or runs ps; the bridge and probe are faked here.
"""

from typing import Iterable, Optional

import pytest

from itermtap import config as config_module
from itermtap.config import ConfigManager
from itermtap.process import ProbeError
from itermtap.types import ActiveProcess


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Use built-in defaults, ignoring any itermtap.toml on the machine."""
    config_module._config_manager = ConfigManager(path=tmp_path / "missing.toml")
    yield config_module._config_manager
    config_module._config_manager = None


class FakeClock:
    """Monotonic clock advanced only by sleep()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    """Fake clock whose sleep advances time instantly."""
    return FakeClock()


PROBE_FAILS = object()


class ScriptedProbe:
    """Probe returning a fixed sequence of samples.

    Each sample is a CPU percent, None for "no foreground process", or
    PROBE_FAILS to raise ProbeError. The last sample repeats forever.
    """

    def __init__(self, samples: Iterable):
        self.samples = list(samples)
        self.calls: list[str] = []

    def __call__(self, tty_path: str) -> Optional[ActiveProcess]:
        self.calls.append(tty_path)
        index = min(len(self.calls), len(self.samples)) - 1
        sample = self.samples[index]
        if sample is PROBE_FAILS:
            raise ProbeError("ps: permission denied")
        if sample is None:
            return None
        return ActiveProcess(pid=4242, name="make", cpu_percent_total=sample)


@pytest.fixture
def scripted_probe():
    """Factory for ScriptedProbe."""
    return ScriptedProbe
