"""Configuration management for itermtap.

Settings live in the [default] table of the nearest itermtap.toml: host
application and osascript path, bridge timeout, completion detector timing,
read defaults and wrapper processes to skip. Every key is optional.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


_DEFAULT_SKIP_PROCESSES = ["uv", "npm", "npx", "yarn", "poetry", "pipenv", "nix-shell"]


@dataclass(frozen=True)
class DetectorConfig:
    """Timing knobs for command completion detection (seconds).

    Attributes:
        busy_poll_interval: Delay between "is processing" checks.
        probe_interval: Delay between foreground process probes.
        cpu_threshold: CPU percent below which a sample counts as idle.
        idle_debounce: Accumulated idle time required before ready.
        settle_delay: Pause after ready before the final buffer read.
        max_wait: Ceiling on total wait, None for unbounded.
    """

    busy_poll_interval: float = 0.1
    probe_interval: float = 0.35
    cpu_threshold: float = 1.0
    idle_debounce: float = 1.0
    settle_delay: float = 0.2
    max_wait: Optional[float] = None

    def __post_init__(self):
        for name in ("busy_poll_interval", "probe_interval", "cpu_threshold", "idle_debounce", "settle_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.max_wait is not None and self.max_wait <= 0:
            raise ValueError("max_wait must be positive or unset")


CONFIG_FILENAME = "itermtap.toml"


def _find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest itermtap.toml, starting at start (default: cwd)."""
    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _load_config(path: Optional[Path]) -> dict:
    """Read an itermtap.toml; a missing file means built-in defaults only."""
    if path is None or not path.is_file():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    logger.debug(f"Loaded configuration from {path}")
    return data


class ConfigManager:
    """Manages configuration for itermtap."""

    def __init__(self, path: Optional[Path] = None):
        self._config_file = path or _find_config_file()
        self.data = _load_config(self._config_file)
        self._default_config = self.data.get("default", {})

    @property
    def application(self) -> str:
        """Name of the host terminal application."""
        return self._default_config.get("application", "iTerm2")

    @property
    def osascript(self) -> str:
        """Path to the osascript binary."""
        return self._default_config.get("osascript", "/usr/bin/osascript")

    @property
    def bridge_timeout(self) -> float:
        """Timeout in seconds for a single osascript call."""
        return float(self._default_config.get("bridge_timeout", 30.0))

    @property
    def read_lines(self) -> int:
        """Default number of trailing lines for read_terminal_output."""
        return int(self._default_config.get("read_lines", 25))

    @property
    def filter_base64(self) -> bool:
        """Whether reads elide base64 payloads by default."""
        return bool(self._default_config.get("filter_base64", True))

    @property
    def skip_processes(self) -> list[str]:
        """Get list of wrapper processes to skip in detection."""
        return self._default_config.get("skip_processes", _DEFAULT_SKIP_PROCESSES)

    def get_detector_config(self) -> DetectorConfig:
        """Get completion detector timing.

        Returns:
            DetectorConfig with file overrides applied to the defaults.
        """
        defaults = DetectorConfig()
        max_wait = self._default_config.get("max_wait")

        return DetectorConfig(
            busy_poll_interval=float(self._default_config.get("busy_poll_interval", defaults.busy_poll_interval)),
            probe_interval=float(self._default_config.get("probe_interval", defaults.probe_interval)),
            cpu_threshold=float(self._default_config.get("cpu_threshold", defaults.cpu_threshold)),
            idle_debounce=float(self._default_config.get("idle_debounce", defaults.idle_debounce)),
            settle_delay=float(self._default_config.get("settle_delay", defaults.settle_delay)),
            max_wait=float(max_wait) if max_wait is not None else None,
        )


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_detector_config() -> DetectorConfig:
    """Get completion detector configuration."""
    return get_config_manager().get_detector_config()
