"""Configuration exceptions: settings files, env vars, flag values."""

from pathlib import Path
from typing import Any

from .base import PunchTrunkError


class ConfigurationError(PunchTrunkError):
    """Raised when settings cannot be assembled into a RunConfig."""


class ConfigFileError(ConfigurationError):
    """A TOML settings file is missing or unparsable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Config file {path}: {reason}", details={"path": str(path)})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A single setting has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(f"{key}={value!r}: {reason}", details={"key": key})
        self.key = key
        self.value = value
        self.reason = reason
