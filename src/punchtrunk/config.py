"""Configuration loading and management for PunchTrunk.

Configuration sources are merged in priority order:
    1. Defaults (defined in RunConfig)
    2. Project config (./punchtrunk.toml)
    3. Explicit config file (--config)
    4. Environment variables (PUNCHTRUNK_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, modes=["hotspots"])
    >>> config.verbose
    True
    >>> config.modes
    ['hotspots']
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

AutofixScope = Literal["none", "fmt", "lint", "all"]

KNOWN_MODES = ("fmt", "lint", "hotspots")
AUTOFIX_SCOPES = ("none", "fmt", "lint", "all")

# Hard ceiling on emitted hotspots; larger reports carry no extra signal
MAX_HOTSPOTS = 500

PROJECT_CONFIG_NAME = "punchtrunk.toml"
ENV_PREFIX = "PUNCHTRUNK_"

# Runtime kind of every RunConfig field, checked before value validation
_FIELD_KINDS: dict[str, type] = {
    "modes": list,
    "autofix": str,
    "timeout_seconds": int,
    "base_branch": str,
    "churn_window": str,
    "max_hotspots": int,
    "workers": int,
    "repo_path": str,
    "sarif_out": str,
    "tmp_dir": str,
    "trunk_binary": str,
    "trunk_args": list,
    "verbose": bool,
    "json_logs": bool,
}


@dataclass(frozen=True)
class RunConfig:
    """Configuration for one PunchTrunk run.

    Attributes:
        Phases:
            modes: Phases to run, in order (fmt, lint, hotspots)
            autofix: Autofix scope passed on to trunk (none|fmt|lint|all)
            timeout_seconds: Overall timeout for external calls (0 = none)

        Hotspots:
            base_branch: Ref that the change set is diffed against
            churn_window: ``git log --since`` window for churn
            max_hotspots: Maximum results kept in the report
            workers: Threads for the complexity pass (1 = sequential)
            repo_path: Repository root that git runs in
            sarif_out: Report destination ("" disables writing)
            tmp_dir: Root for fallback output ("" = system temp dir)

        Trunk:
            trunk_binary: Explicit trunk executable ("" = ``trunk`` on PATH)
            trunk_args: Extra arguments appended to every trunk call

        Output control:
            verbose: Verbose logs, including degraded-history notices
            json_logs: Emit JSON lines instead of rich text
    """

    # Phases
    modes: list[str] = field(default_factory=lambda: list(KNOWN_MODES))
    autofix: AutofixScope = "fmt"
    timeout_seconds: int = 900

    # Hotspots
    base_branch: str = "origin/main"
    churn_window: str = "90 days"
    max_hotspots: int = MAX_HOTSPOTS
    workers: int = 1
    repo_path: str = "."
    sarif_out: str = "reports/hotspots.sarif"
    tmp_dir: str = ""

    # Trunk
    trunk_binary: str = ""
    trunk_args: list[str] = field(default_factory=list)

    # Output control
    verbose: bool = False
    json_logs: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._check_types()
        if not self.modes:
            raise InvalidConfigError("modes", self.modes, "at least one mode is required")
        if self.autofix not in AUTOFIX_SCOPES:
            raise InvalidConfigError(
                "autofix", self.autofix, f"expected one of {', '.join(AUTOFIX_SCOPES)}"
            )
        if self.timeout_seconds < 0:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be non-negative")
        if not 1 <= self.max_hotspots <= MAX_HOTSPOTS:
            raise InvalidConfigError(
                "max_hotspots", self.max_hotspots, f"must be between 1 and {MAX_HOTSPOTS}"
            )
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if not self.churn_window.strip():
            raise InvalidConfigError("churn_window", self.churn_window, "must not be empty")

    def _check_types(self) -> None:
        """Reject values of the wrong kind, e.g. ``churn_window = 90`` in TOML."""
        for name, expected in _FIELD_KINDS.items():
            value = getattr(self, name)
            if expected is list:
                ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
                kind = "a list of strings"
            elif expected is int:
                ok = isinstance(value, int) and not isinstance(value, bool)
                kind = "an integer"
            else:
                ok = isinstance(value, expected)
                kind = "a boolean" if expected is bool else "a string"
            if not ok:
                raise InvalidConfigError(name, value, f"expected {kind}")

    @property
    def trunk_executable(self) -> str:
        return self.trunk_binary or "trunk"

    @property
    def repo_root(self) -> Path:
        return Path(self.repo_path).resolve()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> RunConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset flags do not mask lower layers

    Returns:
        Validated RunConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid
    """
    merged: dict[str, Any] = {}

    # 1. Project config
    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_read_layer(project_config))

    # 2. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "not found")
        merged.update(_read_layer(config_file))

    # 3. Environment variables
    merged.update(_load_env_vars())

    # 4. CLI overrides
    merged.update({k: v for k, v in overrides.items() if v is not None})

    for list_field in ("modes", "trunk_args"):
        value = merged.get(list_field)
        if isinstance(value, str):
            merged[list_field] = split_csv(value)
    if isinstance(merged.get("autofix"), str):
        merged["autofix"] = merged["autofix"].strip().lower()

    try:
        return RunConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def split_csv(value: str) -> list[str]:
    """Split a comma-separated string, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from PUNCHTRUNK_* environment variables.

    Every RunConfig field maps to ``PUNCHTRUNK_<FIELD>``; list fields take
    comma-separated values.

    Returns:
        Dict of field_name -> parsed_value for any PUNCHTRUNK_* vars found.
    """
    type_hints = get_type_hints(RunConfig)

    result: dict[str, Any] = {}

    for field_name in RunConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None or not env_value.strip():
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value.strip(), type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return split_csv(value)

    # Bool: accept true/false/1/0/yes/no
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like AutofixScope)
    if type_hint is str or origin is Literal:
        return value

    return None


def _read_layer(path: Path) -> dict:
    """Settings from one TOML layer; parse errors become ConfigFileError."""
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except (OSError, ValueError) as e:
        raise ConfigFileError(path, str(e))


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Accept either a flat file or a [punchtrunk] table
    section = data.get("punchtrunk")
    if isinstance(section, dict):
        return dict(section)
    return data


def tmp_dir_path(config: Optional[RunConfig]) -> Path:
    """Where fallback output would go, without touching the filesystem."""
    if config is None or not config.tmp_dir.strip():
        return Path(tempfile.gettempdir())
    base = Path(config.tmp_dir.strip())
    if not base.is_absolute():
        base = Path.cwd() / base
    return Path(os.path.normpath(base))


def resolve_tmp_dir(config: Optional[RunConfig]) -> Path:
    """Directory used for fallback output.

    Relative ``tmp_dir`` values are anchored at the working directory and
    created on demand. Any failure falls back to the system temp dir.
    """
    system_tmp = Path(tempfile.gettempdir())
    base = tmp_dir_path(config)
    if base == system_tmp:
        return system_tmp
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("tmp-dir resolution failed: ensure tmp-dir %s: %s", base, e)
        return system_tmp
    return base
