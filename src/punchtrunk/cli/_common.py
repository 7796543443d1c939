"""Shared CLI helpers."""

from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from ..config import RunConfig, load_config, split_csv

console = Console()


def resolve_config(config: Optional[Path] = None, **flags: Any) -> RunConfig:
    """Build a RunConfig from CLI options; unset flags defer to files and env."""
    overrides = {k: v for k, v in flags.items() if v is not None}
    if "modes" in overrides:
        overrides["modes"] = split_csv(overrides["modes"])
    if not overrides.get("trunk_args"):
        overrides.pop("trunk_args", None)
    for flag in ("verbose", "json_logs"):
        # Boolean flags only override when switched on
        if overrides.get(flag) is False:
            overrides.pop(flag)
    return load_config(config_file=config, **overrides)
