"""Drive the external ``trunk`` CLI for the fmt and lint phases."""

import subprocess
from typing import Optional

from .config import RunConfig
from .deadline import Deadline
from .exceptions import DeadlineExceeded, TrunkError
from .logging_config import get_logger

logger = get_logger(__name__)


def trunk_fmt_args(config: RunConfig) -> list[str]:
    return ["fmt", *config.trunk_args]


def trunk_check_args(config: RunConfig) -> list[str]:
    """``trunk check`` arguments; lint and all autofix scopes add ``--fix``.

    Which files to check is left to trunk's own hold-the-line logic.
    """
    args = ["check"]
    if config.autofix in ("lint", "all"):
        args.append("--fix")
    args.extend(config.trunk_args)
    return args


def run_trunk(args: list[str], config: RunConfig, deadline: Optional[Deadline] = None) -> None:
    """Run trunk with output streamed to the terminal.

    Raises:
        TrunkError: trunk is missing or exited non-zero
        DeadlineExceeded: the run timed out
    """
    binary = config.trunk_executable
    command = f"{binary} {' '.join(args)}"
    timeout = deadline.timeout_for(command) if deadline is not None else None
    if config.verbose:
        logger.info("Running: %s", command)
    try:
        result = subprocess.run(
            [binary, *args],
            cwd=str(config.repo_root),
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise TrunkError(command, f"executable not found: {e}")
    except subprocess.TimeoutExpired:
        raise DeadlineExceeded(command, deadline.timeout_seconds if deadline else 0)
    if result.returncode != 0:
        raise TrunkError(command, "non-zero exit", returncode=result.returncode)


def run_fmt(config: RunConfig, deadline: Optional[Deadline] = None) -> None:
    run_trunk(trunk_fmt_args(config), config, deadline)


def run_lint(config: RunConfig, deadline: Optional[Deadline] = None) -> None:
    run_trunk(trunk_check_args(config), config, deadline)
