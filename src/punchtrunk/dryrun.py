"""Preview of what a run would execute, without executing anything."""

from __future__ import annotations

import os
import shlex
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .config import RunConfig, tmp_dir_path
from .hotspots.changeset import diff_attempts
from .hotspots.churn import churn_attempts
from .logging_config import get_logger, log_event
from .report import fallback_report_path
from .trunk import trunk_check_args, trunk_fmt_args
from .vcs import GitClient

logger = get_logger(__name__)


@dataclass
class PlannedMode:
    name: str
    description: str
    commands: list[list[str]] = field(default_factory=list)


@dataclass
class TrunkLocation:
    command: str
    source: str
    path: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.path is not None


@dataclass
class DryRunPlan:
    """Everything a run would do, in execution order."""

    trunk: TrunkLocation
    repo_root: Path
    trunk_args: list[str]
    sarif_out: str
    tmp_dir: Path
    fallback_report: Optional[Path]
    modes: list[PlannedMode] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def locate_trunk(config: RunConfig) -> TrunkLocation:
    """Find the trunk executable the run would invoke."""
    command = config.trunk_executable
    source = "--trunk-binary" if config.trunk_binary else "PATH"
    path = shutil.which(command)
    if path is None and os.path.isfile(command) and os.access(command, os.X_OK):
        path = command
    return TrunkLocation(command=command, source=source, path=path)


def _plan_hotspots(config: RunConfig) -> PlannedMode:
    client = GitClient(config.repo_root)
    commands = [client.command_line(client.diff_args(r)) for r in diff_attempts(config.base_branch)]
    commands += [
        client.command_line(client.numstat_args(since))
        for since in churn_attempts(config.churn_window)
    ]
    if config.sarif_out.strip():
        description = f"compute hotspots and write SARIF to {config.sarif_out}"
    else:
        description = "compute hotspots (no SARIF destination configured)"
    return PlannedMode(name="hotspots", description=description, commands=commands)


def build_dry_run_plan(config: RunConfig) -> DryRunPlan:
    """Plan ``config.modes`` the way ``run_phases`` would run them.

    git commands for the hotspot phase are listed in fallback order; later
    ones only run when earlier ones fail.
    """
    trunk = locate_trunk(config)
    tmp_dir = tmp_dir_path(config)
    fallback = None
    if config.sarif_out.strip():
        fallback = fallback_report_path(Path(config.sarif_out), tmp_dir)

    plan = DryRunPlan(
        trunk=trunk,
        repo_root=config.repo_root,
        trunk_args=list(config.trunk_args),
        sarif_out=config.sarif_out,
        tmp_dir=tmp_dir,
        fallback_report=fallback,
    )

    needs_trunk = False
    for raw in config.modes:
        mode = raw.strip().lower()
        if not mode:
            continue
        if mode == "fmt":
            needs_trunk = True
            plan.modes.append(
                PlannedMode(
                    name=mode,
                    description="format code via trunk fmt",
                    commands=[[trunk.command, *trunk_fmt_args(config)]],
                )
            )
        elif mode == "lint":
            needs_trunk = True
            plan.modes.append(
                PlannedMode(
                    name=mode,
                    description="run trunk lint checks",
                    commands=[[trunk.command, *trunk_check_args(config)]],
                )
            )
        elif mode == "hotspots":
            plan.modes.append(_plan_hotspots(config))
        else:
            plan.modes.append(
                PlannedMode(name=mode, description="mode not recognized; it would be skipped")
            )

    if needs_trunk and not trunk.available:
        plan.warnings.append(f"trunk executable {trunk.command!r} not found ({trunk.source})")
    if not plan.modes:
        plan.notes.append("No modes were selected; nothing would run.")
    plan.notes.append("No commands executed because --dry-run is enabled.")

    log_event(
        logger,
        "info",
        "dryrun.plan",
        mode_count=len(plan.modes),
        trunk_status="available" if trunk.available else "missing",
    )
    return plan


def render_plan(plan: DryRunPlan, output: Console) -> None:
    """Print the plan as plain text."""

    def line(text: str = "") -> None:
        output.print(escape(text), highlight=False, soft_wrap=True)

    line("Dry run summary (no commands executed)")
    line()
    if plan.trunk.available:
        line(f"Trunk binary: {plan.trunk.path} (via {plan.trunk.source})")
    else:
        line(f"Trunk binary: {plan.trunk.command} (missing)")
    line(f"Repository: {plan.repo_root}")
    if plan.trunk_args:
        line(f"Additional trunk arguments: {', '.join(plan.trunk_args)}")
    if plan.sarif_out.strip():
        line(f"SARIF output path: {plan.sarif_out}")
        line(f"Read-only fallback: {plan.fallback_report}")
    line(f"Temp directory: {plan.tmp_dir}")

    if plan.modes:
        line("Planned modes:")
        for idx, mode in enumerate(plan.modes, start=1):
            line(f"  {idx}. {mode.name}")
            line(f"     {mode.description}")
            for command in mode.commands:
                line(f"     $ {shlex.join(command)}")
    else:
        line("Planned modes: none")

    for title, items in (("Warnings:", plan.warnings), ("Notes:", plan.notes)):
        if items:
            line()
            line(title)
            for item in items:
                line(f"  - {item}")
