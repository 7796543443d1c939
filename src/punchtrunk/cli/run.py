"""Main command: fmt, lint and hotspots phases."""

from pathlib import Path
from typing import List, Optional

import click
import typer

from .. import __version__
from ..dryrun import build_dry_run_plan, render_plan
from ..exceptions import ConfigurationError
from ..formatters import RichFormatter
from ..logging_config import get_logger, setup_logging
from ..phases import run_phases
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        help="Comma-separated phases: fmt,lint,hotspots (default: all three)",
    ),
    autofix: Optional[str] = typer.Option(
        None,
        "--autofix",
        help="Autofix scope: none | fmt | lint | all",
        click_type=click.Choice(["none", "fmt", "lint", "all"], case_sensitive=False),
    ),
    base_branch: Optional[str] = typer.Option(
        None,
        "--base-branch",
        help="Base ref for change detection (default: origin/main)",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Overall timeout in seconds (0 to disable, default: 900)",
        min=0,
    ),
    sarif_out: Optional[str] = typer.Option(
        None,
        "--sarif-out",
        help="SARIF output path for hotspots (default: reports/hotspots.sarif)",
    ),
    churn_window: Optional[str] = typer.Option(
        None,
        "--churn-window",
        help="git log --since window for churn (default: '90 days')",
    ),
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository root (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    tmp_dir: Optional[str] = typer.Option(
        None,
        "--tmp-dir",
        help="Directory for fallback output when the report path is read-only",
    ),
    trunk_binary: Optional[str] = typer.Option(
        None,
        "--trunk-binary",
        help="Explicit path to the trunk executable",
    ),
    trunk_arg: Optional[List[str]] = typer.Option(
        None,
        "--trunk-arg",
        help="Extra argument for the trunk CLI (repeatable)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Threads for the complexity pass (default: 1)",
        min=1,
        max=32,
        hidden=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose logs, including degraded git history notices",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit structured JSON logs",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append logs to this file",
        dir_okay=False,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the planned commands and paths without running anything",
    ),
    show_hotspots: bool = typer.Option(
        False,
        "--show-hotspots",
        help="Print the top hotspots as a table",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Run trunk fmt, trunk check and a git hotspot analysis.

    Hotspots rank files by recent churn and token density and are written
    as SARIF. A failed hotspot phase is reported as a warning and does not
    change the exit status.

    [bold cyan]Examples:[/bold cyan]

      punchtrunk

      punchtrunk --mode hotspots --base-branch origin/main

      punchtrunk --mode lint --autofix none --trunk-arg=--ci

      punchtrunk --dry-run
    """
    if ctx.invoked_subcommand is not None:
        return

    if version:
        console.print(f"PunchTrunk version {__version__}", highlight=False)
        raise typer.Exit(0)

    try:
        settings = resolve_config(
            config=config,
            modes=mode,
            autofix=autofix,
            base_branch=base_branch,
            timeout_seconds=timeout,
            sarif_out=sarif_out,
            churn_window=churn_window,
            repo_path=str(path) if path else None,
            tmp_dir=tmp_dir,
            trunk_binary=trunk_binary,
            trunk_args=list(trunk_arg) if trunk_arg else None,
            workers=workers,
            verbose=verbose,
            json_logs=json_logs,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(
        verbose=settings.verbose,
        quiet=quiet,
        json_logs=settings.json_logs,
        log_file=str(log_file) if log_file else None,
    )

    if dry_run:
        render_plan(build_dry_run_plan(settings), console)
        raise typer.Exit(0)

    summary = run_phases(settings)

    hotspot_phase = summary.result_for("hotspots")
    if show_hotspots and hotspot_phase is not None and hotspot_phase.ok:
        RichFormatter().render(hotspot_phase.output.run.hotspots)

    if summary.failed:
        logger.warning(
            "%d phase(s) failed: %s",
            len(summary.failed),
            ", ".join(r.mode for r in summary.failed),
        )
    raise typer.Exit(summary.exit_code)
