"""CLI entry point: registers the run command."""

import typer

from ._common import console

app = typer.Typer(
    name="punchtrunk",
    help="PunchTrunk - trunk fmt/check orchestration with git hotspot reports",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .run import main as _main_callback  # noqa: F401, E402

__all__ = ["app", "console"]
