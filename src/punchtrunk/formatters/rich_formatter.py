"""Rich terminal table of ranked hotspots."""

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..hotspots.models import Hotspot
from .base import BaseFormatter

console = Console(stderr=True)

MAX_ROWS = 20


def _score_label(score: float) -> str:
    if score >= 5.0:
        return f"[red bold]{score:.2f}[/red bold]"
    elif score >= 2.0:
        return f"[yellow]{score:.2f}[/yellow]"
    elif score < 0:
        return f"[dim]{score:.2f}[/dim]"
    else:
        return f"[green]{score:.2f}[/green]"


class RichFormatter(BaseFormatter):
    """Top hotspots as a table on stderr."""

    def __init__(self, max_rows: int = MAX_ROWS, output: Console = console):
        self.max_rows = max_rows
        self.console = output

    def render(self, hotspots: Sequence[Hotspot]) -> None:
        if not hotspots:
            self.console.print("[yellow]No hotspots found.[/yellow]")
            return
        self.console.print(self._table(hotspots))
        hidden = len(hotspots) - self.max_rows
        if hidden > 0:
            self.console.print(f"[dim]... and {hidden} more in the SARIF report[/dim]")

    def format(self, hotspots: Sequence[Hotspot]) -> str:
        with self.console.capture() as capture:
            self.render(hotspots)
        return capture.get()

    def _table(self, hotspots: Sequence[Hotspot]) -> Table:
        table = Table(title="Hotspots", title_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("File", style="blue", overflow="fold")
        table.add_column("Churn", justify="right")
        table.add_column("Complexity", justify="right")
        table.add_column("Score", justify="right")
        for rank, h in enumerate(hotspots[: self.max_rows], start=1):
            table.add_row(
                str(rank),
                escape(h.file),
                str(h.churn),
                f"{h.complexity:.2f}",
                _score_label(h.score),
            )
        return table
