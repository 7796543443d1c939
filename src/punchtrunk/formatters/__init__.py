"""Renderers for ranked hotspots: SARIF for tools, rich tables for people."""

from .base import BaseFormatter
from .rich_formatter import RichFormatter
from .sarif_formatter import SarifFormatter, SarifReport

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "rich": RichFormatter,
    "sarif": SarifFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Instantiate the formatter registered under ``name`` (case-insensitive).

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name.strip().lower())
    if cls is None:
        known = ", ".join(sorted(FORMATTERS))
        raise ValueError(f"Unknown formatter: {name!r} (known: {known})")
    return cls()


__all__ = [
    "FORMATTERS",
    "BaseFormatter",
    "RichFormatter",
    "SarifFormatter",
    "SarifReport",
    "get_formatter",
]
