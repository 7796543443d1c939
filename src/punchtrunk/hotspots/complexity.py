"""Token-density complexity proxy.

Tokens per line stands in for structural complexity. No parser is needed,
so every language in the repository is scored the same way.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger(__name__)


def token_density(text: str) -> float:
    """Whitespace-delimited tokens divided by line count (newlines + 1)."""
    lines = text.count("\n") + 1
    tokens = len(text.split())
    return tokens / max(lines, 1)


def estimate_complexity(path: Path | str) -> float:
    """Return the token density of ``path``, or 0.0 if it cannot be read.

    Missing, unreadable and binary files score 0.0; a missing signal must
    never abort scoring.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.debug(f"Cannot read {path} for complexity: {e}")
        return 0.0
    if b"\x00" in data:
        logger.debug(f"Skipping binary file {path}")
        return 0.0
    return token_density(data.decode("utf-8", errors="replace"))


def estimate_all(paths: Iterable[str], root: Path, workers: int = 1) -> dict[str, float]:
    """Estimate complexity for every repo-relative path under ``root``.

    Results are keyed by path, so the threaded variant yields the same
    mapping as the sequential one.
    """
    unique = sorted(set(paths))
    if workers <= 1 or len(unique) < 2:
        return {p: estimate_complexity(root / p) for p in unique}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        values = executor.map(lambda p: estimate_complexity(root / p), unique)
        return dict(zip(unique, values))
