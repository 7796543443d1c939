"""Per-file churn aggregated from ``git log --numstat``."""

import re
from collections import defaultdict
from typing import Optional

from ..exceptions import ChurnError, VcsError
from ..logging_config import get_logger
from ..vcs import VersionControl
from .models import ChurnResult, ChurnTable

logger = get_logger(__name__)

# numstat prints "-" for both counts when the file is binary
BINARY_MARKER = "-"

# "src/{old => new}/f.py" or "old.py => new.py"
_BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


def rename_destination(path: str) -> str:
    """Resolve numstat rename notation to the post-rename path."""
    if " => " not in path:
        return path
    if _BRACE_RENAME_RE.search(path):
        resolved = _BRACE_RENAME_RE.sub(lambda m: m.group(2), path)
        # "{ => sub}/f" and "{sub => }/f" leave doubled or leading slashes
        return re.sub(r"/{2,}", "/", resolved).lstrip("/")
    return path.split(" => ", 1)[1]


def _count(value: str) -> int:
    try:
        return max(int(value), 0)
    except ValueError:
        return 0


def _add(churn: dict[str, int], added: str, removed: str, path: str) -> None:
    if added == BINARY_MARKER or removed == BINARY_MARKER:
        churn[path] += 1
    else:
        churn[path] += _count(added) + _count(removed)


def _parse_numstat_z(output: str) -> ChurnTable:
    """Parse ``--numstat -z`` records.

    A plain record is ``added<TAB>removed<TAB>path<NUL>``. A rename leaves the
    path empty and is followed by ``old<NUL>new<NUL>``.
    """
    churn: dict[str, int] = defaultdict(int)
    tokens = iter(output.split("\0"))
    for token in tokens:
        parts = token.lstrip("\n").split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts[0].strip(), parts[1].strip(), parts[2]
        if not path:
            next(tokens, "")
            path = next(tokens, "")
            if not path:
                continue
        _add(churn, added, removed, path)
    return dict(churn)


def parse_numstat(output: str) -> ChurnTable:
    """Sum added + removed lines per path across all commits in ``output``.

    A binary entry counts as one line of churn for that commit, so binary
    files still appear in the ranking. Lines that are not
    ``added<TAB>removed<TAB>path`` are ignored. NUL-separated output
    (``-z``) is detected and parsed record by record.
    """
    if "\0" in output:
        return _parse_numstat_z(output)
    churn: dict[str, int] = defaultdict(int)
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) != 3:
            continue
        added, removed, path = parts[0].strip(), parts[1].strip(), parts[2]
        if not path:
            continue
        _add(churn, added, removed, rename_destination(path))
    return dict(churn)


def churn_attempts(window: Optional[str]) -> list[Optional[str]]:
    """``--since`` values to try: the window, then all of HEAD."""
    return [window, None] if window else [None]


def aggregate_churn(vcs: VersionControl, window: Optional[str]) -> ChurnResult:
    """Compute churn per file within ``window``, falling back to all of HEAD.

    Returns:
        ChurnResult; ``degraded`` when the unbounded query had to be used or
        history is missing (empty table).

    Raises:
        ChurnError: every attempt failed for a reason other than missing history
        DeadlineExceeded: the run timed out
    """
    attempts = churn_attempts(window)
    last_error: Optional[VcsError] = None

    for idx, since in enumerate(attempts):
        try:
            output = vcs.log_numstat(since)
        except VcsError as e:
            if e.is_no_history:
                logger.debug("No git history available: %s", e)
                return ChurnResult(churn={}, degraded=True)
            last_error = e
            logger.debug("git log numstat (since=%s) failed: %s", since, e)
            continue
        return ChurnResult(churn=parse_numstat(output), degraded=idx > 0)

    reason = str(last_error) if last_error is not None else "no attempts"
    raise ChurnError(len(attempts), reason)
