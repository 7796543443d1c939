"""Files changed relative to a base ref, tolerating missing history."""

from typing import Optional

from ..exceptions import ChangeSetError, VcsError
from ..logging_config import get_logger
from ..vcs import VersionControl
from .models import ChangeSetResult

logger = get_logger(__name__)


def diff_attempts(base_ref: Optional[str]) -> list[str]:
    """Revision ranges to try, most precise first.

    The three-dot form diffs against the merge base, so commits that only
    landed on the base branch are not counted as local changes.
    """
    attempts = []
    base = (base_ref or "").strip()
    if base:
        attempts.append(f"{base}...HEAD")
    attempts.append("HEAD~1...HEAD")
    attempts.append("HEAD^..HEAD")
    return attempts


def parse_name_only(output: str) -> frozenset[str]:
    """Parse ``git diff --name-only`` output into a set of paths.

    NUL-separated (``-z``) output is taken verbatim; newline-separated
    output is stripped line by line.
    """
    if "\0" in output:
        return frozenset(path for path in output.split("\0") if path)
    return frozenset(line.strip() for line in output.splitlines() if line.strip())


def resolve_changed_files(vcs: VersionControl, base_ref: Optional[str]) -> ChangeSetResult:
    """Resolve the set of files that differ from ``base_ref``.

    Returns:
        ChangeSetResult; ``degraded`` is set once any attempt has failed.
        When every attempt fails because history is missing, the set is
        empty and degraded.

    Raises:
        ChangeSetError: every attempt failed for some other reason
        DeadlineExceeded: the run timed out (never absorbed here)
    """
    attempts = diff_attempts(base_ref)
    degraded = False
    last_error: Optional[VcsError] = None

    for revspec in attempts:
        try:
            output = vcs.diff_name_only(revspec)
        except VcsError as e:
            degraded = True
            last_error = e
            logger.debug("git diff %s failed: %s", revspec, e)
            continue
        return ChangeSetResult(files=parse_name_only(output), degraded=degraded)

    if last_error is not None and last_error.is_no_history:
        return ChangeSetResult(files=frozenset(), degraded=True)

    reason = str(last_error) if last_error is not None else "no attempts"
    raise ChangeSetError(len(attempts), reason)
