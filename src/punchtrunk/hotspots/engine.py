"""Hotspot pipeline: resolve changes, aggregate churn, estimate, rank."""

from __future__ import annotations

from pathlib import Path

from ..config import RunConfig
from ..deadline import Deadline
from ..exceptions import ChangeSetError
from ..logging_config import get_logger
from ..vcs import GitClient, VersionControl
from .changeset import resolve_changed_files
from .churn import aggregate_churn
from .complexity import estimate_all
from .models import HotspotRun
from .ranking import rank_hotspots

logger = get_logger(__name__)


def is_present(path: Path) -> bool:
    """True when ``path`` exists; paths that cannot be checked count as gone."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return False


def compute_hotspots(
    config: RunConfig,
    deadline: Deadline | None = None,
    vcs: VersionControl | None = None,
) -> HotspotRun:
    """Rank the repository's files by churn-weighted complexity.

    A failed change-set lookup only loses the changed-file bias. A failed
    churn lookup has no safe empty interpretation and propagates.

    Raises:
        ChurnError: churn history could not be read
        DeadlineExceeded: the run timed out
    """
    root = config.repo_root
    if vcs is None:
        vcs = GitClient(root, deadline=deadline)

    changed: frozenset[str] = frozenset()
    changes_degraded = False
    warnings: list[str] = []
    try:
        change_set = resolve_changed_files(vcs, config.base_branch)
    except ChangeSetError as e:
        warnings.append(f"unable to resolve changed files: {e}")
        if config.verbose:
            logger.warning("unable to resolve changed files: %s", e)
    else:
        changed = change_set.files
        changes_degraded = change_set.degraded
        if change_set.degraded and config.verbose:
            logger.info(
                "falling back to limited git history for changed files; "
                "diff weighting may be incomplete"
            )

    churn_result = aggregate_churn(vcs, config.churn_window)
    if churn_result.degraded and config.verbose:
        logger.info(
            "falling back to limited git history for churn; hotspot rankings may be partial"
        )
    if not churn_result.churn and config.verbose:
        logger.info("no git churn detected; hotspot report may be empty")

    complexity = estimate_all(churn_result.churn, root, workers=config.workers)

    hotspots = rank_hotspots(
        churn_result.churn,
        complexity,
        changed=changed,
        exists=lambda path: is_present(root / path),
        limit=config.max_hotspots,
    )
    logger.debug(
        "Ranked %d hotspots from %d churned files (%d changed)",
        len(hotspots),
        len(churn_result.churn),
        len(changed),
    )

    return HotspotRun(
        hotspots=hotspots,
        changed_files=len(changed),
        churned_files=len(churn_result.churn),
        changes_degraded=changes_degraded,
        churn_degraded=churn_result.degraded,
        warnings=warnings,
    )
