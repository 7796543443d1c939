"""Persist the hotspot report, redirecting when the destination is read-only.

CI runners often mount the workspace read-only. Rather than lose the report,
output is moved beneath the temp dir, keeping its file name, and the new
location is logged.
"""

from __future__ import annotations

import errno
import os
from collections.abc import Sequence
from pathlib import Path

from .exceptions import ReportWriteError
from .formatters import get_formatter
from .hotspots.models import Hotspot
from .logging_config import get_logger, log_event

logger = get_logger(__name__)

_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM, errno.EROFS}


def is_permission_or_read_only(error: BaseException | None) -> bool:
    """True for permission-denied and read-only filesystem failures."""
    if error is None:
        return False
    if isinstance(error, PermissionError):
        return True
    if isinstance(error, OSError) and error.errno in _PERMISSION_ERRNOS:
        return True
    return "read-only" in str(error).lower()


def fallback_report_path(destination: Path, tmp_dir: Path) -> Path:
    """``<tmp_dir>/punchtrunk/reports/<basename of destination>``."""
    return tmp_dir / "punchtrunk" / "reports" / destination.name


def _ensure_parent(path: Path) -> None:
    parent = path.parent
    if str(parent) in ("", "."):
        return
    parent.mkdir(parents=True, exist_ok=True)


def emit_report(
    hotspots: Sequence[Hotspot],
    destination: str | os.PathLike | None,
    tmp_dir: Path,
    verbose: bool = False,
) -> Path | None:
    """Write the SARIF report and return the path actually written.

    An empty hotspot list still produces a file: consumers treat the
    report's presence as part of the contract.

    Returns:
        The written path, or None when no destination is configured.

    Raises:
        ReportWriteError: the directory cannot be created for a reason other
            than permissions, or the fallback location fails too
    """
    if destination is None or not str(destination).strip():
        if verbose:
            logger.warning(
                "Hotspots computed (%d results) but SARIF output path is empty", len(hotspots)
            )
        return None

    path = Path(os.path.normpath(destination))
    try:
        _ensure_parent(path)
    except OSError as e:
        if not is_permission_or_read_only(e):
            raise ReportWriteError(path, f"create SARIF directory {path.parent}: {e}")
        fallback = fallback_report_path(path, tmp_dir)
        logger.warning(
            "unable to create SARIF directory %s: %s; writing to %s instead",
            path.parent,
            e,
            fallback,
        )
        try:
            _ensure_parent(fallback)
        except OSError as fallback_error:
            raise ReportWriteError(
                path,
                f"create fallback SARIF directory {fallback.parent}: {fallback_error}",
                fallback=fallback,
            )
        path = fallback

    content = get_formatter("sarif").format(hotspots)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(path, str(e))

    log_event(logger, "info", "sarif.write", sarif_out=str(path), count=len(hotspots))
    return path
