"""Run the configured phases in order and aggregate their outcomes.

Each phase reports success or failure through a PhaseResult; the exit
status is derived from those results once every phase has run. Only the
hotspots phase is advisory: its failures are logged as warnings and the
run carries on.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import RunConfig, resolve_tmp_dir
from .deadline import Deadline
from .exceptions import PunchTrunkError
from .hotspots import compute_hotspots
from .hotspots.models import HotspotRun
from .logging_config import get_logger, log_event
from .report import emit_report
from .trunk import run_fmt, run_lint

logger = get_logger(__name__)

PhaseRunner = Callable[[RunConfig, Deadline], Any]

ADVISORY_PHASES = frozenset({"hotspots"})


@dataclass
class HotspotOutcome:
    run: HotspotRun
    report_path: Optional[Path]


@dataclass
class PhaseResult:
    mode: str
    ok: bool
    duration_ms: int
    output: Any = None
    error: Optional[BaseException] = None

    @property
    def fatal(self) -> bool:
        return not self.ok and self.mode not in ADVISORY_PHASES


@dataclass
class RunSummary:
    results: list[PhaseResult] = field(default_factory=list)

    @property
    def failed(self) -> list[PhaseResult]:
        return [r for r in self.results if not r.ok]

    @property
    def exit_code(self) -> int:
        return 1 if any(r.fatal for r in self.results) else 0

    def result_for(self, mode: str) -> Optional[PhaseResult]:
        return next((r for r in self.results if r.mode == mode), None)


def run_hotspots(config: RunConfig, deadline: Deadline) -> HotspotOutcome:
    """Compute hotspots and write the SARIF report."""
    run = compute_hotspots(config, deadline=deadline)
    report_path = emit_report(
        run.hotspots,
        config.sarif_out,
        resolve_tmp_dir(config),
        verbose=config.verbose,
    )
    return HotspotOutcome(run=run, report_path=report_path)


DEFAULT_RUNNERS: Mapping[str, PhaseRunner] = {
    "fmt": run_fmt,
    "lint": run_lint,
    "hotspots": run_hotspots,
}


def run_phases(
    config: RunConfig,
    runners: Optional[Mapping[str, PhaseRunner]] = None,
    deadline: Optional[Deadline] = None,
) -> RunSummary:
    """Run ``config.modes`` in order, stopping at the first fatal failure.

    Domain errors from any phase become failed results. Advisory phases
    also absorb unexpected exceptions; for fatal phases those propagate.
    """
    runners = DEFAULT_RUNNERS if runners is None else runners
    deadline = deadline or Deadline(config.timeout_seconds)
    summary = RunSummary()

    for idx, raw in enumerate(config.modes):
        mode = raw.strip().lower()
        if not mode:
            continue
        runner = runners.get(mode)
        if runner is None:
            if config.verbose:
                logger.warning("Skipping unknown mode %r", raw)
            continue

        log_event(
            logger,
            "info",
            "mode.start",
            mode=mode,
            mode_index=idx,
            sarif_out=config.sarif_out,
            autofix_mode=config.autofix,
        )
        started = time.monotonic()
        try:
            output = runner(config, deadline)
        except PunchTrunkError as e:
            result = _failed(mode, idx, started, e, e.log_fields())
        except Exception as e:
            if mode not in ADVISORY_PHASES:
                raise
            result = _failed(mode, idx, started, e, {"error": f"{type(e).__name__}: {e}"})
        else:
            duration_ms = int((time.monotonic() - started) * 1000)
            log_event(
                logger,
                "info",
                "mode.finish",
                mode=mode,
                mode_index=idx,
                duration_ms=duration_ms,
            )
            summary.results.append(
                PhaseResult(mode=mode, ok=True, duration_ms=duration_ms, output=output)
            )
            continue

        summary.results.append(result)
        if result.fatal:
            logger.error("%s failed: %s", mode, result.error)
            break
        logger.warning("%s failed: %s", mode, result.error)

    return summary


def _failed(
    mode: str, idx: int, started: float, error: BaseException, fields: dict[str, str]
) -> PhaseResult:
    duration_ms = int((time.monotonic() - started) * 1000)
    log_event(
        logger,
        "error",
        "mode.error",
        mode=mode,
        mode_index=idx,
        duration_ms=duration_ms,
        **fields,
    )
    return PhaseResult(mode=mode, ok=False, duration_ms=duration_ms, error=error)
