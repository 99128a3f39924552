from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from .errors import OutputUnavailableError
from .models import SimulationReport

logger = logging.getLogger(__name__)


def format_block(report: SimulationReport) -> List[str]:
    """
    Text lines for one algorithm: header, slices, waiting times, average,
    and a trailing blank separator.
    """
    lines = [f"{report.label}:"]
    lines.extend(f"{entry.task_name} {entry.start_time} {entry.end_time}" for entry in report.timeline)
    lines.extend(f"Waiting Time {t.name}: {t.waiting_time}" for t in report.waiting.tasks)
    lines.append(f"Average Waiting Time: {report.waiting.average:.2f}")
    lines.append("")
    return lines


def format_report(reports: Iterable[SimulationReport]) -> str:
    lines: List[str] = []
    for report in reports:
        lines.extend(format_block(report))
    return "\n".join(lines) + "\n"


def write_report(path: str | Path, reports: Iterable[SimulationReport]) -> None:
    path = Path(path)
    text = format_report(reports)
    try:
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        raise OutputUnavailableError(f"Cannot write report to {path}: {exc}") from exc
    logger.info("Wrote report to %s", path)
