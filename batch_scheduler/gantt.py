from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .models import SimulationReport, TimelineEntry

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


@dataclass
class Segment:
    """
    A stretch of the chart: a task on the CPU, or the CPU idle.
    """

    start_time: int
    end_time: int
    task_name: Optional[str] = None

    @property
    def idle(self) -> bool:
        return self.task_name is None

    @property
    def width(self) -> int:
        return max(1, self.end_time - self.start_time)


def timeline_segments(timeline: List[TimelineEntry]) -> List[Segment]:
    """
    Timeline slices with the idle gaps between them made explicit.

    Every boundary between two segments is then either a dispatch change
    (run followed by run) or the edge of an idle gap.
    """
    segments: List[Segment] = []
    clock = 0
    for entry in timeline:
        if entry.start_time > clock:
            segments.append(Segment(start_time=clock, end_time=entry.start_time))
        segments.append(Segment(start_time=entry.start_time, end_time=entry.end_time, task_name=entry.task_name))
        clock = entry.end_time
    return segments


def chart_title(report: SimulationReport) -> str:
    if report.quantum is None:
        return report.label
    return f"{report.label} (quantum {report.quantum})"


def build_gantt_panel(report: SimulationReport) -> Panel:
    """
    Rich panel with one colored bar per segment, the task names under
    the bars, the boundary times under those, and a dispatch/idle summary.
    """
    segments = timeline_segments(report.timeline)
    if not segments:
        return Panel("No execution", title=chart_title(report))

    colors: Dict[str, str] = {}
    bars = Text()
    labels = Text()
    marks = Text(style="dim")

    for seg in segments:
        if seg.idle:
            bars.append("·" * seg.width, style="dim")
            labels.append("idle"[: seg.width].ljust(seg.width), style="dim italic")
        else:
            color = colors.setdefault(seg.task_name, COLORS[len(colors) % len(COLORS)])
            bars.append(" " * seg.width, style=f"on {color}")
            labels.append(seg.task_name[: seg.width].ljust(seg.width), style="bold")
        marks.append(str(seg.start_time)[: seg.width].ljust(seg.width))
    marks.append(str(segments[-1].end_time))

    dispatches = sum(1 for seg in segments if not seg.idle)
    idle_time = sum(seg.end_time - seg.start_time for seg in segments if seg.idle)
    summary = Text(f"{dispatches} dispatches, {idle_time} idle", style="italic")

    return Panel.fit(Group(bars, labels, marks, summary), title=chart_title(report))
