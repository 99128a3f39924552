from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional


@dataclass
class Task:
    name: str
    arrival_time: int
    burst_time: int
    waiting_time: int = 0


@dataclass
class TimelineEntry:
    """
    One contiguous slice of CPU time given to a task.
    """

    task_name: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class TaskWaitingTime:
    name: str
    waiting_time: int


@dataclass
class WaitingTimeReport:
    """
    Per-task waiting times in batch order, plus their mean.
    """

    tasks: List[TaskWaitingTime] = field(default_factory=list)

    @property
    def average(self) -> float:
        if not self.tasks:
            return 0.0
        return sum(t.waiting_time for t in self.tasks) / len(self.tasks)


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class SimulationReport:
    algorithm: str
    label: str
    quantum: Optional[int]
    timeline: List[TimelineEntry] = field(default_factory=list)
    waiting: WaitingTimeReport = field(default_factory=WaitingTimeReport)
    system: Optional[SystemMetrics] = None


def copy_batch(tasks: Iterable[Task]) -> List[Task]:
    """
    Independent copies of ``tasks`` so one run's waiting times never leak
    into another's.
    """
    return [replace(t) for t in tasks]
