from __future__ import annotations

from typing import Dict, List, Sequence

from .models import SimulationReport, SystemMetrics, Task, TaskWaitingTime, TimelineEntry, WaitingTimeReport


def build_waiting_report(tasks: Sequence[Task]) -> WaitingTimeReport:
    """
    Snapshot the ``waiting_time`` of each task, keeping batch order.
    """
    return WaitingTimeReport(tasks=[TaskWaitingTime(name=t.name, waiting_time=t.waiting_time) for t in tasks])


def busy_time_by_task(timeline: List[TimelineEntry]) -> Dict[str, int]:
    busy: Dict[str, int] = {}
    for entry in timeline:
        busy[entry.task_name] = busy.get(entry.task_name, 0) + entry.duration
    return busy


def compute_system_metrics(result: SimulationReport) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline slices.
    """
    if not result.timeline:
        return SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(entry.end_time for entry in result.timeline)
    cpu_busy_time = sum(entry.duration for entry in result.timeline)
    task_count = len(result.waiting.tasks)

    throughput = task_count / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system
