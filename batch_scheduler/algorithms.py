from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .metrics import build_waiting_report, compute_system_metrics
from .models import SimulationReport, Task, TimelineEntry, copy_batch
from .ready_queue import ReadyQueue

logger = logging.getLogger(__name__)


def _prepare(tasks: Sequence[Task]) -> List[Task]:
    if not tasks:
        raise ValueError("Cannot schedule an empty task batch")
    return copy_batch(tasks)


def _finish(algorithm: str, label: str, batch: List[Task], timeline: List[TimelineEntry],
            quantum: Optional[int] = None) -> SimulationReport:
    result = SimulationReport(
        algorithm=algorithm,
        label=label,
        quantum=quantum,
        timeline=timeline,
        waiting=build_waiting_report(batch),
    )
    compute_system_metrics(result)
    logger.debug("%s: average waiting time %.2f", label, result.waiting.average)
    return result


def schedule_fcfs(tasks: Sequence[Task], quantum: Optional[int] = None) -> SimulationReport:
    """
    First-Come First-Serve (non-preemptive).

    Tasks run back-to-back in batch order from time 0. A task's own arrival
    time never delays its start, so no idle gaps appear and a task that
    arrives after its turn gets a negative waiting time.
    """
    batch = _prepare(tasks)

    time = 0
    timeline: List[TimelineEntry] = []

    for task in batch:
        task.waiting_time = 0 if not timeline else time - task.arrival_time
        timeline.append(TimelineEntry(task_name=task.name, start_time=time, end_time=time + task.burst_time))
        time += task.burst_time

    return _finish("First-Come First-Serve", "FCFS", batch, timeline)


def schedule_rr(tasks: Sequence[Task], quantum: Optional[int] = None) -> SimulationReport:
    """
    Round Robin scheduling with a fixed time quantum.

    Tasks that arrive by the end of a slice are queued ahead of the task
    that was just preempted.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")

    batch = _prepare(tasks)
    count = len(batch)

    remaining = [t.burst_time for t in batch]
    last_finish = [t.arrival_time for t in batch]

    time = 0
    timeline: List[TimelineEntry] = []
    ready = ReadyQueue()
    next_index = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_index
        while next_index < count and batch[next_index].arrival_time <= current_time:
            ready.enqueue(next_index)
            next_index += 1

    while next_index < count and batch[next_index].arrival_time == 0:
        ready.enqueue(next_index)
        next_index += 1

    while ready or next_index < count:
        if not ready:
            # CPU idle: jump to the next arrival
            time = max(time, batch[next_index].arrival_time)
            logger.debug("RR: idle until t=%d", time)
            enqueue_new_arrivals(time)
            continue

        idx = ready.dequeue()
        task = batch[idx]

        run_time = min(remaining[idx], quantum)
        timeline.append(TimelineEntry(task_name=task.name, start_time=time, end_time=time + run_time))
        logger.debug("RR: t=%d dispatch %s for %d", time, task.name, run_time)

        time += run_time
        remaining[idx] -= run_time
        last_finish[idx] = time

        enqueue_new_arrivals(time)

        if remaining[idx] > 0:
            ready.enqueue(idx)

    for idx, task in enumerate(batch):
        task.waiting_time = last_finish[idx] - task.arrival_time - task.burst_time

    return _finish("Round Robin", "RR", batch, timeline, quantum=quantum)


def _shortest_arrived(batch: List[Task], lengths: List[int], done: List[bool], time: int) -> int:
    """
    Index of the arrived, unfinished task with the smallest length, or -1.
    Ties go to the lowest batch index.
    """
    chosen = -1
    for idx, task in enumerate(batch):
        if done[idx] or task.arrival_time > time:
            continue
        if chosen == -1 or lengths[idx] < lengths[chosen]:
            chosen = idx
    return chosen


def schedule_nsjf(tasks: Sequence[Task], quantum: Optional[int] = None) -> SimulationReport:
    """
    Shortest Job First (non-preemptive).
    """
    batch = _prepare(tasks)
    bursts = [t.burst_time for t in batch]
    done = [False] * len(batch)
    completed = 0

    time = 0
    timeline: List[TimelineEntry] = []

    while completed < len(batch):
        idx = _shortest_arrived(batch, bursts, done, time)
        if idx == -1:
            time += 1
            continue

        task = batch[idx]
        task.waiting_time = time - task.arrival_time
        timeline.append(TimelineEntry(task_name=task.name, start_time=time, end_time=time + task.burst_time))
        logger.debug("NSJF: t=%d run %s to completion", time, task.name)

        time += task.burst_time
        done[idx] = True
        completed += 1

    return _finish("Shortest Job First (non-preemptive)", "NSJF", batch, timeline)


def schedule_psjf(tasks: Sequence[Task], quantum: Optional[int] = None) -> SimulationReport:
    """
    Shortest Remaining Time First (preemptive SJF).

    The clock advances one tick per step and the shortest remaining task
    runs for that tick. Consecutive ticks of the same task are merged into
    one timeline entry.
    """
    batch = _prepare(tasks)
    remaining = [t.burst_time for t in batch]
    done = [False] * len(batch)
    completed = 0

    time = 0
    timeline: List[TimelineEntry] = []
    previous = -1

    while completed < len(batch):
        idx = _shortest_arrived(batch, remaining, done, time)
        if idx != -1:
            task = batch[idx]
            if idx == previous and timeline[-1].end_time == time:
                timeline[-1].end_time = time + 1
            else:
                logger.debug("PSJF: t=%d dispatch %s (remaining %d)", time, task.name, remaining[idx])
                timeline.append(TimelineEntry(task_name=task.name, start_time=time, end_time=time + 1))

            remaining[idx] -= 1
            if remaining[idx] == 0:
                done[idx] = True
                completed += 1
                task.waiting_time = time + 1 - task.burst_time - task.arrival_time
        previous = idx
        time += 1

    return _finish("Shortest Remaining Time First", "PSJF", batch, timeline)


SchedulerFunc = Callable[[Sequence[Task], Optional[int]], SimulationReport]

ALGORITHMS: Dict[str, SchedulerFunc] = {
    "fcfs": schedule_fcfs,
    "rr": schedule_rr,
    "nsjf": schedule_nsjf,
    "psjf": schedule_psjf,
}

ALIASES = {
    "sjf": "nsjf",
    "srtf": "psjf",
}

USES_QUANTUM = {"rr"}


def resolve_algorithm(name: str) -> str:
    name = name.lower()
    name = ALIASES.get(name, name)
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")
    return name


def run_algorithm(name: str, tasks: Sequence[Task], quantum: Optional[int] = None) -> SimulationReport:
    """
    Dispatch to the requested algorithm. The quantum is only passed on to
    algorithms that use one.
    """
    key = resolve_algorithm(name)
    func = ALGORITHMS[key]
    return func(tasks, quantum if key in USES_QUANTUM else None)


def run_all(tasks: Sequence[Task], quantum: int, algorithms: Iterable[str] = tuple(ALGORITHMS)) -> List[SimulationReport]:
    """
    Run each algorithm in turn, each against its own copy of the batch.
    """
    return [run_algorithm(name, tasks, quantum=quantum) for name in algorithms]
