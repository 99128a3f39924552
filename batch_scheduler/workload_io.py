from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping

from .config import DEFAULT_MAX_TASKS
from .errors import InputUnavailableError, MalformedRecordError
from .models import Task

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 3


def load_workload(path: str | Path, max_tasks: int = DEFAULT_MAX_TASKS) -> List[Task]:
    """
    Load a task batch from a task spec, JSON or CSV file.

    ``.json`` and ``.csv`` files are read as structured workloads; anything
    else is read as a task spec with one ``name,arrival,burst`` record per
    line. The batch comes back ordered by arrival time, equal arrivals
    keeping file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            tasks = _load_json(path, max_tasks)
        elif suffix == ".csv":
            tasks = _load_csv(path, max_tasks)
        else:
            tasks = _load_task_spec(path, max_tasks)
    except (OSError, UnicodeDecodeError) as exc:
        raise InputUnavailableError(f"Cannot read workload {path}: {exc}") from exc

    if not tasks:
        raise MalformedRecordError(f"Workload {path} contains no tasks")

    _check_unique_names(tasks)
    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return sorted(tasks, key=lambda t: t.arrival_time)


def _load_task_spec(path: Path, max_tasks: int) -> List[Task]:
    tasks: List[Task] = []
    with path.open("r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            if len(tasks) == max_tasks:
                logger.warning("Ignoring records after line %d of %s (limit %d tasks)", line_number - 1, path, max_tasks)
                break
            tasks.append(parse_record(line, line_number))
    return tasks


def parse_record(line: str, line_number: int | None = None) -> Task:
    """
    Parse one ``name,arrival,burst`` record.
    """
    fields = [part.strip() for part in line.strip().split(",")]
    if len(fields) != 3:
        raise MalformedRecordError(f"expected 3 comma separated fields, got {len(fields)}: {line.strip()!r}", line_number)

    name, arrival_raw, burst_raw = fields
    try:
        arrival_time = int(arrival_raw)
        burst_time = int(burst_raw)
    except ValueError as exc:
        raise MalformedRecordError(f"non-integer time in record {line.strip()!r}", line_number) from exc

    return _make_task(name, arrival_time, burst_time, line_number)


def _load_json(path: Path, max_tasks: int) -> List[Task]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedRecordError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise MalformedRecordError("JSON workload must be a list of task objects")
    if len(raw) > max_tasks:
        logger.warning("Ignoring entries after entry %d of %s (limit %d tasks)", max_tasks, path, max_tasks)
        raw = raw[:max_tasks]

    return [_task_from_mapping(entry, index) for index, entry in enumerate(raw, start=1)]


def _load_csv(path: Path, max_tasks: int) -> List[Task]:
    tasks: List[Task] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            if len(tasks) == max_tasks:
                logger.warning("Ignoring rows after line %d of %s (limit %d tasks)", reader.line_num - 1, path, max_tasks)
                break
            tasks.append(_task_from_mapping(row, reader.line_num))
    return tasks


def _task_from_mapping(mapping: Mapping, line_number: int) -> Task:
    try:
        name = str(mapping["name"]).strip()
        arrival_time = _as_time(mapping["arrival_time"])
        burst_time = _as_time(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid task entry: {mapping!r}", line_number) from exc

    return _make_task(name, arrival_time, burst_time, line_number)


def _as_time(value) -> int:
    """
    Integer time from a JSON number or a CSV string. Floats and booleans are
    rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"boolean is not a time: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"not an integer time: {value!r}")


def _make_task(name: str, arrival_time: int, burst_time: int, line_number: int | None) -> Task:
    if not name or len(name) > MAX_NAME_LENGTH:
        raise MalformedRecordError(f"task name must be 1-{MAX_NAME_LENGTH} characters, got {name!r}", line_number)
    if arrival_time < 0:
        raise MalformedRecordError(f"arrival time of {name} must be >= 0, got {arrival_time}", line_number)
    if burst_time <= 0:
        raise MalformedRecordError(f"burst time of {name} must be > 0, got {burst_time}", line_number)
    return Task(name=name, arrival_time=arrival_time, burst_time=burst_time)


def _check_unique_names(tasks: List[Task]) -> None:
    seen = set()
    for task in tasks:
        if task.name in seen:
            raise MalformedRecordError(f"duplicate task name {task.name!r}")
        seen.add(task.name)
