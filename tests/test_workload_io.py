import logging
from pathlib import Path

import pytest

from batch_scheduler.errors import InputUnavailableError, MalformedRecordError
from batch_scheduler.models import Task
from batch_scheduler.workload_io import load_workload, parse_record


def test_load_task_spec(tmp_path: Path):
    p = tmp_path / "TaskSpec.txt"
    p.write_text("T1,0,5\nT2, 1, 3\n\nT3,2,8\n")
    tasks = load_workload(p)
    assert tasks == [Task("T1", 0, 5), Task("T2", 1, 3), Task("T3", 2, 8)]


def test_task_spec_is_ordered_by_arrival(tmp_path: Path):
    p = tmp_path / "spec.txt"
    p.write_text("B,4,1\nA,0,2\nC,4,3\n")
    assert [t.name for t in load_workload(p)] == ["A", "B", "C"]


@pytest.mark.parametrize(
    "line",
    [
        "T1,0",
        "T1,0,5,9",
        "T1,zero,5",
        "LONG,0,5",
        ",0,5",
        "T1,-1,5",
        "T1,0,0",
    ],
)
def test_parse_record_rejects_malformed(line):
    with pytest.raises(MalformedRecordError):
        parse_record(line, 1)


def test_malformed_record_aborts_whole_load(tmp_path: Path):
    p = tmp_path / "spec.txt"
    p.write_text("T1,0,5\nT2;1;3\n")
    with pytest.raises(MalformedRecordError, match="line 2"):
        load_workload(p)


def test_duplicate_names_rejected(tmp_path: Path):
    p = tmp_path / "spec.txt"
    p.write_text("T1,0,5\nT1,1,3\n")
    with pytest.raises(MalformedRecordError):
        load_workload(p)


def test_empty_workload_rejected(tmp_path: Path):
    p = tmp_path / "spec.txt"
    p.write_text("\n")
    with pytest.raises(MalformedRecordError):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(InputUnavailableError):
        load_workload(tmp_path / "nope.txt")


def test_max_tasks_truncates_with_warning(tmp_path: Path, caplog):
    p = tmp_path / "spec.txt"
    p.write_text("".join(f"T{i},{i},1\n" for i in range(5)))
    with caplog.at_level(logging.WARNING, logger="batch_scheduler"):
        tasks = load_workload(p, max_tasks=3)
    assert [t.name for t in tasks] == ["T0", "T1", "T2"]
    assert "Ignoring records" in caplog.text


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":0,"burst_time":3},'
                 '{"name":"B","arrival_time":1,"burst_time":2}]')
    tasks = load_workload(p)
    assert isinstance(tasks[0], Task)
    assert tasks[1].arrival_time == 1


def test_load_json_not_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"name":"A"}')
    with pytest.raises(MalformedRecordError):
        load_workload(p)


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    tasks = load_workload(p)
    assert tasks[0].name == "A"
    assert tasks[1].burst_time == 2


def test_load_csv_bad_row(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,x\n")
    with pytest.raises(MalformedRecordError):
        load_workload(p)


@pytest.mark.parametrize("value", ["2.9", "true", "null"])
def test_load_json_rejects_non_integer_times(tmp_path: Path, value):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":%s,"burst_time":3}]' % value)
    with pytest.raises(MalformedRecordError):
        load_workload(p)


def test_load_json_stops_at_max_tasks(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":0,"burst_time":3},'
                 '{"name":"B","arrival_time":1,"burst_time":2},'
                 '{"name":"C","arrival_time":"bad"}]')
    assert [t.name for t in load_workload(p, max_tasks=2)] == ["A", "B"]


def test_load_csv_stops_at_max_tasks(tmp_path: Path, caplog):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,3\nB,1,2\nC,x,y\n")
    with caplog.at_level(logging.WARNING, logger="batch_scheduler"):
        tasks = load_workload(p, max_tasks=2)
    assert [t.name for t in tasks] == ["A", "B"]
    assert "Ignoring rows" in caplog.text


def test_task_spec_stops_at_max_tasks(tmp_path: Path):
    p = tmp_path / "spec.txt"
    p.write_text("A,0,3\nB,1,2\nbroken\n")
    assert [t.name for t in load_workload(p, max_tasks=2)] == ["A", "B"]
