from pathlib import Path

from batch_scheduler.cli import main
from batch_scheduler.errors import EXIT_INPUT_ERROR, EXIT_INVALID_PARAMETERS, EXIT_OK, EXIT_OUTPUT_ERROR


def _spec(tmp_path: Path, text: str = "A,0,5\nB,1,3\nC,2,8\n") -> Path:
    p = tmp_path / "TaskSpec.txt"
    p.write_text(text)
    return p


def test_run_writes_report(tmp_path: Path):
    out = tmp_path / "Output.txt"
    assert main(["run", "-i", str(_spec(tmp_path)), "-o", str(out)]) == EXIT_OK
    text = out.read_text()
    assert text.startswith("FCFS:\n")
    assert "RR:\nA 0 4\nB 4 7\n" in text


def test_run_with_custom_quantum_and_subset(tmp_path: Path):
    out = tmp_path / "Output.txt"
    assert main(["run", "-i", str(_spec(tmp_path)), "-o", str(out), "-q", "2", "-a", "rr"]) == EXIT_OK
    assert out.read_text().startswith("RR:\nA 0 2\nB 2 4\n")


def test_missing_input(tmp_path: Path):
    out = tmp_path / "Output.txt"
    assert main(["run", "-i", str(tmp_path / "none.txt"), "-o", str(out)]) == EXIT_INPUT_ERROR
    assert not out.exists()


def test_malformed_input_writes_nothing(tmp_path: Path, capsys):
    out = tmp_path / "Output.txt"
    spec = _spec(tmp_path, "A,0,5\nbroken\n")
    assert main(["run", "-i", str(spec), "-o", str(out)]) == EXIT_INPUT_ERROR
    assert not out.exists()
    assert "Error" in capsys.readouterr().err


def test_output_unavailable(tmp_path: Path):
    out = tmp_path / "missing" / "Output.txt"
    assert main(["run", "-i", str(_spec(tmp_path)), "-o", str(out)]) == EXIT_OUTPUT_ERROR


def test_invalid_quantum(tmp_path: Path):
    assert main(["run", "-i", str(_spec(tmp_path)), "-q", "0"]) == EXIT_INVALID_PARAMETERS


def test_unknown_algorithm(tmp_path: Path):
    assert main(["compare", "-i", str(_spec(tmp_path)), "-a", "lottery"]) == EXIT_INVALID_PARAMETERS


def test_show(tmp_path: Path, capsys):
    assert main(["show", "-i", str(_spec(tmp_path)), "-a", "rr"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "Waiting times" in out


def test_compare(tmp_path: Path, capsys):
    assert main(["compare", "-i", str(_spec(tmp_path))]) == EXIT_OK
    out = capsys.readouterr().out
    for label in ("FCFS", "RR", "NSJF", "PSJF"):
        assert label in out
    assert "3.33" in out
