import builtins
import logging

import pytest

from cpusim import cli


def feed(monkeypatch, answers):
    answers = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_round_robin_from_arguments(capsys):
    assert cli.main(["-a", "rr", "-q", "2", "-p", "0:5", "-p", "1:3"]) == 0
    out = capsys.readouterr().out
    assert "Round Robin (RR) Results" in out
    assert "| P1    | P2    | P1    | P2    | P1    |" in out
    assert "Average Waiting Time: 3.00 units" in out


def test_priority_report_shows_priority_column(capsys):
    assert cli.main(["-a", "PRIORITY", "-p", "0:3:2", "-p", "1:2:1"]) == 0
    assert "PID\tAT\tBT\tPRI\tCT\tTAT\tWT" in capsys.readouterr().out


def test_compare_scenario(capsys):
    assert cli.main(["--scenario", "Simple FCFS demo", "--compare"]) == 0
    out = capsys.readouterr().out
    for name in ("FCFS", "SJF - Non Preemptive", "SRTF - Preemptive SJF", "Round Robin (RR)"):
        assert name in out


def test_csv_export(tmp_path, capsys):
    path = tmp_path / "out.csv"
    assert cli.main(["-p", "0:2", "-p", "5:2", "--csv", str(path)]) == 0
    assert path.read_text().startswith("pid,arrival_time")


@pytest.mark.parametrize(
    "argv",
    [
        ["-a", "rr", "-q", "0", "-p", "0:5"],
        ["-p", "0:0"],
        ["-p", "1:3", "--process=-1:2"],
    ],
)
def test_invalid_configuration_exits_with_error(argv, caplog):
    with caplog.at_level(logging.ERROR):
        assert cli.main(argv) == 1
    assert caplog.records


def test_csv_with_compare_is_rejected(tmp_path):
    path = tmp_path / "out.csv"
    with pytest.raises(SystemExit):
        cli.main(["-p", "0:2", "--compare", "--csv", str(path)])
    assert not path.exists()


def test_malformed_process_argument():
    with pytest.raises(SystemExit):
        cli.main(["-p", "zero:five"])


def test_parse_process():
    assert cli.parse_process("3:4") == (3, 4)
    assert cli.parse_process("3:4:1") == (3, 4, 1)


def test_interactive_fcfs(monkeypatch, capsys):
    feed(monkeypatch, ["2", "0", "5", "1", "1", "3", "2", "1"])
    assert cli.main([]) == 0
    out = capsys.readouterr().out
    assert "FCFS Results" in out
    assert "| P1    | P2    |" in out


def test_interactive_round_robin_asks_for_quantum(monkeypatch, capsys):
    feed(monkeypatch, ["2", "0", "5", "0", "1", "3", "0", "5", "2"])
    assert cli.main([]) == 0
    assert "| P1    | P2    | P1    | P2    | P1    |" in capsys.readouterr().out


@pytest.mark.parametrize(
    "answers, message",
    [
        (["0"], "Invalid number of processes."),
        (["x"], "Invalid number of processes."),
        (["1", "0", "0"], "Invalid process details"),
        (["1", "0", "2", "0", "9"], "Invalid choice."),
        (["1", "0", "2", "0", "5", "0"], "Invalid Time Quantum."),
        ([], "Invalid number of processes."),
        (["1", "0"], "Invalid process details"),
        (["1", "0", "2", "0"], "Invalid choice."),
        (["1", "0", "2", "0", "5"], "Invalid Time Quantum."),
    ],
)
def test_interactive_rejects_bad_input(monkeypatch, capsys, answers, message):
    feed(monkeypatch, answers)
    assert cli.interactive() == 1
    assert message in capsys.readouterr().out
