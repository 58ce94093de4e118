from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytest.importorskip("customtkinter")

from cpusim import app  # noqa: E402
from cpusim.algorithms import ALGORITHMS  # noqa: E402


def make_app(rows, algorithm="FCFS", quantum_text=""):
    """Window object with mocked widgets; nothing is drawn."""
    window = app.CPUSchedulerApp.__new__(app.CPUSchedulerApp)
    window._label_to_key = {a.name: key for key, a in ALGORITHMS.items()}
    window._algorithm_label_var = MagicMock()
    window._algorithm_label_var.get.return_value = ALGORITHMS[algorithm].name
    window._last_processes = []

    items = {f"row{pid}": (pid, *row) for pid, row in enumerate(rows, start=1)}
    window.process_tree = MagicMock()
    window.process_tree.get_children.return_value = list(items)
    window.process_tree.item.side_effect = lambda item, option: items[item]

    window.quantum_entry = MagicMock()
    window.quantum_entry.get.return_value = quantum_text
    window.gantt_canvas = MagicMock()
    window.gantt_canvas.winfo_width.return_value = 800
    for name in ("results_tree", "comparison_tree", "avg_waiting_label",
                 "avg_turnaround_label", "extra_metrics_label"):
        setattr(window, name, MagicMock())
    return window


@pytest.fixture
def dialogs(monkeypatch, tmp_path):
    messagebox = MagicMock()
    filedialog = MagicMock()
    filedialog.asksaveasfilename.return_value = str(tmp_path / "metrics.csv")
    monkeypatch.setattr(app, "messagebox", messagebox)
    monkeypatch.setattr(app, "filedialog", filedialog)
    return SimpleNamespace(messagebox=messagebox, filedialog=filedialog, path=tmp_path / "metrics.csv")


def test_export_after_run_writes_csv(dialogs):
    window = make_app([(0, 5, 0), (1, 3, 0)])
    window.run_simulation()
    window._export_metrics_csv()

    dialogs.filedialog.asksaveasfilename.assert_called_once()
    dialogs.messagebox.showinfo.assert_not_called()
    lines = dialogs.path.read_text().splitlines()
    assert lines[0].startswith("pid,arrival_time")
    assert len(lines) == 3


def test_export_before_run_asks_for_a_run(dialogs):
    window = make_app([(0, 5, 0)])
    window._export_metrics_csv()
    dialogs.messagebox.showinfo.assert_called_once()
    dialogs.filedialog.asksaveasfilename.assert_not_called()


def test_run_fills_results_and_chart(dialogs):
    window = make_app([(0, 2, 0), (5, 2, 0)])
    window.run_simulation()
    assert window.results_tree.insert.call_count == 2
    labels = [call.kwargs["text"] for call in window.gantt_canvas.create_text.call_args_list]
    assert {"P1", "IDLE", "P2"} <= set(labels)
    window.extra_metrics_label.configure.assert_called_once()
    assert "Idle Time: 3" in window.extra_metrics_label.configure.call_args.kwargs["text"]


@pytest.mark.parametrize("key", ["FCFS", "SJF", "PRIORITY", "SRTF"])
def test_quantum_entry_ignored_when_unused(dialogs, key):
    window = make_app([(0, 3, 0)], algorithm=key, quantum_text="abc")
    window.run_simulation()
    dialogs.messagebox.showerror.assert_not_called()
    assert window._last_processes[0].completion_time == 3


def test_bad_quantum_for_round_robin_shows_error(dialogs):
    window = make_app([(0, 3, 0)], algorithm="RR", quantum_text="abc")
    window.run_simulation()
    dialogs.messagebox.showerror.assert_called_once()
    assert window._last_processes == []


def test_hover_hint_cancels_pending_popup():
    widget = MagicMock()
    widget.after.return_value = "after#1"
    hint = app._HoverHint(widget, "Round Robin only")

    hint._schedule(SimpleNamespace(x_root=10, y_root=20))
    widget.after.assert_called_once_with(500, hint._open, 10, 20)

    hint._close(None)
    widget.after_cancel.assert_called_once_with("after#1")
    assert hint._popup is None
