"""
Plain-text presentation of simulation results.

Nothing here runs a simulation; the functions only format what the
algorithms return so the console front end can print it.
"""

import csv
from typing import Dict, List, Sequence, Tuple

from .config import GANTT_CELL_WIDTH
from .metrics import compute_aggregates
from .process import Process
from .timeline import Timeline

RULE = "-" * 63

CSV_FIELDS = [
    "pid",
    "arrival_time",
    "burst_time",
    "priority",
    "completion_time",
    "turnaround_time",
    "waiting_time",
]


def format_gantt(timeline: Timeline, width: int = GANTT_CELL_WIDTH) -> str:
    """
    Render a timeline as two text rows.

    Example::

        | P1    | IDLE  | P2    |
        0       2       5       7
    """
    bars = "".join(f"| {label:<{width - 2}}" for label in timeline.labels) + "|"
    ticks = "".join(f"{t:<{width}}" for t in timeline.times).rstrip()
    return f"{bars}\n{ticks}"


def format_results_table(processes: Sequence[Process], show_priority: bool = False) -> str:
    """Per-process metrics, one tab-separated row per process, sorted by PID."""
    if show_priority:
        lines = ["PID\tAT\tBT\tPRI\tCT\tTAT\tWT", "-" * 61]
    else:
        lines = ["PID\tAT\tBT\tCT\tTAT\tWT", "-" * 48]

    for p in sorted(processes, key=lambda p: p.pid):
        cells = [p.pid, p.arrival_time, p.burst_time]
        if show_priority:
            cells.append(p.priority)
        cells += [p.completion_time, p.turnaround_time, p.waiting_time]
        lines.append("\t".join(str(c) for c in cells))
    return "\n".join(lines)


def format_report(
    name: str,
    processes: Sequence[Process],
    timeline: Timeline,
    show_priority: bool = False,
) -> str:
    """Full result block for one run: Gantt chart, table and averages."""
    aggregates = compute_aggregates(processes, timeline)
    return "\n".join(
        [
            "",
            RULE,
            f"\t\t{name} Results",
            RULE,
            "",
            f"Gantt Chart ({name}):",
            format_gantt(timeline),
            "",
            format_results_table(processes, show_priority),
            "",
            f"Average Turn Around Time: {aggregates['avg_turnaround']:.2f} units",
            f"Average Waiting Time: {aggregates['avg_waiting']:.2f} units",
            f"Total CPU Idle Time: {int(aggregates['total_idle'])} units",
        ]
    )


def format_comparison(rows: List[Tuple[str, Dict[str, float]]]) -> str:
    """Side-by-side aggregates, one row per algorithm."""
    header = f"{'Algorithm':<40}{'Avg Waiting':>12}{'Avg TAT':>10}{'CPU %':>9}{'Thru':>8}"
    lines = [header, "-" * len(header)]
    for name, agg in rows:
        lines.append(
            f"{name:<40}"
            f"{agg['avg_waiting']:>12.2f}"
            f"{agg['avg_turnaround']:>10.2f}"
            f"{agg['cpu_utilization'] * 100:>9.2f}"
            f"{agg['throughput']:>8.3f}"
        )
    return "\n".join(lines)


def export_metrics_csv(filename: str, processes: Sequence[Process]) -> None:
    """Write per-process metrics to a CSV file, sorted by PID."""
    with open(filename, "w", newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for p in sorted(processes, key=lambda p: p.pid):
            writer.writerow({field: getattr(p, field) for field in CSV_FIELDS})
