"""
Aggregate metrics over a finished simulation.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .algorithms import ALGORITHMS, Algorithm, simulate
from .process import Process
from .timeline import Timeline


def compute_aggregates(processes: Sequence[Process], timeline: Timeline) -> Dict[str, float]:
    """
    Compute aggregate metrics from completed processes and their timeline.

    Keys:
        avg_turnaround, avg_waiting, min_waiting, max_waiting:
            over the per-process values.
        total_idle:      sum of idle segment durations.
        cpu_utilization: busy time / total time (0..1).
        throughput:      completed processes per time unit.
    """
    if processes:
        waits = [p.waiting_time for p in processes]
        avg_waiting = sum(waits) / len(processes)
        avg_turnaround = sum(p.turnaround_time for p in processes) / len(processes)
        min_waiting = float(min(waits))
        max_waiting = float(max(waits))
    else:
        avg_waiting = avg_turnaround = min_waiting = max_waiting = 0.0

    total_time = timeline.end
    total_idle = timeline.idle_time()
    if total_time > 0:
        cpu_utilization = (total_time - total_idle) / total_time
        throughput = len(processes) / total_time
    else:
        cpu_utilization = 0.0
        throughput = 0.0

    return {
        "avg_turnaround": avg_turnaround,
        "avg_waiting": avg_waiting,
        "min_waiting": min_waiting,
        "max_waiting": max_waiting,
        "total_idle": float(total_idle),
        "cpu_utilization": cpu_utilization,
        "throughput": throughput,
    }


def compare_algorithms(
    processes: Sequence[Process], quantum: Optional[int] = None
) -> List[Tuple[Algorithm, Dict[str, float]]]:
    """
    Run every registered discipline on the same processes.

    Round Robin is skipped when no quantum is given.
    """
    rows: List[Tuple[Algorithm, Dict[str, float]]] = []
    for algorithm in ALGORITHMS.values():
        if algorithm.needs_quantum and quantum is None:
            continue
        final, timeline = simulate(algorithm.key, processes, quantum)
        rows.append((algorithm, compute_aggregates(final, timeline)))
    return rows
