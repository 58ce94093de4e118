"""
CPU scheduling simulator.

Simulates FCFS, SJF, non-preemptive Priority, SRTF and Round Robin over a
fixed set of processes and reports per-process metrics and a Gantt chart.
"""

from .algorithms import (
    ALGORITHMS,
    Algorithm,
    fcfs_scheduling,
    priority_scheduling,
    round_robin_scheduling,
    simulate,
    sjf_scheduling,
    srtf_scheduling,
)
from .errors import ConfigurationError, SchedulingError
from .metrics import compare_algorithms, compute_aggregates
from .process import Process, make_processes
from .timeline import IDLE, Segment, Timeline, merge_segments

__version__ = "1.0.0"

__all__ = [
    "ALGORITHMS",
    "Algorithm",
    "ConfigurationError",
    "IDLE",
    "Process",
    "SchedulingError",
    "Segment",
    "Timeline",
    "compare_algorithms",
    "compute_aggregates",
    "fcfs_scheduling",
    "make_processes",
    "merge_segments",
    "priority_scheduling",
    "round_robin_scheduling",
    "simulate",
    "sjf_scheduling",
    "srtf_scheduling",
]
