"""
Process records used by every scheduling discipline.

A record carries the immutable input facts (arrival, burst, priority) and
the outputs a simulation fills in as it runs (remaining burst, completion,
turnaround and waiting time). Each simulation works on its own fresh copies,
so the caller's list is never mutated.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .errors import ConfigurationError


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class Process:
    """
    Represents a single process for CPU scheduling.

    Attributes:
        pid:             Positive, unique process number (shown as "P<pid>").
        arrival_time:    The time at which the process becomes ready.
        burst_time:      The total CPU time required by the process.
        priority:        Process priority (lower number = higher priority).
        remaining_burst: CPU time still owed; reaches 0 exactly once.
        completion_time: Time at which the last unit of CPU time was served.
        turnaround_time: completion_time - arrival_time.
        waiting_time:    turnaround_time - burst_time.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    remaining_burst: int = field(init=False)
    completion_time: int = field(default=0, init=False)
    turnaround_time: int = field(default=0, init=False)
    waiting_time: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.remaining_burst = self.burst_time

    @property
    def label(self) -> str:
        """Identifier used in Gantt charts and tables."""
        return f"P{self.pid}"

    @property
    def completed(self) -> bool:
        return self.remaining_burst == 0

    def is_ready(self, time: int) -> bool:
        """True if the process has arrived by ``time`` and still needs the CPU."""
        return self.arrival_time <= time and self.remaining_burst > 0

    def run(self, units: int) -> None:
        """Serve ``units`` of CPU time."""
        if units <= 0 or units > self.remaining_burst:
            raise ValueError(
                f"{self.label}: cannot run {units} unit(s) with "
                f"{self.remaining_burst} remaining"
            )
        self.remaining_burst -= units

    def finish(self, time: int) -> None:
        """Record completion at ``time`` and derive turnaround and waiting time."""
        if not self.completed:
            raise ValueError(f"{self.label} still has {self.remaining_burst} unit(s) left")
        self.completion_time = time
        self.turnaround_time = self.completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def fresh(self) -> "Process":
        """Return a new record with the same input facts and no simulation state."""
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )


# ---------------------------------------------------------------------------
# Construction and validation
# ---------------------------------------------------------------------------


def make_processes(rows: Iterable[Sequence[int]]) -> List[Process]:
    """
    Build processes from ``(arrival, burst[, priority])`` rows.

    PIDs are assigned 1, 2, ... in input order. Priority defaults to 0.
    """
    processes: List[Process] = []
    for index, row in enumerate(rows, start=1):
        if len(row) not in (2, 3):
            raise ConfigurationError(
                f"Process {index}: expected (arrival, burst[, priority]), got {tuple(row)}"
            )
        arrival, burst = int(row[0]), int(row[1])
        priority = int(row[2]) if len(row) == 3 else 0
        processes.append(Process(index, arrival, burst, priority))
    return processes


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject a process set that no discipline can simulate.

    Raises:
        ConfigurationError: empty set, duplicate or non-positive pid,
            negative arrival time or priority, or non-positive burst time.
    """
    if not processes:
        raise ConfigurationError("At least one process is required.")

    seen = set()
    for p in processes:
        if p.pid <= 0:
            raise ConfigurationError(f"PID must be positive, got {p.pid}.")
        if p.pid in seen:
            raise ConfigurationError(f"Duplicate PID {p.pid}.")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise ConfigurationError(f"{p.label}: arrival time must be >= 0.")
        if p.burst_time <= 0:
            raise ConfigurationError(f"{p.label}: burst time must be > 0.")
        if p.priority < 0:
            raise ConfigurationError(f"{p.label}: priority must be >= 0.")


def validate_quantum(quantum: Optional[int]) -> int:
    """Return ``quantum`` if it is a positive integer, else raise ConfigurationError."""
    if quantum is None:
        raise ConfigurationError("Time quantum is required for Round Robin.")
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise ConfigurationError("Time quantum must be a positive integer.")
    return quantum
