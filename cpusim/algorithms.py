"""
Scheduling algorithms.

Every discipline takes the input processes, simulates them on private
copies and returns ``(final_processes, timeline)``:

- ``final_processes`` lists one completed record per input process, in
  input order, with completion/turnaround/waiting time filled in.
- ``timeline`` is the Gantt chart of what ran when, idle gaps included.

Simulated time only moves forward: by a full burst, a quantum-bounded
block, a run up to the next decision point, or a jump to the next arrival.
"""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

from .errors import ConfigurationError
from .process import Process, validate_processes, validate_quantum
from .timeline import IDLE, Timeline, merge_segments

logger = logging.getLogger(__name__)

ScheduleResult = Tuple[List[Process], Timeline]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _next_arrival(procs: Sequence[Process]) -> int:
    """Earliest arrival among the processes that have not completed."""
    return min(p.arrival_time for p in procs if not p.completed)


def _record_idle(timeline: Timeline, current_time: int, procs: Sequence[Process]) -> int:
    """CPU idle until the next arrival; returns the new current time."""
    next_arrival = _next_arrival(procs)
    logger.debug("t=%d: CPU idle until t=%d", current_time, next_arrival)
    timeline.append(IDLE, next_arrival)
    return next_arrival


def _complete(process: Process, time: int) -> None:
    process.finish(time)
    logger.debug(
        "t=%d: %s finished (turnaround=%d, waiting=%d)",
        time,
        process.label,
        process.turnaround_time,
        process.waiting_time,
    )


def _run_non_preemptive(
    processes: Sequence[Process], key: Callable[[Process], int]
) -> ScheduleResult:
    """
    Common loop of FCFS, SJF and non-preemptive Priority.

    At each step the ready, uncompleted process with the smallest ``key``
    runs to completion. Ties go to the earliest arrival, then to input order.
    If nothing is ready, the CPU idles until the next arrival.
    """
    procs = [p.fresh() for p in processes]
    timeline = Timeline()
    current_time = 0
    pending = len(procs)

    while pending:
        ready = [(index, p) for index, p in enumerate(procs) if p.is_ready(current_time)]
        if not ready:
            current_time = _record_idle(timeline, current_time, procs)
            continue

        _, current = min(ready, key=lambda item: (key(item[1]), item[1].arrival_time, item[0]))
        logger.debug("t=%d: dispatch %s for %d unit(s)", current_time, current.label, current.burst_time)

        current.run(current.remaining_burst)
        current_time += current.burst_time
        timeline.append(current.label, current_time)
        _complete(current, current_time)
        pending -= 1

    return procs, timeline


# ---------------------------------------------------------------------------
# Non-preemptive algorithms
# ---------------------------------------------------------------------------


def fcfs_scheduling(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come, First-Served (FCFS) scheduling.

    Concept:
        - Non-preemptive.
        - Processes run in order of arrival, each to completion.
        - If the CPU becomes idle (no ready process), time jumps forward
          to the arrival of the next process.

    Args:
        processes: Processes to schedule.

    Returns:
        (final_processes, timeline), see the module docstring.
    """
    return _run_non_preemptive(processes, key=lambda p: p.arrival_time)


def sjf_scheduling(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First (SJF) scheduling, non-preemptive.

    Concept:
        - Non-preemptive.
        - Among the processes that have arrived and are waiting, always
          choose the one with the smallest CPU burst time.
        - Equal bursts are served in arrival order.
        - If no process is ready, the CPU is idle until the next arrival.
    """
    return _run_non_preemptive(processes, key=lambda p: p.burst_time)


def priority_scheduling(processes: Sequence[Process]) -> ScheduleResult:
    """
    Priority scheduling, non-preemptive.

    Convention:
        - Lower numeric priority value means *higher* priority.
          (Priority 1 is higher than 2.)

    Concept:
        - Non-preemptive.
        - Among the ready processes, always choose the one with the
          highest priority (smallest numeric priority).
        - Equal priorities are served in arrival order.
        - If no process is ready, the CPU is idle until the next arrival.
    """
    return _run_non_preemptive(processes, key=lambda p: p.priority)


# ---------------------------------------------------------------------------
# Preemptive algorithms
# ---------------------------------------------------------------------------


def srtf_scheduling(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF) scheduling.

    Concept:
        - Preemptive version of SJF.
        - At every time unit, among the ready processes, choose the one
          with the smallest remaining burst time (ties: earliest arrival,
          then input order).
        - A newly arrived process with a shorter remaining time preempts
          the running one at its arrival time.
        - If no process is ready, the CPU is idle until the next arrival.

    Implementation details:
        - Between two arrivals the running process only gets shorter while
          every waiting one stays put, so the choice can only change at an
          arrival or a completion. The loop therefore runs the chosen
          process up to the nearer of those two instants and re-evaluates
          there, which yields the same chart as a unit-by-unit simulation.
        - A process that keeps the CPU across an arrival leaves two adjacent
          entries with the same label; merge_segments joins them.
    """
    procs = [p.fresh() for p in processes]
    timeline = Timeline()
    current_time = 0
    pending = len(procs)
    previous: Optional[Process] = None

    while pending:
        ready = [(index, p) for index, p in enumerate(procs) if p.is_ready(current_time)]
        if not ready:
            current_time = _record_idle(timeline, current_time, procs)
            previous = None
            continue

        _, current = min(
            ready, key=lambda item: (item[1].remaining_burst, item[1].arrival_time, item[0])
        )
        if previous is not None and previous is not current and not previous.completed:
            logger.debug(
                "t=%d: %s (remaining %d) preempts %s (remaining %d)",
                current_time,
                current.label,
                current.remaining_burst,
                previous.label,
                previous.remaining_burst,
            )

        # Next decision point: completion or the next arrival, whichever is first.
        run_until = current_time + current.remaining_burst
        upcoming = [
            p.arrival_time for p in procs if not p.completed and p.arrival_time > current_time
        ]
        if upcoming:
            run_until = min(run_until, min(upcoming))

        current.run(run_until - current_time)
        current_time = run_until
        timeline.append(current.label, current_time)

        if current.completed:
            _complete(current, current_time)
            pending -= 1
        previous = current

    return procs, merge_segments(timeline)


def _admit_arrivals(
    procs: Sequence[Process],
    arrival_order: Sequence[int],
    next_index: int,
    time: int,
    ready_queue: Deque[int],
    queued: Set[int],
) -> int:
    """
    Enqueue, in arrival order, every process that has arrived by ``time``.

    Returns the position in ``arrival_order`` of the first process that has
    not arrived yet.
    """
    while next_index < len(arrival_order) and procs[arrival_order[next_index]].arrival_time <= time:
        index = arrival_order[next_index]
        next_index += 1
        if index not in queued and not procs[index].completed:
            ready_queue.append(index)
            queued.add(index)
            logger.debug("t=%d: %s joins the ready queue", time, procs[index].label)
    return next_index


def round_robin_scheduling(processes: Sequence[Process], quantum: int) -> ScheduleResult:
    """
    Round Robin (RR) scheduling with a given time quantum.

    Concept:
        - Preemptive.
        - Each process gets a time slice of at most ``quantum`` units.
        - Processes that arrive while the CPU is busy, up to and including
          the instant a slice ends, join the ready queue *before* the
          process whose slice just ended is put back at the tail.
        - When the ready queue is empty, the CPU is idle until the next
          process arrives.

    Args:
        processes: Processes to schedule.
        quantum:   The time quantum (must be a positive integer).

    Returns:
        (final_processes, timeline), see the module docstring.
    """
    quantum = validate_quantum(quantum)

    procs = [p.fresh() for p in processes]
    # Arrival order with input order as tie-break.
    arrival_order = sorted(range(len(procs)), key=lambda i: (procs[i].arrival_time, i))

    timeline = Timeline()
    ready_queue: Deque[int] = deque()
    queued: Set[int] = set()
    current_time = 0
    next_index = 0
    pending = len(procs)

    while pending:
        next_index = _admit_arrivals(procs, arrival_order, next_index, current_time, ready_queue, queued)

        if not ready_queue:
            current_time = _record_idle(timeline, current_time, procs)
            continue

        index = ready_queue.popleft()
        queued.discard(index)
        current = procs[index]

        run_time = min(quantum, current.remaining_burst)
        logger.debug("t=%d: dispatch %s for %d unit(s)", current_time, current.label, run_time)
        current.run(run_time)
        current_time += run_time
        timeline.append(current.label, current_time)

        # Arrivals during the slice go ahead of the process that just ran.
        next_index = _admit_arrivals(procs, arrival_order, next_index, current_time, ready_queue, queued)

        if current.completed:
            _complete(current, current_time)
            pending -= 1
        else:
            ready_queue.append(index)
            queued.add(index)
            logger.debug(
                "t=%d: %s quantum expired, %d unit(s) left",
                current_time,
                current.label,
                current.remaining_burst,
            )

    return procs, merge_segments(timeline)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class Algorithm(NamedTuple):
    """Registry entry describing one scheduling discipline."""

    key: str
    name: str
    function: Callable[..., ScheduleResult]
    preemptive: bool
    needs_quantum: bool = False


ALGORITHMS: Dict[str, Algorithm] = {
    "FCFS": Algorithm("FCFS", "FCFS", fcfs_scheduling, preemptive=False),
    "SJF": Algorithm("SJF", "SJF - Non Preemptive", sjf_scheduling, preemptive=False),
    "PRIORITY": Algorithm(
        "PRIORITY", "Priority Scheduling (Non-Preemptive)", priority_scheduling, preemptive=False
    ),
    "SRTF": Algorithm("SRTF", "SRTF - Preemptive SJF", srtf_scheduling, preemptive=True),
    "RR": Algorithm(
        "RR", "Round Robin (RR)", round_robin_scheduling, preemptive=True, needs_quantum=True
    ),
}


def get_algorithm(key: str) -> Algorithm:
    """Look up a discipline by key, case-insensitively."""
    try:
        return ALGORITHMS[key.upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported algorithm key: {key!r} (expected one of {', '.join(ALGORITHMS)})"
        ) from None


def simulate(
    algorithm: str, processes: Sequence[Process], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    Validate the inputs and run one scheduling discipline.

    Args:
        algorithm: Registry key ("FCFS", "SJF", "PRIORITY", "SRTF", "RR").
        processes: Processes to schedule; they are copied, never mutated.
        quantum:   Time quantum, required for Round Robin and ignored otherwise.

    Raises:
        ConfigurationError: if the algorithm is unknown or the processes or
            quantum violate the preconditions. Nothing is simulated then.
    """
    spec = get_algorithm(algorithm)
    validate_processes(processes)
    logger.debug("Running %s on %d process(es)", spec.name, len(processes))
    if spec.needs_quantum:
        return spec.function(processes, validate_quantum(quantum))
    return spec.function(processes)
