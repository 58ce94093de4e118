import random

import pytest

from cpusim.algorithms import (
    ALGORITHMS,
    fcfs_scheduling,
    get_algorithm,
    priority_scheduling,
    round_robin_scheduling,
    simulate,
    sjf_scheduling,
    srtf_scheduling,
)
from cpusim.errors import ConfigurationError
from cpusim.process import make_processes
from cpusim.timeline import IDLE, Timeline, merge_segments


def run(key, processes, quantum=2):
    return simulate(key, processes, quantum)


def by_pid(processes):
    return {p.pid: p for p in processes}


def random_sets(count=30, seed=1234):
    rng = random.Random(seed)
    sets = []
    for _ in range(count):
        n = rng.randint(1, 7)
        rows = [(rng.randint(0, 15), rng.randint(1, 9), rng.randint(0, 4)) for _ in range(n)]
        sets.append(rows)
    return sets


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_fcfs_runs_in_arrival_order(fcfs_set):
    final, timeline = fcfs_scheduling(fcfs_set)
    assert timeline.labels == ["P1", "P2", "P3"]
    assert timeline.times == [0, 5, 8, 16]
    assert [p.completion_time for p in final] == [5, 8, 16]
    assert [p.waiting_time for p in final] == [0, 4, 9]
    assert [p.turnaround_time for p in final] == [5, 7, 14]


def test_fcfs_equal_arrivals_keep_input_order():
    _, timeline = fcfs_scheduling(make_processes([(0, 3), (0, 1), (0, 2)]))
    assert timeline.labels == ["P1", "P2", "P3"]


def test_sjf_picks_shortest_ready_job():
    procs = make_processes([(0, 7), (2, 4), (4, 1), (5, 4)])
    final, timeline = sjf_scheduling(procs)
    assert timeline.labels == ["P1", "P3", "P2", "P4"]
    assert timeline.times == [0, 7, 8, 12, 16]
    done = by_pid(final)
    assert [done[pid].waiting_time for pid in (1, 2, 3, 4)] == [0, 6, 3, 7]


def test_sjf_equal_bursts_break_ties_on_arrival():
    # P3 arrives before P2 in time but after it in input order.
    procs = make_processes([(0, 3), (2, 2), (1, 2)])
    _, timeline = sjf_scheduling(procs)
    assert timeline.labels == ["P1", "P3", "P2"]


def test_priority_lower_value_runs_first():
    procs = make_processes([(0, 4, 3), (1, 2, 1), (2, 3, 2), (3, 1, 1)])
    final, timeline = priority_scheduling(procs)
    assert timeline.labels == ["P1", "P2", "P4", "P3"]
    assert timeline.times == [0, 4, 6, 7, 10]
    assert by_pid(final)[3].waiting_time == 5


def test_priority_is_not_preemptive():
    procs = make_processes([(0, 5, 4), (1, 1, 0)])
    _, timeline = priority_scheduling(procs)
    assert timeline.labels == ["P1", "P2"]
    assert timeline.times == [0, 5, 6]


def test_srtf_preempts_on_shorter_arrival():
    final, timeline = srtf_scheduling(make_processes([(0, 8), (1, 4)]))
    assert timeline.labels == ["P1", "P2", "P1"]
    assert timeline.times == [0, 1, 5, 12]
    done = by_pid(final)
    assert done[1].completion_time == 12
    assert done[2].completion_time == 5
    assert done[1].waiting_time == 4


def test_srtf_textbook_example():
    procs = make_processes([(0, 8), (1, 4), (2, 9), (3, 5)])
    final, timeline = srtf_scheduling(procs)
    assert timeline.labels == ["P1", "P2", "P4", "P1", "P3"]
    assert timeline.times == [0, 1, 5, 10, 17, 26]
    assert sum(p.waiting_time for p in final) == 26


def test_srtf_equal_remaining_keeps_earlier_arrival_running():
    _, timeline = srtf_scheduling(make_processes([(0, 4), (1, 3)]))
    assert timeline.labels == ["P1", "P2"]
    assert timeline.times == [0, 4, 7]


def test_round_robin_queues_arrivals_before_requeue():
    final, timeline = round_robin_scheduling(make_processes([(0, 5), (1, 3)]), quantum=2)
    assert timeline.labels == ["P1", "P2", "P1", "P2", "P1"]
    assert timeline.times == [0, 2, 4, 6, 7, 8]
    done = by_pid(final)
    assert done[1].completion_time == 8
    assert done[2].completion_time == 7
    assert done[1].waiting_time == 3
    assert done[2].waiting_time == 3


def test_round_robin_arrival_at_block_end_goes_first():
    _, timeline = round_robin_scheduling(make_processes([(0, 4), (2, 2)]), quantum=2)
    assert timeline.labels == ["P1", "P2", "P1"]
    assert timeline.times == [0, 2, 4, 6]


def test_round_robin_admits_by_arrival_time_not_input_order():
    # P1 is listed first but arrives last; P2 and P3 tie on arrival.
    _, timeline = round_robin_scheduling(make_processes([(3, 2), (0, 4), (0, 1)]), quantum=2)
    assert timeline.labels == ["P2", "P3", "P2", "P1"]
    assert timeline.times == [0, 2, 3, 5, 7]


def test_round_robin_single_process_is_one_segment():
    final, timeline = round_robin_scheduling(make_processes([(0, 5)]), quantum=2)
    assert timeline.labels == ["P1"]
    assert timeline.times == [0, 5]
    assert final[0].completion_time == 5


def test_round_robin_large_quantum_behaves_like_fcfs(fcfs_set):
    _, rr = round_robin_scheduling(fcfs_set, quantum=100)
    _, fcfs = fcfs_scheduling(fcfs_set)
    assert rr == fcfs


@pytest.mark.parametrize("key", list(ALGORITHMS))
def test_gap_produces_single_idle_segment(key, gap_set):
    _, timeline = run(key, gap_set)
    assert timeline.labels == ["P1", IDLE, "P2"]
    assert timeline.times == [0, 2, 5, 7]


@pytest.mark.parametrize("key", list(ALGORITHMS))
def test_late_first_arrival_starts_with_idle(key):
    final, timeline = run(key, make_processes([(3, 2)]))
    assert timeline.labels == [IDLE, "P1"]
    assert timeline.times == [0, 3, 5]
    assert final[0].waiting_time == 0


# ---------------------------------------------------------------------------
# Properties over every discipline
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("key", list(ALGORITHMS))
@pytest.mark.parametrize("rows", random_sets())
def test_invariants_hold(key, rows):
    processes = make_processes(rows)
    final, timeline = run(key, processes, quantum=3)

    assert [p.pid for p in final] == [p.pid for p in processes]
    for p in final:
        assert p.completed
        assert p.waiting_time >= 0
        assert p.turnaround_time >= p.burst_time
        assert p.turnaround_time == p.completion_time - p.arrival_time

    # Contiguous cover of [0, end) with no repeated neighbours.
    assert timeline.times[0] == 0
    assert all(a < b for a, b in zip(timeline.times, timeline.times[1:]))
    assert sum(s.duration for s in timeline.segments()) == timeline.end
    assert all(a != b for a, b in zip(timeline.labels, timeline.labels[1:]))

    # Each process gets exactly its burst and finishes at the end of its last segment.
    done = by_pid(final)
    served = {}
    for segment in timeline.segments():
        if segment.is_idle:
            continue
        pid = int(segment.label[1:])
        assert segment.start >= done[pid].arrival_time
        served[pid] = served.get(pid, 0) + segment.duration
        last_end = segment.end
        assert last_end <= done[pid].completion_time
    assert served == {p.pid: p.burst_time for p in final}
    assert timeline.end == max(p.completion_time for p in final)


@pytest.mark.parametrize("key", list(ALGORITHMS))
@pytest.mark.parametrize("rows", random_sets(count=5, seed=99))
def test_runs_are_deterministic_and_leave_input_untouched(key, rows):
    processes = make_processes(rows)
    first = run(key, processes)
    second = run(key, processes)
    assert first == second
    assert all(p.remaining_burst == p.burst_time and p.completion_time == 0 for p in processes)


def _srtf_unit_by_unit(processes):
    """Reference SRTF stepping one time unit at a time."""
    procs = [p.fresh() for p in processes]
    timeline = Timeline()
    time = 0
    while any(not p.completed for p in procs):
        ready = [(i, p) for i, p in enumerate(procs) if p.is_ready(time)]
        if not ready:
            time = min(p.arrival_time for p in procs if not p.completed)
            timeline.append(IDLE, time)
            continue
        _, current = min(ready, key=lambda item: (item[1].remaining_burst, item[1].arrival_time, item[0]))
        current.run(1)
        time += 1
        timeline.append(current.label, time)
        if current.completed:
            current.finish(time)
    return procs, merge_segments(timeline)


@pytest.mark.parametrize("rows", random_sets(count=40, seed=7))
def test_srtf_matches_unit_by_unit_simulation(rows):
    processes = make_processes(rows)
    assert srtf_scheduling(processes) == _srtf_unit_by_unit(processes)


# ---------------------------------------------------------------------------
# Front door
# ---------------------------------------------------------------------------


def test_simulate_accepts_lowercase_keys(fcfs_set):
    assert simulate("fcfs", fcfs_set) == fcfs_scheduling(fcfs_set)


def test_simulate_ignores_quantum_for_non_rr(fcfs_set):
    assert simulate("SJF", fcfs_set, quantum=0) == sjf_scheduling(fcfs_set)


@pytest.mark.parametrize(
    "key, rows, quantum",
    [
        ("LOTTERY", [(0, 1)], None),
        ("FCFS", [], None),
        ("SRTF", [(0, 0)], None),
        ("RR", [(0, 3)], None),
        ("RR", [(0, 3)], 0),
    ],
)
def test_simulate_rejects_invalid_configuration(key, rows, quantum):
    with pytest.raises(ConfigurationError):
        simulate(key, make_processes(rows), quantum)


def test_get_algorithm_metadata():
    rr = get_algorithm("rr")
    assert rr.name == "Round Robin (RR)"
    assert rr.preemptive and rr.needs_quantum
    assert not get_algorithm("FCFS").preemptive
    assert list(ALGORITHMS) == ["FCFS", "SJF", "PRIORITY", "SRTF", "RR"]
