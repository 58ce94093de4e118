"""
Gantt timelines: what ran on the CPU and when.

A timeline is a list of boundary times ``t0 = 0 < t1 < ... < tn`` and a list
of n labels, where label ``i`` (a process label such as "P1", or ``IDLE``)
covers ``[t_i, t_{i+1})``.
"""

from typing import List, NamedTuple, Optional

# Label used for time during which no process is ready.
IDLE = "IDLE"


class Segment(NamedTuple):
    """One contiguous CPU interval, ready for drawing."""

    label: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.label == IDLE


class Timeline:
    """
    Recorder for a simulation's execution segments.

    Selectors call :meth:`append` once per decision step. Consecutive entries
    may share a label (a process kept the CPU across a re-evaluation);
    :func:`merge_segments` collapses those for display.
    """

    def __init__(self, times: Optional[List[int]] = None, labels: Optional[List[str]] = None) -> None:
        self.times: List[int] = list(times) if times is not None else [0]
        self.labels: List[str] = list(labels) if labels is not None else []
        if len(self.times) != len(self.labels) + 1:
            raise ValueError("A timeline needs exactly one more time point than labels.")
        if self.times[0] != 0:
            raise ValueError(f"A timeline starts at t=0, got t={self.times[0]}.")
        if any(a >= b for a, b in zip(self.times, self.times[1:])):
            raise ValueError(f"Time points must be strictly increasing: {self.times}.")

    @property
    def end(self) -> int:
        """Time at which the last recorded segment ends."""
        return self.times[-1]

    def append(self, label: str, end: int) -> None:
        """Record that ``label`` held the CPU from the current end up to ``end``."""
        if end <= self.end:
            raise ValueError(f"Segment {label} must end after t={self.end}, got t={end}.")
        self.labels.append(label)
        self.times.append(end)

    def segments(self) -> List[Segment]:
        return [
            Segment(label, self.times[i], self.times[i + 1])
            for i, label in enumerate(self.labels)
        ]

    def idle_time(self) -> int:
        """Total duration of all idle segments."""
        return sum(s.duration for s in self.segments() if s.is_idle)

    def busy_time(self) -> int:
        return self.end - self.times[0] - self.idle_time()

    def __len__(self) -> int:
        return len(self.labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timeline):
            return NotImplemented
        return self.times == other.times and self.labels == other.labels

    def __repr__(self) -> str:
        parts = ", ".join(f"{s.label}[{s.start},{s.end})" for s in self.segments())
        return f"Timeline({parts})"


def merge_segments(timeline: Timeline) -> Timeline:
    """
    Collapse runs of consecutive identical labels into single segments.

    Each surviving boundary is the start of the first segment in its run and
    the final boundary is kept as-is. Returns a new timeline; the input is
    left untouched. Merging an already merged timeline is a no-op.
    """
    if not timeline.labels:
        return Timeline(timeline.times, timeline.labels)

    times = [timeline.times[0]]
    labels = [timeline.labels[0]]
    for i in range(1, len(timeline.labels)):
        if timeline.labels[i] != labels[-1]:
            times.append(timeline.times[i])
            labels.append(timeline.labels[i])
    times.append(timeline.end)
    return Timeline(times, labels)
