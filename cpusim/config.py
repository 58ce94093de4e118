"""
Static configuration shared by the console and desktop front ends.
"""

from typing import Dict, List, Tuple

# Round Robin time quantum offered when the user does not choose one.
DEFAULT_QUANTUM = 2

# Width of one cell in the text Gantt chart.
GANTT_CELL_WIDTH = 8

# Canvas colors for the desktop Gantt chart.
IDLE_COLOR = "#4B5563"
PROCESS_COLORS: List[str] = [
    "#22C55E",  # emerald
    "#3B82F6",  # blue
    "#EAB308",  # amber
    "#EC4899",  # pink
    "#F97316",  # orange
    "#8B5CF6",  # violet
    "#06B6D4",  # cyan
    "#FACC15",  # yellow
    "#EF4444",  # red
    "#14B8A6",  # teal
]

# Example process sets as (arrival, burst, priority) rows.
SCENARIOS: Dict[str, List[Tuple[int, int, int]]] = {
    "Simple FCFS demo": [
        (0, 5, 2),
        (2, 3, 1),
        (4, 1, 3),
        (6, 7, 2),
    ],
    "Starvation example (Priority)": [
        # One long low-priority job first, then a stream of urgent ones.
        (0, 20, 5),
        (2, 3, 1),
        (4, 4, 1),
        (6, 2, 1),
        (8, 1, 1),
    ],
    "Preemptive vs Non-preemptive SJF": [
        (0, 8, 1),
        (1, 4, 1),
        (2, 2, 1),
        (3, 1, 1),
    ],
}
