"""
Console front end.

Runs one discipline (or all of them, with ``--compare``) on processes given
as ``--process AT:BT[:PRI]`` options or a named example scenario, and prints
the Gantt chart and metrics table. With no processes on the command line it
falls back to the interactive menu.

Examples::

    cpusim -a rr -q 2 -p 0:5 -p 1:3
    cpusim --scenario "Simple FCFS demo" --compare
    cpusim --gui
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .algorithms import ALGORITHMS, get_algorithm, simulate
from .config import DEFAULT_QUANTUM, SCENARIOS
from .errors import ConfigurationError
from .metrics import compare_algorithms
from .process import Process, make_processes, validate_processes
from .report import export_metrics_csv, format_comparison, format_report

logger = logging.getLogger(__name__)

# Menu numbering of the interactive mode.
MENU: List[Tuple[str, str]] = [
    ("1", "FCFS"),
    ("2", "SJF"),
    ("3", "PRIORITY"),
    ("4", "SRTF"),
    ("5", "RR"),
]

MENU_LABELS = {
    "FCFS": "First Come, First Served (FCFS)",
    "SJF": "Shortest Job First (SJF - Non Preemptive)",
    "PRIORITY": "Priority Scheduling (Non-Preemptive)",
    "SRTF": "Shortest Remaining Time First (SRTF - Preemptive SJF)",
    "RR": "Round Robin (RR)",
}


def parse_process(text: str) -> Tuple[int, ...]:
    """argparse type for ``AT:BT`` or ``AT:BT:PRI``."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected AT:BT[:PRI], got {text!r}")
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"non-integer value in {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpusim",
        description="Simulate CPU scheduling algorithms and print Gantt charts and metrics.",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default="fcfs",
        type=str.lower,
        choices=[key.lower() for key in ALGORITHMS],
        help="scheduling algorithm (default: fcfs)",
    )
    parser.add_argument(
        "-q",
        "--quantum",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Round Robin time quantum (default: {DEFAULT_QUANTUM})",
    )
    parser.add_argument(
        "-p",
        "--process",
        action="append",
        type=parse_process,
        default=[],
        metavar="AT:BT[:PRI]",
        help="add a process; repeat for each process, PIDs follow the order given",
    )
    parser.add_argument(
        "-s", "--scenario", choices=list(SCENARIOS), help="load a predefined example process set"
    )
    parser.add_argument("--compare", action="store_true", help="run every algorithm and compare")
    parser.add_argument("--csv", metavar="PATH", help="export per-process metrics to a CSV file")
    parser.add_argument("--gui", action="store_true", help="open the desktop application")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every scheduling decision")
    return parser


def run_once(
    algorithm: str, processes: Sequence[Process], quantum: Optional[int], csv_path: Optional[str] = None
) -> None:
    """Simulate one algorithm, print its report and optionally export CSV."""
    spec = get_algorithm(algorithm)
    final, timeline = simulate(spec.key, processes, quantum)
    print(format_report(spec.name, final, timeline, show_priority=spec.key == "PRIORITY"))
    if csv_path:
        export_metrics_csv(csv_path, final)
        logger.info("Metrics exported to %s", csv_path)


# ---------------------------------------------------------------------------
# Interactive menu
# ---------------------------------------------------------------------------


def _ask_int(prompt: str, minimum: int) -> int:
    """Read an integer >= ``minimum``; raise ConfigurationError otherwise."""
    try:
        text = input(prompt).strip()
    except EOFError:
        raise ConfigurationError("Input ended before a value was given.") from None
    try:
        value = int(text)
    except ValueError:
        raise ConfigurationError(f"Expected an integer, got {text!r}.") from None
    if value < minimum:
        raise ConfigurationError(f"Value must be >= {minimum}, got {value}.")
    return value


def interactive() -> int:
    """Collect processes and an algorithm choice from standard input."""
    try:
        count = _ask_int("Enter number of processes: ", minimum=1)
    except ConfigurationError:
        print("Invalid number of processes.")
        return 1

    rows = []
    try:
        for i in range(1, count + 1):
            print(f"\nEnter details for P{i}:")
            arrival = _ask_int("Arrival Time (AT): ", minimum=0)
            burst = _ask_int("Burst Time (BT): ", minimum=1)
            priority = _ask_int("Priority (PRI): ", minimum=0)
            rows.append((arrival, burst, priority))
    except ConfigurationError as exc:
        print(f"Invalid process details: {exc}")
        return 1

    print("\n" + "=" * 47)
    print("Select Algorithm:")
    for number, key in MENU:
        print(f"{number}. {MENU_LABELS[key]}")
    try:
        choice = input("Choice: ").strip()
    except EOFError:
        choice = ""
    algorithm = dict(MENU).get(choice)
    if algorithm is None:
        print("Invalid choice.")
        return 1

    quantum = None
    if ALGORITHMS[algorithm].needs_quantum:
        try:
            quantum = _ask_int("Enter Time Quantum for Round Robin: ", minimum=1)
        except ConfigurationError:
            print("Invalid Time Quantum.")
            return 1

    run_once(algorithm, make_processes(rows), quantum)
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.compare and args.csv:
        parser.error("--csv cannot be combined with --compare")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.gui:
        from .app import main as gui_main

        gui_main()
        return 0

    if args.scenario:
        rows = SCENARIOS[args.scenario]
    elif args.process:
        rows = args.process
    else:
        return interactive()

    try:
        processes = make_processes(rows)
        validate_processes(processes)
        if args.compare:
            comparison = compare_algorithms(processes, args.quantum)
            print(format_comparison([(algorithm.name, agg) for algorithm, agg in comparison]))
        else:
            run_once(args.algorithm, processes, args.quantum, args.csv)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
