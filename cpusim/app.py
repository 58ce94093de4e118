"""
Desktop front end (customtkinter).

The window lets you:

- enter processes (arrival time, burst time, priority) or load an example,
- pick a scheduling algorithm and, for Round Robin, the time quantum,
- draw the resulting Gantt chart and per-process metrics,
- compare every algorithm on the same process set,
- export the metrics table as CSV.

All scheduling goes through :func:`cpusim.algorithms.simulate`; this module
only collects input and displays results.
"""

import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Dict, List, Optional

import customtkinter as ctk

from .algorithms import ALGORITHMS, simulate
from .config import DEFAULT_QUANTUM, IDLE_COLOR, PROCESS_COLORS, SCENARIOS
from .metrics import compare_algorithms, compute_aggregates
from .process import Process
from .report import export_metrics_csv
from .timeline import Timeline

logger = logging.getLogger(__name__)

NO_METRICS_TEXT = "CPU Utilization: N/A  |  Throughput: N/A  |  Idle Time: N/A"


# ---------------------------------------------------------------------------
# Hover hints
# ---------------------------------------------------------------------------


class _HoverHint:
    """
    Delayed hint shown next to the pointer while it rests on a widget.

    The popup appears after ``delay_ms`` and follows no further motion;
    leaving the widget or clicking it cancels or closes it.
    """

    def __init__(self, widget: tk.Widget, text: str, delay_ms: int = 500) -> None:
        self.widget = widget
        self.text = text
        self.delay_ms = delay_ms
        self._popup: Optional[tk.Toplevel] = None
        self._pending: Optional[str] = None
        widget.bind("<Enter>", self._schedule, add="+")
        widget.bind("<Leave>", self._close, add="+")
        widget.bind("<ButtonPress>", self._close, add="+")

    def _schedule(self, event: tk.Event) -> None:
        self._cancel()
        self._pending = self.widget.after(self.delay_ms, self._open, event.x_root, event.y_root)

    def _cancel(self) -> None:
        if self._pending is not None:
            self.widget.after_cancel(self._pending)
            self._pending = None

    def _open(self, x: int, y: int) -> None:
        self._pending = None
        if self._popup is not None:
            return
        popup = self._popup = tk.Toplevel(self.widget)
        popup.wm_overrideredirect(True)
        popup.wm_geometry(f"+{x + 12}+{y + 16}")
        tk.Message(
            popup,
            text=self.text,
            width=260,
            background="#111827",
            foreground="#F9FAFB",
            font=("Segoe UI", 9),
        ).pack()

    def _close(self, _event: tk.Event) -> None:
        self._cancel()
        if self._popup is not None:
            self._popup.destroy()
            self._popup = None


# ---------------------------------------------------------------------------
# GUI Application
# ---------------------------------------------------------------------------


class CPUSchedulerApp:
    """
    Main window.

    Layout, top to bottom: process input and list, algorithm controls,
    Gantt chart, metrics table, algorithm comparison.
    """

    def __init__(self, root: Optional[ctk.CTk] = None) -> None:
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("dark-blue")

        self.root = root if root is not None else ctk.CTk()
        self.root.title("CPU Scheduling Simulator")
        self.root.geometry("1100x700")

        # Combobox labels -> registry keys.
        self._label_to_key: Dict[str, str] = {a.name: key for key, a in ALGORITHMS.items()}
        self._algorithm_label_var = ctk.StringVar(value=ALGORITHMS["FCFS"].name)
        self._scenario_var = ctk.StringVar(value="None")

        self._next_pid = 1
        self._last_processes: List[Process] = []

        self._configure_treeview_style()
        self._build_ui()

    def _configure_treeview_style(self) -> None:
        """Dark theme for ttk Treeviews so they match customtkinter."""
        style = ttk.Style(self.root)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure(
            "Treeview",
            background="#020617",
            foreground="#E5E7EB",
            fieldbackground="#020617",
            bordercolor="#1F2937",
            borderwidth=1,
            rowheight=22,
        )
        style.map("Treeview", background=[("selected", "#1D4ED8")])
        style.configure(
            "Treeview.Heading",
            background="#0F172A",
            foreground="#E5E7EB",
            font=("Segoe UI Semibold", 9),
        )

    # ------------------------------------------------------------------#
    # UI construction                                                   #
    # ------------------------------------------------------------------#

    def _build_ui(self) -> None:
        main_frame = ctk.CTkScrollableFrame(self.root, corner_radius=0, fg_color="transparent")
        main_frame.pack(fill="both", expand=True, padx=16, pady=16)

        ctk.CTkLabel(
            main_frame, text="CPU Scheduling Simulator", font=("Segoe UI Semibold", 22)
        ).pack(anchor="w")
        ctk.CTkLabel(
            main_frame, text="FCFS • SJF • Priority • SRTF • Round Robin", font=("Segoe UI", 12)
        ).pack(anchor="w")

        self._build_process_section(main_frame)
        self._build_algorithm_section(main_frame)
        self._build_output_section(main_frame)

    def _make_tree(self, parent: tk.Widget, columns: Dict[str, str], height: int) -> ttk.Treeview:
        tree = ttk.Treeview(parent, columns=tuple(columns), show="headings", height=height)
        for col, text in columns.items():
            tree.heading(col, text=text)
            tree.column(col, anchor="center", width=100, stretch=True)
        tree.tag_configure("evenrow", background="#020617")
        tree.tag_configure("oddrow", background="#111827")
        return tree

    def _build_process_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="x", pady=(10, 10))

        ctk.CTkLabel(frame, text="Process Input", font=("Segoe UI Semibold", 13)).grid(
            row=0, column=0, columnspan=2, padx=12, pady=(10, 6), sticky="w"
        )

        self.arrival_entry = self._labeled_entry(frame, "Arrival Time", column=0)
        self.burst_entry = self._labeled_entry(frame, "Burst Time", column=2)
        self.priority_entry = self._labeled_entry(frame, "Priority\n(lower = higher)", column=4)

        ctk.CTkButton(frame, text="Add Process", width=110, command=self.add_process).grid(
            row=1, column=6, padx=10, pady=4
        )
        ctk.CTkButton(
            frame,
            text="Remove Selected",
            width=140,
            fg_color="#1F2937",
            hover_color="#111827",
            command=self.remove_selected_process,
        ).grid(row=1, column=7, padx=10, pady=4)

        self.process_tree = self._make_tree(
            frame,
            {"pid": "PID", "arrival": "Arrival", "burst": "Burst", "priority": "Priority"},
            height=8,
        )
        self.process_tree.grid(row=2, column=0, columnspan=8, sticky="nsew", padx=12, pady=(8, 10))
        for col_index in range(8):
            frame.columnconfigure(col_index, weight=1)

    def _labeled_entry(self, frame: ctk.CTkFrame, text: str, column: int) -> ctk.CTkEntry:
        ctk.CTkLabel(frame, text=text).grid(row=1, column=column, padx=12, pady=4, sticky="w")
        entry = ctk.CTkEntry(frame, width=80)
        entry.grid(row=1, column=column + 1, padx=6, pady=4, sticky="w")
        return entry

    def _build_algorithm_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="x", pady=(0, 10))

        ctk.CTkLabel(frame, text="Scheduling Algorithm", font=("Segoe UI Semibold", 13)).grid(
            row=0, column=0, padx=12, pady=10, sticky="w"
        )
        self.algorithm_combobox = ctk.CTkComboBox(
            frame,
            values=list(self._label_to_key),
            variable=self._algorithm_label_var,
            width=300,
            state="readonly",
            command=self._on_algorithm_change,
        )
        self.algorithm_combobox.grid(row=0, column=1, padx=8, pady=10, sticky="w")

        quantum_label = ctk.CTkLabel(frame, text="Time Quantum")
        quantum_label.grid(row=0, column=2, padx=(20, 4), pady=10, sticky="e")
        self.quantum_entry = ctk.CTkEntry(frame, width=80)
        self.quantum_entry.insert(0, str(DEFAULT_QUANTUM))
        self.quantum_entry.grid(row=0, column=3, padx=(0, 10), pady=10, sticky="w")
        _HoverHint(quantum_label, "Round Robin only:\nEach process gets up to this many time units per turn.")
        self._on_algorithm_change(self._algorithm_label_var.get())

        ctk.CTkButton(frame, text="Run Simulation", width=140, command=self.run_simulation).grid(
            row=0, column=4, padx=(10, 5), pady=10
        )
        ctk.CTkButton(frame, text="Compare Algorithms", width=170, command=self.run_comparison).grid(
            row=0, column=5, padx=5, pady=10
        )
        ctk.CTkButton(
            frame,
            text="Clear All",
            width=120,
            fg_color="#1F2937",
            hover_color="#111827",
            command=self.clear_all,
        ).grid(row=0, column=6, padx=(5, 10), pady=10)

        ctk.CTkLabel(frame, text="Example Scenario", font=("Segoe UI", 11)).grid(
            row=1, column=0, padx=12, pady=(0, 6), sticky="w"
        )
        ctk.CTkComboBox(
            frame,
            values=["None"] + list(SCENARIOS),
            variable=self._scenario_var,
            width=300,
            state="readonly",
            command=self._on_scenario_selected,
        ).grid(row=1, column=1, columnspan=3, padx=8, pady=(0, 6), sticky="w")

        averages = ctk.CTkFrame(frame, fg_color="transparent")
        averages.grid(row=2, column=4, columnspan=3, padx=10, pady=(0, 10), sticky="ne")
        self.avg_waiting_label = ctk.CTkLabel(
            averages, text="Average Waiting Time: N/A", font=("Segoe UI Semibold", 16)
        )
        self.avg_waiting_label.pack(anchor="e")
        self.avg_turnaround_label = ctk.CTkLabel(
            averages, text="Average Turnaround Time: N/A", font=("Segoe UI Semibold", 16)
        )
        self.avg_turnaround_label.pack(anchor="e")
        self.extra_metrics_label = ctk.CTkLabel(averages, text=NO_METRICS_TEXT, font=("Segoe UI", 11))
        self.extra_metrics_label.pack(anchor="e", pady=(4, 0))

        frame.columnconfigure(1, weight=1)

    def _build_output_section(self, parent: ctk.CTkFrame) -> None:
        frame = ctk.CTkFrame(parent, corner_radius=12)
        frame.pack(fill="both", expand=True)

        ctk.CTkLabel(frame, text="Gantt Chart", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.gantt_canvas = tk.Canvas(frame, height=140, bg="#020617", highlightthickness=0)
        self.gantt_canvas.pack(fill="x", padx=12, pady=(0, 12))

        ctk.CTkLabel(frame, text="Process Metrics", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.results_tree = self._make_tree(
            frame,
            {
                "pid": "PID",
                "arrival": "Arrival",
                "burst": "Burst",
                "priority": "Priority",
                "completion": "Completion",
                "turnaround": "Turnaround",
                "waiting": "Waiting",
            },
            height=10,
        )
        self.results_tree.pack(fill="both", expand=True, padx=12, pady=4)

        ctk.CTkButton(
            frame, text="Export Metrics (CSV)", width=170, command=self._export_metrics_csv
        ).pack(anchor="w", padx=12, pady=(4, 10))

        ctk.CTkLabel(frame, text="Algorithm Comparison", font=("Segoe UI Semibold", 13)).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        self.comparison_tree = self._make_tree(
            frame,
            {
                "algorithm": "Algorithm",
                "avg_waiting": "Avg Waiting",
                "avg_turnaround": "Avg Turnaround",
                "cpu_util": "CPU Util (%)",
                "throughput": "Throughput",
            },
            height=6,
        )
        self.comparison_tree.pack(fill="both", expand=True, padx=12, pady=(4, 10))

    # ------------------------------------------------------------------#
    # Process list operations                                           #
    # ------------------------------------------------------------------#

    def _insert_process_row(self, arrival: int, burst: int, priority: int) -> None:
        row_index = len(self.process_tree.get_children())
        tag = "evenrow" if row_index % 2 == 0 else "oddrow"
        self.process_tree.insert(
            "", "end", values=(self._next_pid, arrival, burst, priority), tags=(tag,)
        )
        self._next_pid += 1

    def add_process(self) -> None:
        """
        Add a process from the entry fields.

        Arrival must be >= 0 and burst > 0; priority is optional (0 if blank)
        and must be >= 0.
        """
        try:
            arrival = int(self.arrival_entry.get().strip())
            burst = int(self.burst_entry.get().strip())
            priority_text = self.priority_entry.get().strip()
            priority = int(priority_text) if priority_text else 0
        except ValueError:
            messagebox.showerror("Invalid input", "Arrival, burst and priority must be integers.")
            return

        if arrival < 0 or burst <= 0 or priority < 0:
            messagebox.showerror(
                "Invalid input",
                "Arrival time and priority must be >= 0 and burst time must be > 0.",
            )
            return

        self._insert_process_row(arrival, burst, priority)
        for entry in (self.arrival_entry, self.burst_entry, self.priority_entry):
            entry.delete(0, tk.END)

    def remove_selected_process(self) -> None:
        for item in self.process_tree.selection():
            self.process_tree.delete(item)

    def clear_all(self) -> None:
        """Reset processes, results, comparison and chart."""
        for tree in (self.process_tree, self.results_tree, self.comparison_tree):
            tree.delete(*tree.get_children())
        self.gantt_canvas.delete("all")
        self.avg_waiting_label.configure(text="Average Waiting Time: N/A")
        self.avg_turnaround_label.configure(text="Average Turnaround Time: N/A")
        self.extra_metrics_label.configure(text=NO_METRICS_TEXT)
        self._next_pid = 1
        self._last_processes = []

    def _on_scenario_selected(self, selected_label: str) -> None:
        rows = SCENARIOS.get(selected_label)
        if not rows:
            return
        self.clear_all()
        for arrival, burst, priority in rows:
            self._insert_process_row(arrival, burst, priority)

    def _on_algorithm_change(self, selected_label: str) -> None:
        # Quantum only matters for Round Robin.
        key = self._label_to_key.get(selected_label, "FCFS")
        self.quantum_entry.configure(state="normal" if ALGORITHMS[key].needs_quantum else "disabled")

    def _get_processes_from_tree(self) -> List[Process]:
        processes: List[Process] = []
        for item in self.process_tree.get_children():
            pid, arrival, burst, priority = self.process_tree.item(item, "values")
            processes.append(Process(int(pid), int(arrival), int(burst), int(priority)))
        return processes

    def _read_quantum(self, key: Optional[str] = None) -> Optional[int]:
        """Quantum from the entry; None when ``key`` does not use one or the entry is blank."""
        if key is not None and not ALGORITHMS[key].needs_quantum:
            return None
        text = self.quantum_entry.get().strip()
        return int(text) if text else None

    # ------------------------------------------------------------------#
    # Simulation + visualization                                        #
    # ------------------------------------------------------------------#

    def run_simulation(self) -> None:
        """Run the selected algorithm and refresh chart, table and averages."""
        processes = self._get_processes_from_tree()
        key = self._label_to_key.get(self._algorithm_label_var.get(), "FCFS")
        try:
            quantum = self._read_quantum(key)
            final, timeline = simulate(key, processes, quantum)
        except ValueError as exc:
            messagebox.showerror("Error", str(exc))
            return

        self._last_processes = final
        aggregates = compute_aggregates(final, timeline)
        self._populate_results_table(final)
        self._draw_gantt_chart(timeline)

        self.avg_waiting_label.configure(text=f"Average Waiting Time: {aggregates['avg_waiting']:.2f}")
        self.avg_turnaround_label.configure(
            text=f"Average Turnaround Time: {aggregates['avg_turnaround']:.2f}"
        )
        self.extra_metrics_label.configure(
            text=(
                f"CPU Utilization: {aggregates['cpu_utilization'] * 100:.2f}%  |  "
                f"Throughput: {aggregates['throughput']:.3f} proc/unit  |  "
                f"Idle Time: {int(aggregates['total_idle'])}"
            )
        )

    def run_comparison(self) -> None:
        """Run every algorithm on the current processes and fill the comparison table."""
        processes = self._get_processes_from_tree()
        try:
            quantum = self._read_quantum()
            rows = compare_algorithms(processes, quantum)
        except ValueError as exc:
            messagebox.showerror("Error", str(exc))
            return

        self.comparison_tree.delete(*self.comparison_tree.get_children())
        for algorithm, agg in rows:
            self.comparison_tree.insert(
                "",
                "end",
                values=(
                    algorithm.name,
                    f"{agg['avg_waiting']:.2f}",
                    f"{agg['avg_turnaround']:.2f}",
                    f"{agg['cpu_utilization'] * 100:.2f}",
                    f"{agg['throughput']:.3f}",
                ),
            )

    def _populate_results_table(self, processes: List[Process]) -> None:
        self.results_tree.delete(*self.results_tree.get_children())
        for index, p in enumerate(sorted(processes, key=lambda p: p.pid)):
            self.results_tree.insert(
                "",
                "end",
                values=(
                    p.label,
                    p.arrival_time,
                    p.burst_time,
                    p.priority,
                    p.completion_time,
                    p.turnaround_time,
                    p.waiting_time,
                ),
                tags=("evenrow" if index % 2 == 0 else "oddrow",),
            )

    def _draw_gantt_chart(self, timeline: Timeline) -> None:
        """
        Draw the timeline on the Canvas.

        Each segment is a rectangle whose width is proportional to its
        duration. Processes get colors from the palette in order of first
        appearance; idle time is gray.
        """
        canvas = self.gantt_canvas
        canvas.delete("all")
        total_time = timeline.end
        if total_time <= 0:
            return

        canvas_width = int(canvas.winfo_width())
        if canvas_width <= 1:
            # Not laid out yet.
            canvas_width = 800
        left_margin, right_margin, bar_top, bar_height = 20, 20, 30, 50
        time_scale = max(1, canvas_width - left_margin - right_margin) / float(total_time)
        bar_bottom = bar_top + bar_height

        colors: Dict[str, str] = {}
        for segment in timeline.segments():
            x1 = left_margin + segment.start * time_scale
            x2 = left_margin + segment.end * time_scale
            if segment.is_idle:
                fill_color = IDLE_COLOR
            else:
                fill_color = colors.setdefault(
                    segment.label, PROCESS_COLORS[len(colors) % len(PROCESS_COLORS)]
                )
            canvas.create_rectangle(x1, bar_top, x2, bar_bottom, fill=fill_color, outline="#111827")
            canvas.create_text(
                (x1 + x2) / 2,
                (bar_top + bar_bottom) / 2,
                text=segment.label,
                font=("Segoe UI", 9),
                fill="#F9FAFB",
            )

        for t in timeline.times:
            x = left_margin + t * time_scale
            canvas.create_line(x, bar_bottom, x, bar_bottom + 5, fill=IDLE_COLOR)
            canvas.create_text(
                x, bar_bottom + 7, text=str(t), anchor="n", font=("Segoe UI", 8), fill="#D1D5DB"
            )

    def _export_metrics_csv(self) -> None:
        if not self._last_processes:
            messagebox.showinfo("Nothing to export", "Run a simulation first.")
            return
        filename = filedialog.asksaveasfilename(
            defaultextension=".csv", filetypes=[("CSV files", "*.csv")]
        )
        if not filename:
            return
        try:
            export_metrics_csv(filename, self._last_processes)
        except OSError as exc:
            messagebox.showerror("Export failed", str(exc))
            return
        logger.info("Metrics exported to %s", filename)

    # ------------------------------------------------------------------#
    # Mainloop                                                          #
    # ------------------------------------------------------------------#

    def run(self) -> None:
        """Start the Tkinter main event loop."""
        self.root.mainloop()


def main() -> None:
    """Entry point for ``cpusim --gui``."""
    app = CPUSchedulerApp()
    app.run()
