from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import DispatchSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _columns(start: float, end: float, scale: float) -> tuple[int, int]:
    first = int(start / scale)
    last = max(first + 1, int(round(end / scale)))
    return first, last


def build_rich_gantt(slices: List[DispatchSlice], cores: int, width: int = 72) -> tuple[Panel, str]:
    """
    Build a Rich Panel with one row per core and a string of time marks.

    Each character column covers ``makespan / width`` milliseconds; a slice
    always takes at least one column so short dispatches stay visible.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    makespan = max(sl.end_time for sl in slices)
    scale = max(makespan / width, 1.0)

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    table = Table.grid(padding=(0, 1))
    for core in range(cores):
        row = Text()
        cursor = 0
        for sl in sorted((s for s in slices if s.core == core), key=lambda s: s.start_time):
            first, last = _columns(sl.start_time, sl.end_time, scale)
            first = max(first, cursor)
            last = max(last, first + 1)
            if first > cursor:
                row.append("." * (first - cursor), style="dim")
            label = str(sl.pid)[: last - first].ljust(last - first)
            row.append(label, style=f"bold on {pid_color(sl.pid)}")
            cursor = last
        table.add_row(Text(f"core {core}", style="bold"), row)

    ticks = 4
    time_marks = "  ".join(f"{makespan * i / ticks / 1000.0:.2f}s" for i in range(ticks + 1))

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
