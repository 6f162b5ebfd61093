from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.table import Table

from .models import ProcessSnapshot, RunStatistics

PROCESS_HEADERS = [
    "PID",
    "Priority",
    "State",
    "Core",
    "Turn Time",
    "Wait Time",
    "CPU Time",
    "Remain Time",
]

STATE_STYLES = {
    "ready": "yellow",
    "running": "green",
    "i/o": "cyan",
    "terminated": "dim",
}


def build_process_table(snapshots: List[ProcessSnapshot], title: Optional[str] = None) -> Table:
    """
    Build the per-process status table shown on every tick.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    for h in PROCESS_HEADERS:
        justify = "center" if h in {"State", "Core"} else "right"
        table.add_column(h, justify=justify)

    for s in snapshots:
        state = s.state.value
        table.add_row(
            str(s.pid),
            str(s.priority),
            f"[{STATE_STYLES.get(state, 'white')}]{state}[/]",
            "--" if s.core is None else str(s.core),
            f"{s.turnaround_time:.1f}",
            f"{s.wait_time:.1f}",
            f"{s.cpu_time:.1f}",
            f"{s.remaining_time:.1f}",
        )
    return table


def _fmt_rate(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.3f}"


def build_statistics_table(stats: RunStatistics) -> Table:
    table = Table(title="Run statistics", box=box.SIMPLE_HEAVY)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("CPU utilization", f"{stats.cpu_utilization:.1f}%")
    table.add_row("Per-core utilization", f"{stats.per_core_utilization:.1f}%")
    table.add_row("Throughput, first 50% (proc/s)", _fmt_rate(stats.throughput_first_half))
    table.add_row("Throughput, second 50% (proc/s)", _fmt_rate(stats.throughput_second_half))
    table.add_row("Throughput, overall (proc/s)", _fmt_rate(stats.throughput_overall))
    table.add_row("Avg turnaround (s)", f"{stats.avg_turnaround:.2f}")
    table.add_row("Avg waiting (s)", f"{stats.avg_wait:.2f}")
    table.add_row("Run duration (s)", f"{stats.duration:.2f}")
    return table
