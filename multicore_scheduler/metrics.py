from __future__ import annotations

from typing import List, Optional

from .models import ProcessSnapshot, RunStatistics


def _rate(count: int, interval_ms: Optional[float]) -> Optional[float]:
    # processes per second; undefined over an empty interval
    if interval_ms is None or interval_ms <= 0:
        return None
    return count / (interval_ms / 1000.0)


def compute_run_statistics(
    snapshots: List[ProcessSnapshot],
    duration: float,
    half_time: Optional[float],
    half_count: int,
    cores: int = 1,
) -> RunStatistics:
    """
    Compute end-of-run statistics from final process snapshots.

    ``duration`` and ``half_time`` are milliseconds since the run started;
    ``half_count`` is how many processes had terminated when the half-way
    mark was first observed.
    """
    n = len(snapshots)
    total_cpu = sum(s.cpu_time for s in snapshots)
    duration_s = duration / 1000.0

    cpu_utilization = (total_cpu / duration_s) * 100.0 if duration_s > 0 else 0.0
    per_core_utilization = cpu_utilization / cores if cores > 0 else 0.0

    first_half = _rate(half_count, half_time)
    second_half = None
    if half_time is not None:
        second_half = _rate(n - half_count, duration - half_time)

    return RunStatistics(
        cpu_utilization=cpu_utilization,
        per_core_utilization=per_core_utilization,
        throughput_first_half=first_half,
        throughput_second_half=second_half,
        throughput_overall=_rate(n, duration),
        avg_turnaround=sum(s.turnaround_time for s in snapshots) / n if n else 0.0,
        avg_wait=sum(s.wait_time for s in snapshots) / n if n else 0.0,
        duration=duration_s,
    )


def summarize_snapshots(snapshots: List[ProcessSnapshot]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not snapshots:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_cpu": 0.0}

    n = len(snapshots)
    return {
        "avg_waiting": sum(s.wait_time for s in snapshots) / n,
        "avg_turnaround": sum(s.turnaround_time for s in snapshots) / n,
        "avg_cpu": sum(s.cpu_time for s in snapshots) / n,
    }
