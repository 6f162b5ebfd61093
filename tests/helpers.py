from __future__ import annotations

from typing import List, Sequence

from multicore_scheduler.context import SchedulerContext
from multicore_scheduler.models import ProcessDetails, SchedulerConfig
from multicore_scheduler.process import ProcessRecord
from multicore_scheduler.simulator import build_processes


class FakeClock:
    """Manually advanced stand-in for time.monotonic (seconds)."""

    def __init__(self) -> None:
        self.ms = 0.0

    def __call__(self) -> float:
        return self.ms / 1000.0

    def advance(self, ms: float) -> None:
        self.ms += ms


def details(pid: int, bursts: Sequence[int], priority: int = 0, start_time: int = 0) -> ProcessDetails:
    return ProcessDetails(pid=pid, priority=priority, start_time=start_time, bursts=list(bursts))


def record(pid: int = 1, bursts: Sequence[int] = (500,), priority: int = 0, start_time: int = 0, now: float = 0.0) -> ProcessRecord:
    return ProcessRecord(details(pid, bursts, priority, start_time), now)


def make_context(
    algorithm: str,
    processes: List[ProcessDetails],
    cores: int = 1,
    time_slice: int = 100,
    context_switch: int = 0,
):
    clock = FakeClock()
    config = SchedulerConfig(
        cores=cores,
        algorithm=algorithm,
        context_switch=context_switch,
        time_slice=time_slice,
        processes=processes,
    )
    context = SchedulerContext(config, clock=clock)
    records = build_processes(context, config)
    return context, records, clock
