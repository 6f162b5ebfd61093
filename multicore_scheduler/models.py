from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ProcessState(Enum):
    NOT_STARTED = "not started"
    READY = "ready"
    RUNNING = "running"
    IO = "i/o"
    TERMINATED = "terminated"


@dataclass
class ProcessDetails:
    """
    Descriptor for one synthetic process as read from a configuration file.

    ``bursts`` alternates CPU and IO durations in milliseconds, starting and
    ending with a CPU burst.
    """

    pid: int
    priority: int
    start_time: int
    bursts: List[int] = field(default_factory=list)


@dataclass
class SchedulerConfig:
    cores: int
    algorithm: str
    context_switch: int
    time_slice: int
    processes: List[ProcessDetails] = field(default_factory=list)
    tick_interval: float = 1000.0 / 60.0
    poll_interval: float = 1.0


@dataclass
class ProcessSnapshot:
    """
    Point-in-time view of a process, times in seconds.
    """

    pid: int
    priority: int
    state: ProcessState
    core: Optional[int]
    turnaround_time: float
    wait_time: float
    cpu_time: float
    remaining_time: float


@dataclass
class DispatchSlice:
    """
    One contiguous stretch of execution of a process on a core (milliseconds).
    """

    pid: int
    core: int
    start_time: float
    end_time: float
    outcome: str


@dataclass
class RunStatistics:
    cpu_utilization: float
    per_core_utilization: float
    throughput_first_half: Optional[float]
    throughput_second_half: Optional[float]
    throughput_overall: Optional[float]
    avg_turnaround: float
    avg_wait: float
    duration: float


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    cores: int
    processes: List[ProcessSnapshot] = field(default_factory=list)
    timeline: List[DispatchSlice] = field(default_factory=list)
    statistics: Optional[RunStatistics] = None
