from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .process import ProcessRecord


class Algorithm(str, Enum):
    FCFS = "FCFS"
    SJF = "SJF"
    RR = "RR"
    PP = "PP"


class SchedulingPolicy:
    """
    Ordering and preemption rules for one scheduling algorithm.

    Algorithms with ``reorders`` set have their ready queue stably sorted by
    ``order_key`` once per dispatcher tick; the others stay FIFO.
    """

    algorithm: Algorithm
    label: str = ""
    uses_quantum: bool = False
    reorders: bool = False

    def order_key(self, record: ProcessRecord, current_time: float):
        return None

    def should_preempt(
        self,
        record: ProcessRecord,
        queue_head: Optional[ProcessRecord],
        current_time: float,
        quantum: int,
    ) -> bool:
        return False


class FCFSPolicy(SchedulingPolicy):
    """
    First-Come First-Serve (non-preemptive, FIFO queue).
    """

    algorithm = Algorithm.FCFS
    label = "FCFS"


class SJFPolicy(SchedulingPolicy):
    """
    Shortest Job First by remaining CPU time (non-preemptive).
    """

    algorithm = Algorithm.SJF
    label = "SJF (remaining time)"
    reorders = True

    def order_key(self, record: ProcessRecord, current_time: float):
        return record.remaining_time(current_time)


class RoundRobinPolicy(SchedulingPolicy):
    """
    Round Robin: FIFO queue, running process preempted once it has held the
    core for a full quantum.
    """

    algorithm = Algorithm.RR
    label = "Round Robin"
    uses_quantum = True

    def should_preempt(self, record, queue_head, current_time, quantum):
        return record.dispatch_elapsed(current_time) >= quantum


class PreemptivePriorityPolicy(SchedulingPolicy):
    """
    Preemptive priority: lower number means higher priority. A running
    process yields as soon as a strictly higher-priority process heads the
    ready queue.
    """

    algorithm = Algorithm.PP
    label = "Preemptive Priority"
    reorders = True

    def order_key(self, record: ProcessRecord, current_time: float):
        return record.priority

    def should_preempt(self, record, queue_head, current_time, quantum):
        return queue_head is not None and queue_head.priority < record.priority


ALGORITHMS = {
    "fcfs": FCFSPolicy,
    "sjf": SJFPolicy,
    "rr": RoundRobinPolicy,
    "pp": PreemptivePriorityPolicy,
}


def get_policy(name: str) -> SchedulingPolicy:
    """
    Look up the policy for an algorithm name (case-insensitive).
    """
    key = str(getattr(name, "value", name)).lower()
    if key not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (use fcfs, sjf, rr or pp)")
    return ALGORITHMS[key]()
