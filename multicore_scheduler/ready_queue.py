from __future__ import annotations

from typing import Iterator, List, Optional

from .algorithms import SchedulingPolicy
from .process import ProcessRecord


class ReadyQueue:
    """
    Ready processes in dispatch order.

    Not locked on its own: every caller holds ``SchedulerContext.lock``.
    New and returning processes are appended at the tail; ``resort`` applies
    the policy ordering (a stable sort, so ties keep insertion order).
    """

    def __init__(self, policy: SchedulingPolicy):
        self.policy = policy
        self._items: List[ProcessRecord] = []

    def push(self, record: ProcessRecord) -> None:
        self._items.append(record)

    def pop(self) -> Optional[ProcessRecord]:
        if not self._items:
            return None
        return self._items.pop(0)

    def peek(self) -> Optional[ProcessRecord]:
        if not self._items:
            return None
        return self._items[0]

    def resort(self, current_time: float) -> None:
        if not self.policy.reorders:
            return
        self._items.sort(key=lambda record: self.policy.order_key(record, current_time))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(list(self._items))
