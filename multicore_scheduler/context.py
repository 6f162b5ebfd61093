from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

from .algorithms import Algorithm, get_policy
from .models import DispatchSlice, SchedulerConfig
from .process import ProcessRecord
from .ready_queue import ReadyQueue


class SchedulerContext:
    """
    State shared by the dispatcher and every core worker.

    ``lock`` guards the ready queue, the IO and terminated lists, the
    timeline and the run timestamps. ``finished`` is set exactly once, when
    every process has terminated.
    """

    def __init__(self, config: SchedulerConfig, clock: Callable[[], float] = time.monotonic):
        self.policy = get_policy(config.algorithm)
        self.algorithm: Algorithm = self.policy.algorithm
        self.cores = config.cores
        self.context_switch = config.context_switch
        self.time_slice = config.time_slice
        self.poll_interval = config.poll_interval

        self.lock = threading.Lock()
        self.finished = threading.Event()
        self.ready_queue = ReadyQueue(self.policy)
        self.io_queue: List[ProcessRecord] = []
        self.terminated: List[ProcessRecord] = []
        self.timeline: List[DispatchSlice] = []

        self.half_time: Optional[float] = None
        self.half_count = 0
        self.end_time: Optional[float] = None
        self.error: Optional[BaseException] = None

        self._clock = clock
        self._start = clock()

    def now(self) -> float:
        """Milliseconds since the context was created."""
        return (self._clock() - self._start) * 1000.0

    def fail(self, error: BaseException) -> None:
        """Record a crash in a worker and stop the run."""
        with self.lock:
            if self.error is None:
                self.error = error
        self.finished.set()

    def pause(self, milliseconds: float) -> bool:
        """
        Sleep up to ``milliseconds``, returning early (True) if the run ends.
        """
        return self.finished.wait(max(0.0, milliseconds) / 1000.0)
