from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .context import SchedulerContext
from .models import ProcessSnapshot, ProcessState
from .process import ProcessRecord

logger = logging.getLogger(__name__)

TickCallback = Callable[[List[ProcessSnapshot]], None]


class Dispatcher:
    """
    Admission and aggregation loop run on the main thread.

    Each tick admits processes whose start time has passed, returns processes
    whose IO burst has elapsed to the ready queue, resorts the queue for the
    active algorithm and detects the end of the run.
    """

    def __init__(
        self,
        context: SchedulerContext,
        processes: List[ProcessRecord],
        on_tick: Optional[TickCallback] = None,
    ):
        self.context = context
        self.processes = processes
        self.on_tick = on_tick

    def tick(self) -> List[ProcessSnapshot]:
        ctx = self.context
        total = len(self.processes)
        launched = []
        returned = []
        ended = False
        with ctx.lock:
            now = ctx.now()

            for record in self.processes:
                if record.state == ProcessState.NOT_STARTED and record.start_time <= now:
                    record.launch(now)
                    ctx.ready_queue.push(record)
                    launched.append(record.pid)

            for record in list(ctx.io_queue):
                if record.is_burst_complete(now):
                    ctx.io_queue.remove(record)
                    record.unblock(now)
                    ctx.ready_queue.push(record)
                    returned.append(record.pid)

            ctx.ready_queue.resort(now)

            done = len(ctx.terminated)
            if ctx.half_time is None and done * 2 >= total:
                ctx.half_time = now
                ctx.half_count = done
            if done == total and not ctx.finished.is_set():
                ctx.end_time = now
                ctx.finished.set()
                ended = True

            snapshots = [
                record.snapshot(now)
                for record in self.processes
                if record.state != ProcessState.NOT_STARTED
            ]

        # log outside the lock
        for pid in launched:
            logger.debug("P%s launched at %.1f ms", pid, now)
        for pid in returned:
            logger.debug("P%s finished i/o at %.1f ms", pid, now)
        if ended:
            logger.info("All %d processes terminated after %.1f ms", total, now)

        if self.on_tick is not None:
            self.on_tick(snapshots)
        return snapshots

    def run(self, tick_interval: float) -> None:
        """Tick every ``tick_interval`` milliseconds until the run ends."""
        while not self.context.finished.is_set():
            self.tick()
            if self.context.finished.is_set():
                break
            time.sleep(tick_interval / 1000.0)
