from __future__ import annotations

import logging
import threading
from typing import Optional

from .context import SchedulerContext
from .models import DispatchSlice
from .process import ProcessRecord

logger = logging.getLogger(__name__)

TERMINATED = "terminated"
BLOCKED = "blocked"
PREEMPTED = "preempted"


class CoreWorker(threading.Thread):
    """
    Simulated CPU core.

    Takes the head of the ready queue, lets it run until its CPU burst is
    done or the policy preempts it, hands it back to the ready queue, the IO
    list or the terminated list, then pauses for the context-switch delay.
    While a process is held here no other thread mutates it.
    """

    def __init__(self, core_id: int, context: SchedulerContext):
        super().__init__(name=f"core-{core_id}", daemon=True)
        self.core_id = core_id
        self.context = context
        self.current: Optional[ProcessRecord] = None
        self.dispatch_time: Optional[float] = None

    def run(self) -> None:
        ctx = self.context
        logger.debug("Core %d online", self.core_id)
        try:
            while not ctx.finished.is_set():
                outcome = self.step()
                if outcome is not None:
                    ctx.pause(ctx.context_switch)
                else:
                    ctx.pause(ctx.poll_interval)
        except Exception as exc:
            logger.exception("Core %d crashed", self.core_id)
            ctx.fail(exc)
            raise
        logger.debug("Core %d offline", self.core_id)

    def step(self) -> Optional[str]:
        """
        Run one evaluation of this core.

        Returns the outcome ("terminated", "blocked" or "preempted") when the
        held process was released, None otherwise.
        """
        if self.current is None and not self._acquire():
            return None
        return self._evaluate()

    def _acquire(self) -> bool:
        ctx = self.context
        with ctx.lock:
            record = ctx.ready_queue.pop()
            if record is None:
                return False
            now = ctx.now()
            record.dispatch(self.core_id, now)
        self.current = record
        self.dispatch_time = now
        logger.debug("Core %d dispatched P%s at %.1f ms", self.core_id, record.pid, now)
        return True

    def _evaluate(self) -> Optional[str]:
        ctx = self.context
        record = self.current
        with ctx.lock:
            now = ctx.now()
            if record.remaining_time(now) <= 0:
                record.terminate(now)
                ctx.terminated.append(record)
                outcome = TERMINATED
            elif record.is_burst_complete(now):
                record.block(now)
                ctx.io_queue.append(record)
                outcome = BLOCKED
            elif ctx.policy.should_preempt(record, ctx.ready_queue.peek(), now, ctx.time_slice):
                record.preempt(now)
                ctx.ready_queue.push(record)
                outcome = PREEMPTED
            else:
                return None
            ctx.timeline.append(
                DispatchSlice(
                    pid=record.pid,
                    core=self.core_id,
                    start_time=self.dispatch_time,
                    end_time=now,
                    outcome=outcome,
                )
            )
        self.current = None
        self.dispatch_time = None
        logger.debug("Core %d released P%s (%s) at %.1f ms", self.core_id, record.pid, outcome, now)
        return outcome
