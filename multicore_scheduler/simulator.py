from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .context import SchedulerContext
from .dispatcher import Dispatcher, TickCallback
from .metrics import compute_run_statistics
from .models import ProcessState, SchedulerConfig, SimulationResult
from .process import ProcessRecord
from .worker import CoreWorker

logger = logging.getLogger(__name__)


def build_processes(context: SchedulerContext, config: SchedulerConfig) -> List[ProcessRecord]:
    """
    Create one record per descriptor and queue those that start immediately.
    """
    now = context.now()
    processes = [ProcessRecord(details, now) for details in config.processes]
    with context.lock:
        for record in processes:
            if record.state == ProcessState.READY:
                context.ready_queue.push(record)
        context.ready_queue.resort(now)
    return processes


def run_simulation(
    config: SchedulerConfig,
    on_tick: Optional[TickCallback] = None,
    clock: Callable[[], float] = time.monotonic,
) -> SimulationResult:
    """
    Run a full wall-clock simulation: one thread per core plus the
    dispatcher loop on the calling thread. Blocks until every process has
    terminated.
    """
    context = SchedulerContext(config, clock=clock)
    processes = build_processes(context, config)
    logger.info(
        "Starting %s on %d core(s) with %d process(es)",
        context.algorithm.value,
        config.cores,
        len(processes),
    )

    workers = [CoreWorker(core_id, context) for core_id in range(config.cores)]
    for worker in workers:
        worker.start()

    dispatcher = Dispatcher(context, processes, on_tick=on_tick)
    try:
        dispatcher.run(config.tick_interval)
    finally:
        context.finished.set()
        for worker in workers:
            worker.join()

    if context.error is not None:
        raise RuntimeError("Scheduling core failed") from context.error

    end_time = context.end_time if context.end_time is not None else context.now()
    snapshots = [record.snapshot(end_time) for record in processes]
    statistics = compute_run_statistics(
        snapshots,
        duration=end_time,
        half_time=context.half_time,
        half_count=context.half_count,
        cores=config.cores,
    )
    logger.info("Run finished in %.3f s", statistics.duration)

    return SimulationResult(
        algorithm=context.policy.label,
        quantum=config.time_slice if context.policy.uses_quantum else None,
        cores=config.cores,
        processes=snapshots,
        timeline=sorted(context.timeline, key=lambda s: (s.start_time, s.core)),
        statistics=statistics,
    )
