from __future__ import annotations

from typing import List, Optional

from .models import ProcessDetails, ProcessSnapshot, ProcessState


class TransitionError(RuntimeError):
    """Raised when a process is asked to make a transition its state forbids."""


class ProcessRecord:
    """
    State machine and timing accumulator for one simulated process.

    All timestamps are milliseconds since the simulation started. Derived
    metrics (turnaround, wait, cpu, remaining) are recomputed from a handful
    of checkpoints on every call, so reading them any number of times per
    tick never double-counts.

    Even burst indices are CPU bursts, odd indices are IO bursts. When a
    CPU burst is cut short by preemption, its entry in ``bursts`` is reduced
    to the residual amount still to run; ``original_bursts`` keeps the
    durations as supplied.
    """

    def __init__(self, details: ProcessDetails, current_time: float = 0.0):
        if not details.bursts or len(details.bursts) % 2 == 0:
            raise ValueError(
                f"Process {details.pid}: bursts must alternate CPU/IO and start and end with CPU"
            )

        self.pid = details.pid
        self.priority = details.priority
        self.start_time = details.start_time
        self.original_bursts = tuple(details.bursts)
        self.bursts: List[float] = [float(b) for b in details.bursts]
        self.current_burst = 0
        self.core: Optional[int] = None
        self.total_cpu_time = float(sum(self.original_bursts[0::2]))

        # checkpoints
        self.launch_time: Optional[float] = None
        self.burst_start_time: Optional[float] = None
        self.queue_entry_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.wait_history: List[float] = []

        if self.start_time == 0:
            self.state = ProcessState.READY
            self.launch_time = current_time
            self.queue_entry_time = current_time
        else:
            self.state = ProcessState.NOT_STARTED

    def __repr__(self) -> str:
        return (
            f"<ProcessRecord pid={self.pid} state={self.state.name} "
            f"burst={self.current_burst}/{len(self.bursts)} core={self.core}>"
        )

    # --- transitions ---

    def _require(self, *states: ProcessState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.name for s in states)
            raise TransitionError(f"Process {self.pid} is {self.state.name}, expected {allowed}")

    def launch(self, current_time: float) -> None:
        """NotStarted -> Ready."""
        self._require(ProcessState.NOT_STARTED)
        if self.launch_time is None:
            self.launch_time = current_time
        self.queue_entry_time = current_time
        self.state = ProcessState.READY

    def dispatch(self, core: int, current_time: float) -> None:
        """Ready -> Running on ``core``."""
        self._require(ProcessState.READY)
        self.wait_history.append(current_time - self.queue_entry_time)
        self.queue_entry_time = None
        self.burst_start_time = current_time
        self.core = core
        self.state = ProcessState.RUNNING

    def block(self, current_time: float) -> None:
        """Running -> IO once the current CPU burst has fully run."""
        self._require(ProcessState.RUNNING)
        self.current_burst += 1
        self.burst_start_time = current_time
        self.core = None
        self.state = ProcessState.IO

    def unblock(self, current_time: float) -> None:
        """IO -> Ready once the IO burst has elapsed."""
        self._require(ProcessState.IO)
        self.current_burst += 1
        self.burst_start_time = None
        self.queue_entry_time = current_time
        self.state = ProcessState.READY

    def preempt(self, current_time: float) -> None:
        """Running -> Ready before the burst is done; keeps the residual."""
        self._require(ProcessState.RUNNING)
        self.bursts[self.current_burst] -= self._slice_elapsed(current_time)
        self.burst_start_time = None
        self.queue_entry_time = current_time
        self.core = None
        self.state = ProcessState.READY

    def terminate(self, current_time: float) -> None:
        """Running -> Terminated after the final CPU burst."""
        self._require(ProcessState.RUNNING)
        self.current_burst = len(self.bursts)
        self.burst_start_time = None
        self.end_time = current_time
        self.core = None
        self.state = ProcessState.TERMINATED

    # --- burst bookkeeping ---

    def _slice_elapsed(self, current_time: float) -> float:
        # CPU time consumed in the current dispatch, capped at the residual
        if self.state != ProcessState.RUNNING:
            return 0.0
        return min(max(0.0, current_time - self.burst_start_time), self.bursts[self.current_burst])

    def dispatch_elapsed(self, current_time: float) -> float:
        """Wall time since this dispatch (or IO burst) began, uncapped."""
        if self.burst_start_time is None:
            return 0.0
        return current_time - self.burst_start_time

    def is_burst_complete(self, current_time: float) -> bool:
        if self.state not in (ProcessState.RUNNING, ProcessState.IO):
            return False
        return self.dispatch_elapsed(current_time) >= self.bursts[self.current_burst]

    # --- derived metrics (milliseconds) ---

    def cpu_time(self, current_time: float) -> float:
        if self.state == ProcessState.TERMINATED:
            return self.total_cpu_time
        finished = sum(self.original_bursts[i] for i in range(0, min(self.current_burst, len(self.bursts)), 2))
        current = 0.0
        if self.current_burst % 2 == 0:
            # earlier slices of a preempted burst plus the slice in progress
            current = self.original_bursts[self.current_burst] - self.bursts[self.current_burst]
            current += self._slice_elapsed(current_time)
        return finished + current

    def remaining_time(self, current_time: float) -> float:
        if self.state == ProcessState.TERMINATED:
            return 0.0
        return max(0.0, self.total_cpu_time - self.cpu_time(current_time))

    def wait_time(self, current_time: float) -> float:
        waited = sum(self.wait_history)
        if self.state == ProcessState.READY and self.queue_entry_time is not None:
            waited += current_time - self.queue_entry_time
        return waited

    def turnaround_time(self, current_time: float) -> float:
        if self.launch_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else current_time
        return end - self.launch_time

    def snapshot(self, current_time: float) -> ProcessSnapshot:
        return ProcessSnapshot(
            pid=self.pid,
            priority=self.priority,
            state=self.state,
            core=self.core,
            turnaround_time=self.turnaround_time(current_time) / 1000.0,
            wait_time=self.wait_time(current_time) / 1000.0,
            cpu_time=self.cpu_time(current_time) / 1000.0,
            remaining_time=self.remaining_time(current_time) / 1000.0,
        )
