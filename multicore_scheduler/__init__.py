"""
Multi-core CPU scheduler simulator.

Runs a fixed set of synthetic processes on N simulated cores under FCFS,
SJF, round-robin or preemptive-priority scheduling, in real time, and
reports turnaround, wait, CPU utilization and throughput.
"""

__all__ = ["cli", "run_simulation"]

from .simulator import run_simulation
