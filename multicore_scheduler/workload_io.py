from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, List, Mapping

from .algorithms import get_policy
from .models import ProcessDetails, SchedulerConfig

DEFAULT_TIME_SLICE = 100


def load_config(path: str | Path) -> SchedulerConfig:
    """
    Load a simulation configuration from a JSON or CSV file.

    A JSON file holds the full configuration; a CSV file holds only the
    process table, and the scheduler settings fall back to defaults (one
    core, FCFS, no context-switch cost) for the caller to override.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        config = _load_json(path)
    elif suffix == ".csv":
        config = SchedulerConfig(
            cores=1,
            algorithm="FCFS",
            context_switch=0,
            time_slice=DEFAULT_TIME_SLICE,
            processes=_load_csv(path),
        )
    else:
        raise ValueError(f"Unsupported config format: {suffix} (use .json or .csv)")

    validate_config(config)
    return config


def _load_json(path: Path) -> SchedulerConfig:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Mapping):
        raise ValueError("JSON config must be an object with cores, algorithm and processes")

    entries = raw.get("processes")
    if not isinstance(entries, list):
        raise ValueError("JSON config must contain a 'processes' list")

    try:
        return SchedulerConfig(
            cores=_as_int(raw.get("cores", 1), "cores"),
            algorithm=str(raw.get("algorithm", "FCFS")).upper(),
            context_switch=_as_int(raw.get("context_switch", 0), "context_switch"),
            time_slice=_as_int(raw.get("time_slice", DEFAULT_TIME_SLICE), "time_slice"),
            processes=[_process_from_mapping(entry) for entry in entries],
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid config {path}: {exc}") from exc


def _as_int(value: Any, field: str) -> int:
    # JSON numbers must already be integers; CSV cells arrive as strings
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{field} must be an integer (got {value!r})")
    return int(value)


def _load_csv(path: Path) -> List[ProcessDetails]:
    processes: List[ProcessDetails] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping: Any) -> ProcessDetails:
    try:
        pid = _as_int(mapping["pid"], "pid")
        priority = _as_int(mapping.get("priority") or 0, "priority")
        start_time = _as_int(mapping.get("start_time") or 0, "start_time")
        bursts = mapping["bursts"]
        if isinstance(bursts, str):
            bursts = bursts.split()
        bursts = [_as_int(b, "burst") for b in bursts]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return ProcessDetails(pid=pid, priority=priority, start_time=start_time, bursts=bursts)


def validate_config(config: SchedulerConfig) -> None:
    """
    Raise ValueError describing the first problem found in ``config``.
    """
    if config.cores < 1:
        raise ValueError(f"cores must be at least 1 (got {config.cores})")
    policy = get_policy(config.algorithm)
    if config.context_switch < 0:
        raise ValueError(f"context_switch must not be negative (got {config.context_switch})")
    if policy.uses_quantum and config.time_slice <= 0:
        raise ValueError(f"time_slice must be positive for {policy.label} (got {config.time_slice})")

    seen = set()
    for p in config.processes:
        if p.pid in seen:
            raise ValueError(f"Duplicate pid {p.pid}")
        seen.add(p.pid)
        if p.priority < 0:
            raise ValueError(f"Process {p.pid}: priority must not be negative")
        if p.start_time < 0:
            raise ValueError(f"Process {p.pid}: start_time must not be negative")
        if not p.bursts or len(p.bursts) % 2 == 0:
            raise ValueError(f"Process {p.pid}: bursts must start and end with a CPU burst")
        if any(b <= 0 for b in p.bursts):
            raise ValueError(f"Process {p.pid}: burst durations must be positive")
