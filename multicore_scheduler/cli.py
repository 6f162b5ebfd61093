from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS
from .display import build_process_table, build_statistics_table
from .gantt import build_rich_gantt
from .metrics import summarize_snapshots
from .models import SchedulerConfig, SimulationResult
from .simulator import run_simulation
from .workload_io import load_config, validate_config


def _add_override_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cores",
        "-c",
        type=int,
        default=None,
        help="Number of CPU cores (overrides the config file).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Round-robin time slice in ms (overrides the config file).",
    )
    parser.add_argument(
        "--context-switch",
        "-s",
        type=int,
        default=None,
        help="Context-switch delay in ms (overrides the config file).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multicore-scheduler",
        description="Multi-core CPU scheduling simulator (FCFS, SJF, RR, PP).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling events (dispatch, preemption, i/o, termination).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one configuration in real time.")
    run_parser.add_argument("config", help="Path to JSON config or CSV process table.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        default=None,
        help="Algorithm to use (fcfs, sjf, rr, pp); overrides the config file.",
    )
    _add_override_arguments(run_parser)
    run_parser.add_argument(
        "--no-live",
        action="store_true",
        help="Do not redraw the process table while the simulation runs.",
    )
    run_parser.add_argument(
        "--gantt",
        action="store_true",
        help="Show a per-core Gantt chart after the run.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument("config", help="Path to JSON config or CSV process table.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS.keys()),
        help="Algorithms to compare (default: fcfs sjf rr pp).",
    )
    _add_override_arguments(compare_parser)

    return parser


def _apply_overrides(config: SchedulerConfig, args: argparse.Namespace) -> SchedulerConfig:
    changes = {}
    if getattr(args, "algorithm", None):
        changes["algorithm"] = args.algorithm.upper()
    if args.cores is not None:
        changes["cores"] = args.cores
    if args.quantum is not None:
        changes["time_slice"] = args.quantum
    if args.context_switch is not None:
        changes["context_switch"] = args.context_switch
    config = dataclasses.replace(config, **changes)
    validate_config(config)
    return config


def _print_result(result: SimulationResult, console: Console, show_gantt: bool) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print(f"[bold]Cores:[/bold] {result.cores}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum} ms")
    console.print()

    if show_gantt:
        panel, time_marks = build_rich_gantt(result.timeline, result.cores)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
        console.print()

    if result.statistics:
        console.print(build_statistics_table(result.statistics))


def _run(config: SchedulerConfig, args: argparse.Namespace, console: Console) -> None:
    if args.no_live:
        result = run_simulation(config)
        console.print(build_process_table(result.processes, title="Final process states"))
    else:
        with Live(build_process_table([]), console=console, refresh_per_second=30) as live:
            result = run_simulation(config, on_tick=lambda snaps: live.update(build_process_table(snaps)))
            live.update(build_process_table(result.processes))
    console.print()
    _print_result(result, console, show_gantt=args.gantt)


def _run_compare(config: SchedulerConfig, algorithms: list[str], console: Console) -> None:
    """
    Run each algorithm on the same workload and print the summary table.
    """
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm", no_wrap=True)
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting (s)", justify="right")
    summary_table.add_column("Avg turnaround (s)", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for alg in algorithms:
        alg_config = dataclasses.replace(config, algorithm=alg.upper())
        validate_config(alg_config)
        console.print(f"[dim]Running {alg_config.algorithm}...[/dim]")
        result = run_simulation(alg_config)
        summary = summarize_snapshots(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{result.statistics.cpu_utilization:.1f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(threadName)s %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )

    try:
        config = _apply_overrides(load_config(Path(args.config)), args)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    if args.command == "run":
        _run(config, args, console)
        return 0

    if args.command == "compare":
        try:
            _run_compare(config, args.algorithms, console)
        except ValueError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            return 1
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
