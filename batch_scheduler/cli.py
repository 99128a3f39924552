from __future__ import annotations

import argparse
import logging
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, resolve_algorithm, run_algorithm, run_all
from .config import DEFAULT_ALGORITHMS, DEFAULT_INPUT, DEFAULT_MAX_TASKS, DEFAULT_OUTPUT, DEFAULT_QUANTUM, SimulationConfig
from .errors import EXIT_INVALID_PARAMETERS, EXIT_OK, SchedulerError
from .gantt import build_gantt_panel
from .log import configure_logging
from .models import SimulationReport
from .report import write_report
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-scheduler",
        description="Batch CPU scheduling simulator (FCFS, RR, NSJF, PSJF).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging on stderr.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--input",
            "-i",
            default=DEFAULT_INPUT,
            help=f"Task spec (name,arrival,burst per line), JSON or CSV workload (default: {DEFAULT_INPUT}).",
        )
        sub.add_argument(
            "--quantum",
            "-q",
            type=int,
            default=DEFAULT_QUANTUM,
            help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
        )
        sub.add_argument(
            "--max-tasks",
            type=int,
            default=DEFAULT_MAX_TASKS,
            help=f"Read at most this many records (default: {DEFAULT_MAX_TASKS}).",
        )

    run_parser = subparsers.add_parser("run", help="Run the algorithms and write the text report.")
    add_common(run_parser)
    run_parser.add_argument(
        "--output",
        "-o",
        default=DEFAULT_OUTPUT,
        help=f"Report destination (default: {DEFAULT_OUTPUT}).",
    )
    run_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help="Algorithms to run, in report order (default: fcfs rr nsjf psjf).",
    )

    show_parser = subparsers.add_parser("show", help="Show one algorithm's Gantt chart and waiting times.")
    add_common(show_parser)
    show_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )

    compare_parser = subparsers.add_parser("compare", help="Compare average waiting time across algorithms.")
    add_common(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help="Algorithms to compare (default: fcfs rr nsjf psjf).",
    )

    return parser


def _config_from_args(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig(
        quantum=args.quantum,
        max_tasks=args.max_tasks,
        input_path=args.input,
    )
    if getattr(args, "output", None):
        config.output_path = args.output
    if getattr(args, "algorithms", None):
        config.algorithms = [resolve_algorithm(name) for name in args.algorithms]
    elif getattr(args, "algorithm", None):
        config.algorithms = [resolve_algorithm(args.algorithm)]
    config.validate()
    return config


def _print_result(result: SimulationReport, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    console.print(build_gantt_panel(result))

    console.print()

    wait_table = Table(title="Waiting times", box=box.SIMPLE_HEAVY)
    wait_table.add_column("Task", justify="center")
    wait_table.add_column("Wait", justify="right")
    for t in result.waiting.tasks:
        wait_table.add_row(t.name, str(t.waiting_time))
    console.print(wait_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{result.waiting.average:.2f}")
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (tasks/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _print_comparison(results: List[SimulationReport], title: str, console: Console) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Makespan", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for result in results:
        sys = result.system
        summary_table.add_row(
            result.label,
            "" if result.quantum is None else str(result.quantum),
            f"{result.waiting.average:.2f}",
            "" if sys is None else str(sys.makespan),
            "" if sys is None else f"{sys.cpu_utilization*100:.1f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()
    err_console = Console(stderr=True)

    try:
        config = _config_from_args(args)
        logger.debug("Configuration: %s", config)
        tasks = load_workload(config.input_path, max_tasks=config.max_tasks)

        if args.command == "run":
            results = run_all(tasks, config.quantum, config.algorithms)
            write_report(config.output_path, results)
            console.print(f"Wrote {len(results)} schedules for {len(tasks)} tasks to [green]{config.output_path}[/green]")
            return EXIT_OK

        if args.command == "show":
            _print_result(run_algorithm(config.algorithms[0], tasks, quantum=config.quantum), console)
            return EXIT_OK

        if args.command == "compare":
            results = run_all(tasks, config.quantum, config.algorithms)
            _print_comparison(results, f"Algorithm comparison: {config.input_path}", console)
            return EXIT_OK
    except SchedulerError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return exc.exit_code
    except ValueError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return EXIT_INVALID_PARAMETERS

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
