from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_QUANTUM, DEFAULT_STEP_DELAY, SimulationConfig
from .engine import RoundRobinScheduler
from .errors import SchedulerError, StatisticsUnavailable
from .gantt import build_rich_gantt, process_color, render_gantt
from .logging_setup import setup_logging
from .metrics import format_statistics
from .models import HistorySnapshot, Process
from .player import HistoryPlayer
from .trace import format_trace, history_to_json, write_trace
from .workload_io import load_workload, sample_processes

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rr-scheduler",
        description="Round robin CPU scheduling simulator with replayable traces.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR; default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate a workload file with a fixed quantum.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    _add_run_options(run_parser)

    demo_parser = subparsers.add_parser("demo", help="Simulate the built-in sample processes.")
    _add_run_options(demo_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run the same workload under several quanta and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in sample).",
    )
    compare_parser.add_argument(
        "--quanta",
        "-q",
        type=int,
        nargs="+",
        default=[1, 2, 3, 4],
        help="Quanta to compare (default: 1 2 3 4).",
    )

    return parser


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Play back the recorded history frame by frame before the summary.",
    )
    parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between frames when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )
    parser.add_argument(
        "--export-trace",
        metavar="PATH",
        default=None,
        help="Write the execution trace text to PATH (a directory gets a timestamped file).",
    )
    parser.add_argument(
        "--export-history",
        metavar="PATH",
        default=None,
        help="Write the history snapshots as JSON to PATH.",
    )


def simulate(processes: List[Process], quantum: int) -> RoundRobinScheduler:
    scheduler = RoundRobinScheduler()
    for p in processes:
        scheduler.add_process(p)
    scheduler.run(quantum)
    return scheduler


def _pid_text(pid: str) -> Text:
    return Text(pid, style=f"bold {process_color(pid)}")


def _print_frame(console: Console, index: int, total: int, snap: HistorySnapshot) -> None:
    line = Text(f"[{index + 1:>3}/{total}] t={snap.time:>3}  CPU: ")
    line.append(_pid_text(snap.current_pid) if snap.current_pid else Text("IDLE", style="dim"))
    line.append("  ready: ")
    if snap.ready_queue:
        for i, pid in enumerate(snap.ready_queue):
            if i:
                line.append(" ")
            line.append(_pid_text(pid))
    else:
        line.append("-", style="dim")
    line.append("  done: ")
    line.append(" ".join(snap.completed) or "-")
    console.print(line)


def _play_history(scheduler: RoundRobinScheduler, delay: float, console: Console) -> None:
    """
    Timed playback of the recorded history in the terminal.
    """
    player = HistoryPlayer(scheduler.history)
    if not len(player):
        console.print("[red]No history to play back.[/red]")
        return

    console.print(f"[bold]Playing back {len(player)} frames[/bold] (makespan {scheduler.current_time})")
    console.print("[dim]Press Ctrl+C to skip playback.[/dim]")

    for snap in player.frames():
        _print_frame(console, player.index, len(player), snap)
        if not player.at_end:
            time.sleep(delay)


def _print_result(scheduler: RoundRobinScheduler, console: Console, plain: bool = False) -> None:
    console.print("[bold]Algorithm:[/bold] Round Robin")
    console.print(f"[bold]Quantum:[/bold] {scheduler.time_quantum}")
    console.print()

    if plain:
        console.print(render_gantt(scheduler.gantt_chart), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(scheduler.gantt_chart)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Wait", "Turnaround", "State"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "State"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in scheduler.processes:
        proc_table.add_row(
            _pid_text(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.start_time is None else str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            p.state.value,
        )

    console.print(proc_table)
    console.print()

    shown = format_statistics(scheduler.statistics())
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", shown["avg_waiting"])
    sys_table.add_row("Avg turnaround", shown["avg_turnaround"])
    sys_table.add_row("Throughput (proc/time)", shown["throughput"])
    sys_table.add_row("CPU utilization", f"{shown['cpu_utilization']}%")
    sys_table.add_row("Makespan", str(scheduler.current_time))

    console.print(sys_table)


def _export(scheduler: RoundRobinScheduler, args: argparse.Namespace, console: Console) -> None:
    if args.export_trace:
        try:
            stats = scheduler.statistics()
        except StatisticsUnavailable:
            stats = None
        text = format_trace(scheduler.time_quantum, len(scheduler.processes), scheduler.history, stats)
        written = write_trace(args.export_trace, text)
        console.print(f"[green]Execution trace written to {written}[/green]")

    if args.export_history:
        path = Path(args.export_history)
        path.write_text(history_to_json(scheduler.history), encoding="utf-8")
        console.print(f"[green]History written to {path}[/green]")


def _run_and_report(processes: List[Process], args: argparse.Namespace, console: Console) -> None:
    config = SimulationConfig(time_quantum=args.quantum, step_delay=args.step_delay)
    scheduler = simulate(processes, config.time_quantum)

    if args.step:
        try:
            _play_history(scheduler, delay=config.step_delay, console=console)
        except KeyboardInterrupt:
            console.print("[yellow]Playback skipped.[/yellow]")
        console.print()

    _print_result(scheduler, console, plain=args.plain)
    _export(scheduler, args, console)


def _run_compare(processes: List[Process], quanta: List[int], title: str, console: Console) -> None:
    summary_table = Table(title=f"Quantum comparison: {title}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("CPU utilization", justify="right")
    summary_table.add_column("Dispatches", justify="right")

    scheduler = RoundRobinScheduler()
    for p in processes:
        scheduler.add_process(p)

    # The same process set is resimulated; each run resets it first.
    for q in quanta:
        scheduler.run(q)
        shown = format_statistics(scheduler.statistics())
        summary_table.add_row(
            str(q),
            shown["avg_waiting"],
            shown["avg_turnaround"],
            shown["throughput"],
            f"{shown['cpu_utilization']}%",
            str(len(scheduler.gantt_chart)),
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.log_level)

    try:
        if args.command == "run":
            _run_and_report(load_workload(args.workload), args, console)
            return 0

        if args.command == "demo":
            _run_and_report(sample_processes(), args, console)
            return 0

        if args.command == "compare":
            if args.workload:
                processes = load_workload(args.workload)
                title = args.workload
            else:
                processes = sample_processes()
                title = "sample workload"
            _run_compare(processes, args.quanta, title, console)
            return 0
    except SchedulerError as exc:
        log.debug("command %s rejected", args.command, exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2
    except OSError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
