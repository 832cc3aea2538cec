from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import SchedulerError
from .metrics import format_statistics
from .models import HistorySnapshot, Statistics


def format_trace(
    time_quantum: int,
    process_count: int,
    history: Sequence[HistorySnapshot],
    stats: Optional[Statistics],
) -> str:
    """
    Render a finished run as the line-oriented execution trace.

    The text depends only on the history and the statistics, so the same run
    always exports the same bytes.
    """
    if not history:
        raise SchedulerError("No simulation data to export; run a simulation first")

    lines: List[str] = [
        "Round Robin Scheduling Execution Trace",
        "=========================================",
        f"Time Quantum: {time_quantum}",
        f"Total Processes: {process_count}",
        f"Total Simulation Time: {history[-1].time}",
        "",
        "Time\tCurrent Process\tReady Queue\tCompleted Processes",
        "----\t---------------\t-----------\t-------------------",
    ]

    for snap in history:
        current = snap.current_pid or "IDLE"
        ready = " ".join(snap.ready_queue) or "-"
        done = " ".join(snap.completed) or "-"
        lines.append(f"{snap.time}\t{current}\t\t{ready}\t\t{done}")

    text = "\n".join(lines) + "\n"

    if stats is not None:
        shown = format_statistics(stats)
        text += (
            "\nStatistics:\n"
            f"- Average Waiting Time: {shown['avg_waiting']}\n"
            f"- Average Turnaround Time: {shown['avg_turnaround']}\n"
            f"- Throughput: {shown['throughput']}\n"
            f"- CPU Utilization: {shown['cpu_utilization']}%\n"
        )

    return text


def trace_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"round_robin_trace_{now.strftime('%Y-%m-%dT%H-%M-%S')}.txt"


def write_trace(path: str | Path, text: str) -> Path:
    path = Path(path)
    if path.is_dir():
        path = path / trace_filename()
    path.write_text(text, encoding="utf-8")
    return path


def history_to_json(history: Sequence[HistorySnapshot], indent: Optional[int] = 2) -> str:
    return json.dumps([snap.to_dict() for snap in history], indent=indent)
