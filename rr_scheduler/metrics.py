from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .errors import StatisticsUnavailable
from .models import GanttEntry, Process, ProcessState, Statistics


def compute_statistics(
    processes: Iterable[Process],
    gantt: Sequence[GanttEntry],
    makespan: int,
) -> Statistics:
    """
    Derive averages, throughput and CPU utilization from a finished run.

    Only terminated processes are averaged. Raises StatisticsUnavailable when
    nothing has completed yet (no successful run).
    """
    completed: List[Process] = [p for p in processes if p.state is ProcessState.TERMINATED]
    if not completed or makespan <= 0:
        raise StatisticsUnavailable("No completed processes; run a simulation first")

    n = len(completed)
    cpu_busy_time = sum(entry.duration for entry in gantt)

    return Statistics(
        avg_waiting_time=sum(p.waiting_time for p in completed) / n,
        avg_turnaround_time=sum(p.turnaround_time for p in completed) / n,
        throughput=n / makespan,
        cpu_utilization=100 * cpu_busy_time / makespan,
        completed_count=n,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
    )


def format_statistics(stats: Statistics) -> Dict[str, str]:
    """
    Display strings with the fixed precision used by the trace export.
    """
    return {
        "avg_waiting": f"{stats.avg_waiting_time:.2f}",
        "avg_turnaround": f"{stats.avg_turnaround_time:.2f}",
        "throughput": f"{stats.throughput:.3f}",
        "cpu_utilization": f"{stats.cpu_utilization:.1f}",
    }
