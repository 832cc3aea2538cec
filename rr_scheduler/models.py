from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidInput


class ProcessState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"


def _as_int(value: Any, name: str) -> int:
    # Form/CSV input arrives as text, so digit strings are accepted.
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"{name} must be an integer, got {value!r}")


@dataclass
class Process:
    """
    One schedulable unit of work plus the metrics a run fills in.

    Fields are validated and normalised on construction: the id becomes a
    stripped string, times become ints, and InvalidInput is raised for an
    empty id, a negative arrival or a burst below 1.
    """

    pid: str
    arrival_time: int
    burst_time: int
    remaining_time: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0
    completion_time: int = 0
    start_time: Optional[int] = None
    state: ProcessState = ProcessState.READY

    def __post_init__(self) -> None:
        pid_text = "" if self.pid is None else str(self.pid).strip()
        if not pid_text:
            raise InvalidInput("Process ID must not be empty")

        arrival = _as_int(self.arrival_time, "arrival_time")
        burst = _as_int(self.burst_time, "burst_time")
        if arrival < 0:
            raise InvalidInput(f"arrival_time must be >= 0 (process {pid_text}, got {arrival})")
        if burst < 1:
            raise InvalidInput(f"burst_time must be >= 1 (process {pid_text}, got {burst})")

        self.pid = pid_text
        self.arrival_time = arrival
        self.burst_time = burst
        self.remaining_time = burst

    @classmethod
    def create(cls, pid: Any, arrival_time: Any, burst_time: Any) -> "Process":
        return cls(pid=pid, arrival_time=arrival_time, burst_time=burst_time)

    def reset(self) -> None:
        self.remaining_time = self.burst_time
        self.waiting_time = 0
        self.turnaround_time = 0
        self.completion_time = 0
        self.start_time = None
        self.state = ProcessState.READY


@dataclass(frozen=True)
class GanttEntry:
    """
    Half-open interval [start, end) during which one process held the CPU.
    """

    pid: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ProcessSnapshot:
    pid: str
    state: ProcessState
    remaining_time: int
    waiting_time: int
    turnaround_time: int

    @classmethod
    def of(cls, process: Process) -> "ProcessSnapshot":
        return cls(
            pid=process.pid,
            state=process.state,
            remaining_time=process.remaining_time,
            waiting_time=process.waiting_time,
            turnaround_time=process.turnaround_time,
        )


@dataclass(frozen=True)
class HistorySnapshot:
    """
    Complete scheduler state at one simulated instant, used for playback.
    """

    time: int
    current_pid: Optional[str]
    ready_queue: Tuple[str, ...] = ()
    completed: Tuple[str, ...] = ()
    processes: Tuple[ProcessSnapshot, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "current_process": self.current_pid,
            "ready_queue": list(self.ready_queue),
            "completed_processes": list(self.completed),
            "processes": [
                {
                    "id": p.pid,
                    "state": p.state.value,
                    "remaining_time": p.remaining_time,
                    "waiting_time": p.waiting_time,
                    "turnaround_time": p.turnaround_time,
                }
                for p in self.processes
            ],
        }


@dataclass(frozen=True)
class Statistics:
    avg_waiting_time: float
    avg_turnaround_time: float
    throughput: float
    cpu_utilization: float
    completed_count: int
    makespan: int
    cpu_busy_time: int
