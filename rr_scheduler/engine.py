from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

from .errors import DuplicateId, InvalidQuantum, NoProcesses
from .metrics import compute_statistics
from .models import (
    GanttEntry,
    HistorySnapshot,
    Process,
    ProcessSnapshot,
    ProcessState,
    Statistics,
)

log = logging.getLogger(__name__)


class RoundRobinScheduler:
    """
    Preemptive round-robin simulation over a fixed set of processes.

    Processes are registered with add_process(), then run(quantum) simulates
    the whole schedule in one synchronous pass and publishes the Gantt chart,
    the playback history and the final per-process metrics.
    """

    def __init__(self) -> None:
        self._processes: List[Process] = []
        self._by_pid: Dict[str, Process] = {}
        self._ready: Deque[str] = deque()
        self._completed: List[str] = []
        self._gantt: Tuple[GanttEntry, ...] = ()
        self._history: Tuple[HistorySnapshot, ...] = ()
        self._time = 0
        self._quantum: Optional[int] = None

    # -- registration -------------------------------------------------------

    def add_process(self, process: Process) -> None:
        if process.pid in self._by_pid:
            raise DuplicateId(f'Process ID "{process.pid}" already exists')

        self._processes.append(process)
        # list.sort is stable, so equal arrivals keep insertion order.
        self._processes.sort(key=lambda p: p.arrival_time)
        self._by_pid[process.pid] = process
        log.debug("added process %s (arrival=%d, burst=%d)", process.pid, process.arrival_time, process.burst_time)

    def add(self, pid: Any, arrival_time: Any, burst_time: Any) -> Process:
        process = Process.create(pid, arrival_time, burst_time)
        self.add_process(process)
        return process

    def clear(self) -> None:
        self._processes = []
        self._by_pid = {}
        self._ready = deque()
        self._completed = []
        self._gantt = ()
        self._history = ()
        self._time = 0
        self._quantum = None
        log.debug("scheduler cleared")

    # -- read-only views ----------------------------------------------------

    @property
    def processes(self) -> Tuple[Process, ...]:
        return tuple(self._processes)

    @property
    def history(self) -> Tuple[HistorySnapshot, ...]:
        return self._history

    @property
    def gantt_chart(self) -> Tuple[GanttEntry, ...]:
        return self._gantt

    @property
    def completed(self) -> Tuple[str, ...]:
        return tuple(self._completed)

    @property
    def current_time(self) -> int:
        return self._time

    @property
    def time_quantum(self) -> Optional[int]:
        return self._quantum

    def get(self, pid: str) -> Process:
        return self._by_pid[pid]

    # -- simulation ---------------------------------------------------------

    def run(self, time_quantum: int) -> int:
        """
        Simulate to completion with the given quantum and return the makespan.

        Raises InvalidQuantum for a quantum below 1 and NoProcesses when
        nothing is registered; in both cases the previous results stay.
        """
        if isinstance(time_quantum, bool) or not isinstance(time_quantum, int) or time_quantum < 1:
            raise InvalidQuantum(f"Time quantum must be an integer >= 1, got {time_quantum!r}")
        if not self._processes:
            raise NoProcesses("No processes to simulate")

        log.info("starting round robin run: %d processes, quantum=%d", len(self._processes), time_quantum)

        for p in self._processes:
            p.reset()

        pending: Deque[Process] = deque(self._processes)
        ready: Deque[str] = deque()
        completed: List[str] = []
        gantt: List[GanttEntry] = []
        history: List[HistorySnapshot] = []
        last_release: Dict[str, int] = {}
        time = 0

        def record(current: Optional[str]) -> None:
            history.append(
                HistorySnapshot(
                    time=time,
                    current_pid=current,
                    ready_queue=tuple(ready),
                    completed=tuple(completed),
                    processes=tuple(ProcessSnapshot.of(p) for p in self._processes),
                )
            )

        while pending or ready:
            while pending and pending[0].arrival_time <= time:
                arrived = pending.popleft()
                arrived.state = ProcessState.READY
                ready.append(arrived.pid)

            if not ready:
                time += 1
                record(None)
                continue

            pid = ready.popleft()
            process = self._by_pid[pid]

            if process.start_time is None:
                process.start_time = time
            process.waiting_time += time - last_release.get(pid, process.arrival_time)

            process.state = ProcessState.RUNNING
            record(pid)

            run_time = min(time_quantum, process.remaining_time)
            gantt.append(GanttEntry(pid=pid, start=time, end=time + run_time))
            log.debug("t=%d dispatch %s for %d", time, pid, run_time)
            time += run_time
            process.remaining_time -= run_time
            last_release[pid] = time

            if process.remaining_time == 0:
                process.completion_time = time
                process.turnaround_time = process.completion_time - process.arrival_time
                process.state = ProcessState.TERMINATED
                completed.append(pid)
                log.debug("t=%d %s terminated", time, pid)
            else:
                process.state = ProcessState.WAITING
                ready.append(pid)

            record(None)

        self._ready = ready
        self._completed = completed
        self._gantt = tuple(gantt)
        self._history = tuple(history)
        self._time = time
        self._quantum = time_quantum

        log.info("run finished: makespan=%d, %d gantt entries, %d snapshots", time, len(gantt), len(history))
        return time

    def statistics(self) -> Statistics:
        return compute_statistics(self._processes, self._gantt, self._time)
