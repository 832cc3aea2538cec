"""
Round robin scheduler package.

Simulates preemptive round-robin CPU scheduling and records a replayable
history of scheduler state, with a command-line front end for running,
comparing and exporting simulations.
"""

from .engine import RoundRobinScheduler
from .errors import (
    DuplicateId,
    InvalidInput,
    InvalidQuantum,
    NoProcesses,
    SchedulerError,
    StatisticsUnavailable,
)
from .models import GanttEntry, HistorySnapshot, Process, ProcessSnapshot, ProcessState, Statistics
from .player import HistoryPlayer

__all__ = [
    "RoundRobinScheduler",
    "Process",
    "ProcessState",
    "ProcessSnapshot",
    "GanttEntry",
    "HistorySnapshot",
    "Statistics",
    "HistoryPlayer",
    "SchedulerError",
    "InvalidInput",
    "DuplicateId",
    "InvalidQuantum",
    "NoProcesses",
    "StatisticsUnavailable",
    "cli",
]
