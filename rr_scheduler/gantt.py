from __future__ import annotations

import zlib
from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import GanttEntry

PALETTE = ["blue", "green", "red", "yellow", "magenta", "cyan", "bright_red", "dark_red", "dark_cyan", "purple"]


def process_color(pid: str) -> str:
    """
    Deterministic cosmetic color for a process id.

    Ids carrying a number ("3", "P3") index the palette by that number, any
    other id by a stable checksum of its text.
    """
    digits = "".join(ch for ch in pid if ch.isdigit())
    if digits:
        return PALETTE[int(digits) % len(PALETTE)]
    return PALETTE[zlib.crc32(pid.encode("utf-8")) % len(PALETTE)]


def render_gantt(entries: Sequence[GanttEntry]) -> str:
    """
    Plain-text Gantt chart; idle gaps are drawn with dots.
    """
    if not entries:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0

    for entry in entries:
        idle_gap = entry.start - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = entry.start
            time_marks += f"{last_time:>3}"

        width = max(1, entry.duration)
        line += "=" * width
        labels += entry.pid[:width].ljust(width)
        last_time = entry.end
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(entries: Sequence[GanttEntry]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not entries:
        return Panel("No execution", title="Gantt Chart"), ""

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for entry in entries:
        idle_gap = entry.start - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = entry.start
            time_marks += f"{last_time:>3}"

        width = max(1, entry.duration)
        timeline.append(" " * width, style=f"on {process_color(entry.pid)}")
        labels.append(entry.pid[:width].ljust(width), style="bold")

        last_time = entry.end
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), time_marks
