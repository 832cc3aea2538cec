from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, Optional, Sequence

from .models import HistorySnapshot


def snapshot_at(history: Sequence[HistorySnapshot], time: int) -> Optional[HistorySnapshot]:
    """
    Last snapshot whose time is <= the requested time, or None before the first.
    """
    idx = bisect_right([s.time for s in history], time)
    if idx == 0:
        return None
    return history[idx - 1]


class HistoryPlayer:
    """
    Cursor over a finished run's history for frame-by-frame playback.

    The index is the only mutable state; the history itself is never
    touched, so pausing, stepping and seeking never require a re-run.
    """

    def __init__(self, history: Sequence[HistorySnapshot]) -> None:
        self._history = tuple(history)
        self._index = 0

    def __len__(self) -> int:
        return len(self._history)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[HistorySnapshot]:
        if not self._history:
            return None
        return self._history[self._index]

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._history) - 1

    def step_forward(self) -> Optional[HistorySnapshot]:
        if self._index < len(self._history) - 1:
            self._index += 1
        return self.current

    def step_backward(self) -> Optional[HistorySnapshot]:
        if self._index > 0:
            self._index -= 1
        return self.current

    def jump_to(self, index: int) -> Optional[HistorySnapshot]:
        # Out-of-range targets leave the cursor where it is.
        if 0 <= index < len(self._history):
            self._index = index
        return self.current

    def seek_time(self, time: int) -> Optional[HistorySnapshot]:
        idx = bisect_right([s.time for s in self._history], time)
        self._index = max(0, idx - 1) if self._history else 0
        return self.current

    def reset(self) -> None:
        self._index = 0

    def frames(self) -> Iterator[HistorySnapshot]:
        """
        Yield the current frame and every later one, advancing the cursor.
        """
        if not self._history:
            return
        yield self._history[self._index]
        while not self.at_end:
            self._index += 1
            yield self._history[self._index]
