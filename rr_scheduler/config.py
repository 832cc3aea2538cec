from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidInput, InvalidQuantum

DEFAULT_QUANTUM = 2
DEFAULT_STEP_DELAY = 1.0


@dataclass
class SimulationConfig:
    time_quantum: int = DEFAULT_QUANTUM
    step_delay: float = DEFAULT_STEP_DELAY

    def __post_init__(self) -> None:
        if isinstance(self.time_quantum, bool) or not isinstance(self.time_quantum, int) or self.time_quantum < 1:
            raise InvalidQuantum(f"Time quantum must be an integer >= 1, got {self.time_quantum!r}")
        if self.step_delay < 0:
            raise InvalidInput(f"step_delay cannot be negative, got {self.step_delay!r}")
