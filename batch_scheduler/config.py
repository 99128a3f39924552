from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

DEFAULT_QUANTUM = 4
DEFAULT_MAX_TASKS = 50
DEFAULT_INPUT = "TaskSpec.txt"
DEFAULT_OUTPUT = "Output.txt"
DEFAULT_ALGORITHMS = ["fcfs", "rr", "nsjf", "psjf"]


@dataclass
class SimulationConfig:
    quantum: int = DEFAULT_QUANTUM
    max_tasks: int = DEFAULT_MAX_TASKS
    input_path: str = DEFAULT_INPUT
    output_path: str = DEFAULT_OUTPUT
    algorithms: List[str] = field(default_factory=lambda: list(DEFAULT_ALGORITHMS))

    def validate(self) -> None:
        if self.quantum <= 0:
            raise ValueError(f"quantum must be positive, got {self.quantum}")
        if self.max_tasks <= 0:
            raise ValueError(f"max tasks must be positive, got {self.max_tasks}")
        if not self.algorithms:
            raise ValueError("at least one algorithm must be selected")
