"""
Operating-hours configuration for slot generation.

No ORM imports here; the booking engine and its tests build one without
a database.
"""
from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class HoursConfig:
    opening_time: time
    closing_time: time
    step_minutes: int = 30

    def __post_init__(self):
        if self.step_minutes <= 0:
            raise ValueError(f"step_minutes must be positive, got {self.step_minutes}.")

    @property
    def is_open(self) -> bool:
        return self.opening_time < self.closing_time
