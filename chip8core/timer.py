"""
60 Hz countdown timers (delay and sound).

Decay is driven by wall-clock time, not by how often tick() is called:
the value is recomputed from the instant it was last set, so a slow or
fast step loop sees the same real-time behaviour.
"""

import time
from typing import Callable

TIMER_HZ = 60

# Clock samples are floats; absorb rounding in their difference
INTERVAL_EPSILON = 1e-6


class Timer:
    def __init__(self, value: int = 0, frequency: int = TIMER_HZ,
                 clock: Callable[[], float] = time.monotonic):
        if frequency <= 0:
            raise ValueError(f"Timer frequency must be positive, got {frequency}")
        self.frequency = frequency
        self.clock = clock
        self.set(value)

    def set(self, value: int):
        """Reset both the value and the instant of last write"""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Timer value must fit in a byte, got {value}")
        self._start_value = int(value)
        self._set_at = self.clock()
        self.current = int(value)

    def tick(self):
        elapsed = self.clock() - self._set_at
        intervals = int(elapsed * self.frequency + INTERVAL_EPSILON)
        self.current = max(0, self._start_value - intervals)

    def active(self) -> bool:
        return self.current > 0

    def __repr__(self) -> str:
        return f"Timer(current={self.current}, frequency={self.frequency})"
