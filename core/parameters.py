"""
Configuration & Parameters for the Sleep Cycle Calculator
=========================================================

Configuration dataclass for the cycle arithmetic:
- CycleParameters: cycle length, fall-asleep latency and cycle-count range
- InvalidParameters: raised when a parameter set cannot be used

Defaults follow the common sleep-hygiene heuristic of ~90-minute sleep
cycles (Carskadon & Dement, Normal Human Sleep) and a ~15-minute sleep
onset latency for healthy adults.
"""

from dataclasses import dataclass
import math

# Keep every suggestion a representable datetime and the sequence short
MAX_CYCLES = 100
MAX_SLEEP_SPAN_SECONDS = 366 * 24 * 3600  # max_cycles * cycle_duration + latency


class InvalidParameters(ValueError):
    """Cycle parameters that cannot produce a suggestion sequence"""


@dataclass(frozen=True)
class CycleParameters:
    """
    Sleep cycle arithmetic parameters

    Durations are in seconds. The cycle range is inclusive on both ends.
    """

    cycle_duration: float = 90 * 60       # One sleep cycle (5400 s)
    fall_asleep_latency: float = 15 * 60  # Lying down -> sleep onset (900 s)
    min_cycles: int = 3
    max_cycles: int = 6

    @property
    def cycle_range(self) -> range:
        return range(self.min_cycles, self.max_cycles + 1)

    @property
    def cycle_hours(self) -> float:
        return self.cycle_duration / 3600.0

    def validate(self) -> 'CycleParameters':
        """Raise InvalidParameters unless every field is usable; return self."""

        if not (math.isfinite(self.cycle_duration) and math.isfinite(self.fall_asleep_latency)):
            raise InvalidParameters(
                f"durations must be finite, got cycle_duration={self.cycle_duration}, "
                f"fall_asleep_latency={self.fall_asleep_latency}"
            )
        if self.cycle_duration <= 0:
            raise InvalidParameters(
                f"cycle_duration must be positive, got {self.cycle_duration}"
            )
        if self.fall_asleep_latency < 0:
            raise InvalidParameters(
                f"fall_asleep_latency must not be negative, got {self.fall_asleep_latency}"
            )
        if self.min_cycles < 1:
            raise InvalidParameters(
                f"cycle range lower bound must be at least 1, got {self.min_cycles}"
            )
        if self.max_cycles < self.min_cycles:
            raise InvalidParameters(
                f"cycle range {self.min_cycles}..{self.max_cycles} is empty"
            )
        if self.max_cycles > MAX_CYCLES:
            raise InvalidParameters(
                f"cycle range upper bound must be at most {MAX_CYCLES}, got {self.max_cycles}"
            )
        span = self.max_cycles * self.cycle_duration + self.fall_asleep_latency
        if span > MAX_SLEEP_SPAN_SECONDS:
            raise InvalidParameters(
                f"{self.max_cycles} cycles of {self.cycle_duration} s plus "
                f"{self.fall_asleep_latency} s latency exceeds {MAX_SLEEP_SPAN_SECONDS} s"
            )
        return self

    @classmethod
    def default_config(cls):
        return cls()

    @classmethod
    def from_minutes(
        cls,
        cycle_minutes: float = 90.0,
        latency_minutes: float = 15.0,
        min_cycles: int = 3,
        max_cycles: int = 6,
    ):
        """Build parameters from minute values (as entered by a user)."""
        return cls(
            cycle_duration=cycle_minutes * 60,
            fall_asleep_latency=latency_minutes * 60,
            min_cycles=min_cycles,
            max_cycles=max_cycles,
        )
