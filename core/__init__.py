"""
Core Sleep Cycle Components
===========================

Main exports for the sleep cycle calculator.
"""

from core.parameters import CycleParameters, InvalidParameters

from core.cycle_calculator import (
    utc_now,
    wake_times_from_bedtime,
    bedtimes_from_wake_time,
    suggest_wake_times_from_now,
    next_occurrence,
    bedtimes_for_wake_clock_time,
)

__all__ = [
    # Parameters
    'CycleParameters',
    'InvalidParameters',
    # Cycle arithmetic
    'utc_now',
    'wake_times_from_bedtime',
    'bedtimes_from_wake_time',
    'suggest_wake_times_from_now',
    'next_occurrence',
    'bedtimes_for_wake_clock_time',
]
