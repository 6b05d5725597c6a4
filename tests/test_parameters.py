"""
Tests for CycleParameters validation and presets

Run: python -m pytest tests/test_parameters.py -v
"""

import dataclasses

import pytest

from core.parameters import (
    CycleParameters,
    InvalidParameters,
    MAX_CYCLES,
    MAX_SLEEP_SPAN_SECONDS,
)


class TestDefaults:

    def test_default_config(self):
        params = CycleParameters.default_config()

        assert params.cycle_duration == 5400
        assert params.fall_asleep_latency == 900
        assert list(params.cycle_range) == [3, 4, 5, 6]
        assert params.cycle_hours == 1.5

    def test_from_minutes(self):
        params = CycleParameters.from_minutes(cycle_minutes=100, latency_minutes=20,
                                              min_cycles=2, max_cycles=4)

        assert params.cycle_duration == 6000
        assert params.fall_asleep_latency == 1200
        assert list(params.cycle_range) == [2, 3, 4]

    def test_from_minutes_defaults_match_default_config(self):
        assert CycleParameters.from_minutes() == CycleParameters.default_config()

    def test_frozen(self):
        params = CycleParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.cycle_duration = 60


class TestValidation:

    def test_valid_returns_self(self):
        params = CycleParameters(min_cycles=1, max_cycles=1, fall_asleep_latency=0)
        assert params.validate() is params

    def test_zero_cycle_duration(self):
        with pytest.raises(InvalidParameters, match="cycle_duration"):
            CycleParameters(cycle_duration=0).validate()

    def test_negative_latency(self):
        with pytest.raises(InvalidParameters, match="fall_asleep_latency"):
            CycleParameters(fall_asleep_latency=-60).validate()

    def test_lower_bound_below_one(self):
        with pytest.raises(InvalidParameters, match="at least 1"):
            CycleParameters(min_cycles=0).validate()

    def test_empty_range(self):
        with pytest.raises(InvalidParameters, match="empty"):
            CycleParameters(min_cycles=6, max_cycles=3).validate()

    def test_is_value_error(self):
        assert issubclass(InvalidParameters, ValueError)

    def test_max_cycles_upper_bound(self):
        assert CycleParameters(max_cycles=MAX_CYCLES).validate()
        with pytest.raises(InvalidParameters, match="at most"):
            CycleParameters(max_cycles=MAX_CYCLES + 1).validate()

    def test_huge_cycle_duration(self):
        with pytest.raises(InvalidParameters, match="exceeds"):
            CycleParameters(cycle_duration=1e12).validate()

    def test_span_includes_latency(self):
        span_without_latency = MAX_SLEEP_SPAN_SECONDS // 6
        CycleParameters(cycle_duration=span_without_latency, fall_asleep_latency=0).validate()
        with pytest.raises(InvalidParameters, match="exceeds"):
            CycleParameters(cycle_duration=span_without_latency,
                            fall_asleep_latency=MAX_SLEEP_SPAN_SECONDS).validate()

    @pytest.mark.parametrize("field", ["cycle_duration", "fall_asleep_latency"])
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_durations(self, field, value):
        with pytest.raises(InvalidParameters, match="finite"):
            CycleParameters(**{field: value}).validate()
