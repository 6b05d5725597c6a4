"""
Sleep Cycle Calculation Engine
==============================

Pure time arithmetic over whole sleep cycles.

Forward:  bedtime + n cycles                    -> wake-up suggestions
Backward: wake time - (n cycles + onset latency) -> bedtime suggestions

Every function takes its reference instant (or a clock callable) and a
CycleParameters explicitly; nothing here reads the wall clock or keeps
state, so results are reproducible and safe to compute from any thread.
"""

from datetime import datetime, timedelta, time
from typing import Callable, List, Optional
import logging
import pytz

from models.data_models import WakeSuggestion, SuggestionOrder
from core.parameters import CycleParameters, InvalidParameters

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Production clock: the current instant in UTC."""
    return datetime.now(pytz.utc)


def _as_utc(instant: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if instant.tzinfo is None:
        return pytz.utc.localize(instant)
    return instant.astimezone(pytz.utc)


def _resolve(params: Optional[CycleParameters]) -> CycleParameters:
    return (params or CycleParameters.default_config()).validate()


def _shift(instant: datetime, delta: timedelta) -> datetime:
    try:
        return instant + delta
    except OverflowError:
        raise InvalidParameters(f"{instant.isoformat()} shifted by {delta} is out of range")


def _suggestion(time_utc: datetime, cycles: int, params: CycleParameters) -> WakeSuggestion:
    return WakeSuggestion(
        time=time_utc,
        cycle_count=cycles,
        sleep_hours=cycles * params.cycle_duration / 3600.0,
    )


def _ordered(suggestions: List[WakeSuggestion], order: SuggestionOrder) -> List[WakeSuggestion]:
    return sorted(
        suggestions,
        key=lambda s: s.time,
        reverse=(order == SuggestionOrder.DESCENDING),
    )


# ============================================================================
# CYCLE ARITHMETIC
# ============================================================================

def wake_times_from_bedtime(
    bedtime: datetime,
    params: Optional[CycleParameters] = None,
) -> List[WakeSuggestion]:
    """
    Wake-up times that land on a cycle boundary after falling asleep at `bedtime`.

    Returns one suggestion per cycle count in `params.cycle_range`, ordered
    by ascending cycle count (and therefore ascending time).

    Raises:
        InvalidParameters: parameters rejected by CycleParameters.validate(),
            or a wake time beyond the datetime range
    """
    params = _resolve(params)
    start = _as_utc(bedtime)
    cycle = timedelta(seconds=params.cycle_duration)

    suggestions = [
        _suggestion(_shift(start, n * cycle), n, params)
        for n in params.cycle_range
    ]
    logger.debug(
        f"Wake times from bedtime {start.isoformat()}: "
        f"{len(suggestions)} suggestions ({params.min_cycles}..{params.max_cycles} cycles)"
    )
    return suggestions


def bedtimes_from_wake_time(
    wake_time: datetime,
    params: Optional[CycleParameters] = None,
    order: SuggestionOrder = SuggestionOrder.ASCENDING,
) -> List[WakeSuggestion]:
    """
    Bedtimes that allow whole cycles (plus onset latency) before `wake_time`.

    Default order is ascending by time: the bedtime with the most cycles
    comes first. Pass SuggestionOrder.DESCENDING for latest bedtime first.

    Raises:
        InvalidParameters: cycle_duration <= 0, fall_asleep_latency < 0,
            or any other parameter rejected by CycleParameters.validate(),
            or a bedtime before the datetime range
    """
    params = _resolve(params)
    end = _as_utc(wake_time)
    cycle = timedelta(seconds=params.cycle_duration)
    latency = timedelta(seconds=params.fall_asleep_latency)

    suggestions = [
        _suggestion(_shift(end, -(n * cycle + latency)), n, params)
        for n in params.cycle_range
    ]
    logger.debug(
        f"Bedtimes for wake time {end.isoformat()}: "
        f"{len(suggestions)} suggestions, order={order.value}"
    )
    return _ordered(suggestions, order)


def suggest_wake_times_from_now(
    clock: Clock,
    params: Optional[CycleParameters] = None,
) -> List[WakeSuggestion]:
    """Wake-up times for going to bed now: bedtime is clock() plus the onset latency."""
    params = _resolve(params)
    bedtime = _shift(_as_utc(clock()), timedelta(seconds=params.fall_asleep_latency))
    return wake_times_from_bedtime(bedtime, params)


# ============================================================================
# WALL-CLOCK WAKE TIME
# ============================================================================

def next_occurrence(
    clock: Clock,
    hour: int,
    minute: int,
    timezone: str = 'UTC',
) -> datetime:
    """
    Next instant at or after clock() whose local time in `timezone` is hour:minute.

    Returned in UTC. Raises InvalidParameters for an out-of-range time of day
    or an unknown IANA zone name.
    """
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise InvalidParameters(f"Invalid time of day {hour:02d}:{minute:02d}")
    try:
        tz = pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        raise InvalidParameters(f"Unknown timezone: {timezone}")

    now = _as_utc(clock())
    local_day = now.astimezone(tz).date()
    candidate = tz.localize(datetime.combine(local_day, time(hour, minute)))
    if candidate < now:
        candidate = tz.localize(
            datetime.combine(local_day + timedelta(days=1), time(hour, minute))
        )
    return candidate.astimezone(pytz.utc)


def bedtimes_for_wake_clock_time(
    clock: Clock,
    hour: int,
    minute: int,
    timezone: str = 'UTC',
    params: Optional[CycleParameters] = None,
    order: SuggestionOrder = SuggestionOrder.ASCENDING,
) -> List[WakeSuggestion]:
    """Bedtimes for the next hour:minute wake-up in `timezone`."""
    wake_time = next_occurrence(clock, hour, minute, timezone)
    return bedtimes_from_wake_time(wake_time, params, order)
