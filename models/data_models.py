"""
data_models.py - Core Data Structures
======================================

Value types produced by the cycle calculator.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from enum import Enum
import pytz


# ============================================================================
# ENUMS
# ============================================================================

class SuggestionOrder(Enum):
    """Ordering of a suggestion sequence by time"""
    ASCENDING = "ascending"    # Earliest first (canonical)
    DESCENDING = "descending"  # Latest first


# ============================================================================
# SUGGESTIONS
# ============================================================================

@dataclass(frozen=True)
class WakeSuggestion:
    """
    One candidate time for a given number of complete sleep cycles.

    Used for both directions: a wake-up time derived from a bedtime, or a
    bedtime derived from a wake-up time. `time` is a UTC-aware datetime.
    """
    time: datetime
    cycle_count: int
    sleep_hours: float

    @property
    def sleep_duration(self) -> timedelta:
        return timedelta(hours=self.sleep_hours)

    def local_time(self, timezone: str = 'UTC') -> datetime:
        return self.time.astimezone(pytz.timezone(timezone))

    def to_dict(self, timezone: Optional[str] = None) -> Dict[str, Any]:
        data = {
            'time': self.time.isoformat(),
            'cycle_count': self.cycle_count,
            'sleep_hours': self.sleep_hours,
        }
        if timezone:
            data['time_local'] = self.local_time(timezone).strftime('%H:%M')
        return data
