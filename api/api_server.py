"""
api_server.py - FastAPI Backend for the Sleep Cycle Calculator
==============================================================

RESTful API exposing the cycle calculator to the app frontend.

Endpoints:
- POST /api/wake-times - Wake-up times for a bedtime (or "if I sleep now")
- POST /api/bedtimes   - Bedtimes for a wake-up time or wall-clock HH:mm

Usage:
    uvicorn api.api_server:app --reload --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime, timedelta
import logging
import os
import pytz

from core import (
    CycleParameters,
    InvalidParameters,
    utc_now,
    wake_times_from_bedtime,
    bedtimes_from_wake_time,
    suggest_wake_times_from_now,
    next_occurrence,
)
from core.cycle_calculator import Clock
from models.data_models import WakeSuggestion, SuggestionOrder

logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP INITIALIZATION
# ============================================================================

app = FastAPI(
    title="Sleep Cycle Calculator API",
    description="Wake-up and bedtime suggestions from 90-minute sleep cycle arithmetic",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_clock() -> Clock:
    """Time source for "now"; overridden in tests"""
    return utc_now


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class CycleSettings(BaseModel):
    cycle_minutes: float = 90.0
    latency_minutes: float = 15.0
    min_cycles: int = 3
    max_cycles: int = 6
    timezone: str = "UTC"  # IANA zone used for time_local


class WakeTimesRequest(CycleSettings):
    bedtime: Optional[datetime] = None  # Absent -> sleep now (+ latency)


class BedtimesRequest(CycleSettings):
    wake_time: Optional[datetime] = None
    # Alternative to wake_time: next HH:mm in `timezone`
    wake_hour: Optional[int] = None
    wake_minute: int = 0
    order: str = "ascending"  # or "descending" (latest bedtime first)


class SuggestionResponse(BaseModel):
    time: str        # UTC ISO format
    time_local: str  # HH:mm in the request timezone
    cycle_count: int
    sleep_hours: float


class SuggestionsResponse(BaseModel):
    reference_time: str  # Sleep-onset bedtime or wake time the suggestions count from (UTC ISO)
    cycle_minutes: float
    latency_minutes: float
    suggestions: List[SuggestionResponse]


def _params(request: CycleSettings) -> CycleParameters:
    return CycleParameters.from_minutes(
        cycle_minutes=request.cycle_minutes,
        latency_minutes=request.latency_minutes,
        min_cycles=request.min_cycles,
        max_cycles=request.max_cycles,
    ).validate()


def _check_timezone(timezone: str) -> None:
    try:
        pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        raise InvalidParameters(f"Unknown timezone: {timezone}")


def _build_response(
    reference: datetime,
    params: CycleParameters,
    suggestions: List[WakeSuggestion],
    timezone: str,
) -> SuggestionsResponse:
    if reference.tzinfo is None:
        reference = pytz.utc.localize(reference)
    return SuggestionsResponse(
        reference_time=reference.astimezone(pytz.utc).isoformat(),
        cycle_minutes=params.cycle_duration / 60,
        latency_minutes=params.fall_asleep_latency / 60,
        suggestions=[
            SuggestionResponse(**s.to_dict(timezone=timezone))
            for s in suggestions
        ],
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check"""
    return {
        "status": "ok",
        "service": "Sleep Cycle Calculator API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check(clock: Clock = Depends(get_clock)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": clock().isoformat()
    }


@app.post("/api/wake-times", response_model=SuggestionsResponse)
async def wake_times(request: WakeTimesRequest, clock: Clock = Depends(get_clock)):
    """
    Recommended wake-up times.

    With `bedtime`, cycles count from that instant. Without it, the user is
    going to bed now and cycles start after the fall-asleep latency.
    """
    try:
        params = _params(request)
        _check_timezone(request.timezone)

        if request.bedtime is not None:
            reference = request.bedtime
            suggestions = wake_times_from_bedtime(reference, params)
        else:
            now = clock()
            suggestions = suggest_wake_times_from_now(lambda: now, params)
            # Cycles start once the user has fallen asleep
            reference = now + timedelta(seconds=params.fall_asleep_latency)

        return _build_response(reference, params, suggestions, request.timezone)

    except InvalidParameters as e:
        logger.warning(f"Rejected wake-times request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/bedtimes", response_model=SuggestionsResponse)
async def bedtimes(request: BedtimesRequest, clock: Clock = Depends(get_clock)):
    """
    Recommended bedtimes for a wake-up time.

    Give either an absolute `wake_time` or `wake_hour`/`wake_minute`, which
    resolves to the next such wall-clock time in `timezone`.
    """
    try:
        params = _params(request)
        _check_timezone(request.timezone)

        valid_orders = [o.value for o in SuggestionOrder]
        if request.order.lower() not in valid_orders:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid order '{request.order}'. Must be one of: {', '.join(valid_orders)}"
            )
        order = SuggestionOrder(request.order.lower())

        if request.wake_time is not None:
            reference = request.wake_time
        elif request.wake_hour is not None:
            reference = next_occurrence(
                clock, request.wake_hour, request.wake_minute, request.timezone
            )
        else:
            raise HTTPException(status_code=400, detail="Provide wake_time or wake_hour")

        suggestions = bedtimes_from_wake_time(reference, params, order)
        return _build_response(reference, params, suggestions, request.timezone)

    except HTTPException:
        raise
    except InvalidParameters as e:
        logger.warning(f"Rejected bedtimes request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))

    logging.basicConfig(level=logging.INFO)
    logger.info(f"Starting Sleep Cycle Calculator API on http://localhost:{port}")
    logger.info(f"API docs at http://localhost:{port}/docs")

    uvicorn.run(app, host="0.0.0.0", port=port)
