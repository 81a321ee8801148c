"""
Availability endpoints for live feedback while a booking is being composed.
Answers are advisory; the authoritative check happens when the booking is created.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from courtbook.schemas.booking import SlotCell
from courtbook.schemas.result import AvailabilityResult
from courtbook.services.availability_service import check_availability, day_grid
from courtbook.services.engine_factory import BookingEngine, get_engine

router = APIRouter(prefix="/availability", tags=["Availability"])


@router.get("/", response_model=AvailabilityResult)
async def get_availability(
    court_id: str,
    day: date = Query(..., alias="date"),
    hour: int = Query(..., ge=0, le=23),
    coach_id: Optional[str] = None,
    engine: BookingEngine = Depends(get_engine),
):
    return await check_availability(engine.store, engine.catalog, court_id, day, hour, coach_id)


@router.get("/grid", response_model=list[SlotCell])
async def get_day_grid(
    day: date = Query(..., alias="date"),
    engine: BookingEngine = Depends(get_engine),
):
    """Every court for every opening hour of the day, flagged booked or free."""
    settings = engine.settings
    return await day_grid(
        engine.store,
        engine.catalog.list_courts(),
        day,
        settings.OPENING_HOUR,
        settings.CLOSING_HOUR,
    )
