"""
Booking endpoints with serialized, availability-checked creation.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from courtbook.api.deps import check_opening_hours, get_current_user, raise_for_outcome
from courtbook.core.logging import get_logger
from courtbook.schemas.booking import (
    Booking,
    BookingCancelResponse,
    BookingCreate,
    BookingDecision,
    BookingStatus,
)
from courtbook.schemas.user import Role, User
from courtbook.services.engine_factory import BookingEngine, get_engine

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


async def _load_booking(engine: BookingEngine, booking_id: str) -> Booking:
    booking = await engine.bookings.get(booking_id)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """
    Book one slot for the caller.

    Availability is re-checked at commit time, so a slot that was free when
    quoted may still come back 409. Bookings with a coach start as
    pending_approval until the coach responds.
    """
    if engine.catalog.get_court(booking_data.court_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Court {booking_data.court_id} not found",
        )
    if booking_data.coach_id and engine.catalog.get_coach(booking_data.coach_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Coach {booking_data.coach_id} not found",
        )
    check_opening_hours(engine, booking_data.slot_start.hour)

    outcome = await engine.bookings.create(
        court_id=booking_data.court_id,
        user_id=user.id,
        slot_start=booking_data.slot_start,
        add_ons=booking_data.add_ons,
        coach_id=booking_data.coach_id,
    )
    return raise_for_outcome(outcome).booking


@router.get("/", response_model=list[Booking])
async def list_my_bookings(
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """The caller's bookings in every status, newest first."""
    return await engine.bookings.list_for_user(user.id)


@router.get("/by-date", response_model=list[Booking])
async def list_bookings_for_date(
    day: date = Query(..., alias="date"),
    court_id: Optional[str] = None,
    engine: BookingEngine = Depends(get_engine),
):
    """Active bookings on one day, optionally for one court."""
    return await engine.bookings.list_for_date(day, court_id)


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: str,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    booking = await _load_booking(engine, booking_id)
    if user.role != Role.ADMIN and user.id not in (booking.user_id, booking.coach_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to view this booking",
        )
    return booking


@router.delete("/{booking_id}", response_model=BookingCancelResponse)
async def cancel_booking(
    booking_id: str,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """Cancel a booking. The owner or an admin may cancel; repeating is harmless."""
    booking = await _load_booking(engine, booking_id)
    if user.role != Role.ADMIN and booking.user_id != user.id:
        logger.warning("cancel_denied", booking_id=booking_id, user_id=user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner or an admin can cancel this booking",
        )

    outcome = raise_for_outcome(await engine.bookings.cancel(booking_id))
    message = "Booking cancelled successfully" if outcome.changed else (
        f"Booking is already {outcome.booking.status.value}"
    )
    return BookingCancelResponse(
        message=message,
        booking_id=booking_id,
        status=outcome.booking.status,
    )


@router.post("/{booking_id}/decision", response_model=Booking)
async def respond_to_booking(
    booking_id: str,
    decision: BookingDecision,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """Accept or reject a pending booking. Only the booked coach may answer."""
    booking = await _load_booking(engine, booking_id)
    if user.role != Role.COACH or booking.coach_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the booked coach can respond to this booking",
        )

    outcome = await engine.bookings.respond(booking_id, BookingStatus(decision.decision))
    return raise_for_outcome(outcome).booking
