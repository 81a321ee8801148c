"""
Coach endpoints: profiles, the coach's booking queue, and blackout toggles.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from courtbook.api.deps import get_current_user
from courtbook.core.logging import get_logger
from courtbook.schemas.booking import BlackoutState, BlackoutToggle, Booking
from courtbook.schemas.catalog import CoachResponse
from courtbook.schemas.user import Role, User
from courtbook.services.engine_factory import BookingEngine, get_engine

logger = get_logger(__name__)
router = APIRouter(prefix="/coaches", tags=["Coaches"])


def _ensure_coach_access(coach_id: str, user: User) -> None:
    """Coaches act on their own schedule only; admins act on any coach."""
    if user.role == Role.ADMIN:
        return
    if user.role == Role.COACH and user.id == coach_id:
        return
    logger.warning("coach_access_denied", coach_id=coach_id, user_id=user.id)
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Not allowed to manage this coach's schedule",
    )


@router.get("/", response_model=list[CoachResponse])
async def list_coaches(engine: BookingEngine = Depends(get_engine)):
    return [CoachResponse.from_coach(c) for c in engine.catalog.list_coaches()]


@router.get("/{coach_id}", response_model=CoachResponse)
async def get_coach(coach_id: str, engine: BookingEngine = Depends(get_engine)):
    coach = engine.catalog.get_coach(coach_id)
    if coach is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Coach {coach_id} not found",
        )
    return CoachResponse.from_coach(coach)


@router.get("/{coach_id}/bookings", response_model=list[Booking])
async def list_coach_bookings(
    coach_id: str,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """Active bookings that name this coach, oldest first."""
    _ensure_coach_access(coach_id, user)
    return await engine.bookings.list_for_coach(coach_id)


@router.post("/{coach_id}/blackouts", response_model=BlackoutState)
async def toggle_blackout(
    coach_id: str,
    toggle: BlackoutToggle,
    user: User = Depends(get_current_user),
    engine: BookingEngine = Depends(get_engine),
):
    """
    Block or unblock one slot for this coach.
    Calling twice with the same slot restores the original state.
    """
    _ensure_coach_access(coach_id, user)
    state = await engine.bookings.toggle_coach_blackout(coach_id, toggle.slot_start)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Coach {coach_id} not found",
        )
    return state
