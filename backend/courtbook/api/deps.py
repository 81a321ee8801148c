"""
Shared FastAPI dependencies: engine access, caller identity and role checks,
and the mapping from engine outcomes to HTTP errors.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from courtbook.schemas.result import BookingOutcome, FailureKind
from courtbook.schemas.user import Role, User
from courtbook.services.engine_factory import BookingEngine, get_engine

OUTCOME_STATUS_CODES = {
    FailureKind.UNAVAILABLE: status.HTTP_409_CONFLICT,
    FailureKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.INVALID_SLOT: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    engine: BookingEngine = Depends(get_engine),
) -> User:
    """Resolve the caller from the X-User-Id header."""
    user = engine.users.get(x_user_id) if x_user_id else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown or missing user",
        )
    return user


def require_role(*roles: Role):
    """Dependency factory allowing only callers with one of `roles`."""

    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(r.value for r in roles)}",
            )
        return user

    return checker


def raise_for_outcome(outcome: BookingOutcome) -> BookingOutcome:
    """Turn a failed engine outcome into the matching HTTP error."""
    if not outcome.ok:
        raise HTTPException(
            status_code=OUTCOME_STATUS_CODES[outcome.kind],
            detail=outcome.reason,
        )
    return outcome


def check_opening_hours(engine: BookingEngine, hour: int) -> None:
    settings = engine.settings
    if not settings.OPENING_HOUR <= hour < settings.CLOSING_HOUR:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"Slots run from {settings.OPENING_HOUR}:00 "
                f"to {settings.CLOSING_HOUR}:00"
            ),
        )
