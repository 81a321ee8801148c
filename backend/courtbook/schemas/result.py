"""
Structured outcomes returned by the booking engine.

The engine never raises for expected failures (slot taken, unknown booking,
illegal transition). Callers inspect `ok` and surface `reason` to the user.
"""

import enum
from typing import Optional

from pydantic import BaseModel

from courtbook.schemas.booking import Booking


class FailureKind(str, enum.Enum):
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_SLOT = "invalid_slot"


class ConflictKind(str, enum.Enum):
    COACH_BLOCKED = "coach_blocked"
    COURT_BOOKED = "court_booked"
    COACH_BOOKED = "coach_booked"


class AvailabilityResult(BaseModel):
    available: bool
    reason: Optional[str] = None
    kind: Optional[ConflictKind] = None


class BookingOutcome(BaseModel):
    ok: bool
    kind: Optional[FailureKind] = None
    reason: Optional[str] = None
    booking: Optional[Booking] = None
    # False when the operation was an idempotent no-op
    changed: bool = False

    @classmethod
    def success(cls, booking: Booking, changed: bool = True) -> "BookingOutcome":
        return cls(ok=True, booking=booking, changed=changed)

    @classmethod
    def failure(cls, kind: FailureKind, reason: str) -> "BookingOutcome":
        return cls(ok=False, kind=kind, reason=reason)
