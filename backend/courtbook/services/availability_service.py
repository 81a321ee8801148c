"""
Availability checks for a prospective slot.

Checks run in order and the first failure wins:
  1. Coach blackout: the coach declared this exact slot start unavailable
  2. Overlap scan: an active booking overlapping the slot holds the same
     court, or the same coach

Results are advisory when called for previews. The only authoritative check
is the one BookingManager.create runs under its lock.
"""

from datetime import date, datetime, time
from typing import Optional

from courtbook.core.metrics import record_availability_check
from courtbook.schemas.booking import SLOT_DURATION, SlotCell, overlaps
from courtbook.schemas.catalog import Court
from courtbook.schemas.result import AvailabilityResult, ConflictKind
from courtbook.services.catalog_service import ResourceCatalog
from courtbook.services.interfaces.booking_store import BookingStore


COACH_BLOCKED_REASON = "Coach has blocked this time slot."
COURT_BOOKED_REASON = "Court is booked."
COACH_BOOKED_REASON = "Selected coach is unavailable."


def _unavailable(kind: ConflictKind, reason: str) -> AvailabilityResult:
    record_availability_check(kind.value)
    return AvailabilityResult(available=False, reason=reason, kind=kind)


def slot_bounds(day: date, hour: int) -> tuple[datetime, datetime]:
    if isinstance(day, datetime):
        day = day.date()
    start = datetime.combine(day, time(hour=hour))
    return start, start + SLOT_DURATION


async def check_availability(
    store: BookingStore,
    catalog: ResourceCatalog,
    court_id: str,
    day: date,
    hour: int,
    coach_id: Optional[str] = None,
) -> AvailabilityResult:
    start, end = slot_bounds(day, hour)

    if coach_id and catalog.is_blocked(coach_id, start):
        return _unavailable(ConflictKind.COACH_BLOCKED, COACH_BLOCKED_REASON)

    conflict = None
    for booking in await store.list_active_between(start, end):
        # Stores may return a superset; the interval test here is authoritative
        if not booking.is_active or not overlaps(start, end, booking.start_time, booking.end_time):
            continue
        if booking.court_id == court_id or (coach_id and booking.coach_id == coach_id):
            conflict = booking
            break

    if conflict is None:
        record_availability_check("available")
        return AvailabilityResult(available=True)

    if conflict.court_id == court_id:
        return _unavailable(ConflictKind.COURT_BOOKED, COURT_BOOKED_REASON)

    return _unavailable(ConflictKind.COACH_BOOKED, COACH_BOOKED_REASON)


async def day_grid(
    store: BookingStore,
    courts: list[Court],
    day: date,
    opening_hour: int,
    closing_hour: int,
) -> list[SlotCell]:
    """Every court x every opening hour of `day`, flagged booked or free."""
    taken = set()
    for booking in await store.query(day=day, active_only=True):
        taken.add((booking.court_id, booking.start_time.hour))

    return [
        SlotCell(court_id=court.id, day=day, hour=hour, booked=(court.id, hour) in taken)
        for hour in range(opening_hour, closing_hour)
        for court in courts
    ]
