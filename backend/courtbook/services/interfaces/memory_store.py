"""
In-memory booking store.
Process-local, nothing survives a restart.
"""

from datetime import date, datetime
from typing import Optional

from courtbook.schemas.booking import Booking, BookingStatus, overlaps
from courtbook.services.interfaces.booking_store import BookingStore


class InMemoryBookingStore(BookingStore):
    """
    Dict-backed store. Copies on the way in and out so nothing outside the
    store can mutate a stored booking.
    """

    def __init__(self):
        # dicts keep insertion order
        self._bookings: dict[str, Booking] = {}

    async def add(self, booking: Booking) -> Booking:
        self._bookings[booking.id] = booking.model_copy(deep=True)
        return booking

    async def get(self, booking_id: str) -> Optional[Booking]:
        booking = self._bookings.get(booking_id)
        return booking.model_copy(deep=True) if booking else None

    async def update_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        booking = self._bookings.get(booking_id)
        if booking is None:
            return None
        updated = booking.model_copy(update={"status": status})
        self._bookings[booking_id] = updated
        return updated.model_copy(deep=True)

    async def list_active_between(self, start: datetime, end: datetime) -> list[Booking]:
        return [
            b.model_copy(deep=True)
            for b in self._bookings.values()
            if b.is_active and overlaps(start, end, b.start_time, b.end_time)
        ]

    async def query(
        self,
        *,
        user_id: Optional[str] = None,
        coach_id: Optional[str] = None,
        court_id: Optional[str] = None,
        day: Optional[date] = None,
        active_only: bool = False,
    ) -> list[Booking]:
        result = []
        for b in self._bookings.values():
            if user_id is not None and b.user_id != user_id:
                continue
            if coach_id is not None and b.coach_id != coach_id:
                continue
            if court_id is not None and b.court_id != court_id:
                continue
            if day is not None and b.start_time.date() != day:
                continue
            if active_only and not b.is_active:
                continue
            result.append(b.model_copy(deep=True))
        return result
