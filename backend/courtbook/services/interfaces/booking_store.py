"""
Booking store interface.
Allows swapping the in-memory store for a database without touching the engine.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from courtbook.schemas.booking import Booking, BookingStatus


class StoreConflictError(Exception):
    """Raised when the backing store rejects a second active booking for a slot."""


class BookingStore(ABC):
    """
    Interface for booking persistence.

    Implementations:
    - InMemoryBookingStore: process-local dict, used by default and in tests
    - SqlBookingStore: SQLAlchemy async engine with partial unique indexes

    The engine serializes writes itself; stores only need to be correct for a
    single writer.
    """

    async def initialize(self) -> None:
        """Prepare backing resources (tables, connections)."""

    async def close(self) -> None:
        """Release backing resources."""

    @abstractmethod
    async def add(self, booking: Booking) -> Booking:
        """
        Persist a new booking.

        Raises:
            StoreConflictError: if the store's own uniqueness guard trips
        """

    @abstractmethod
    async def get(self, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def update_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        """Set the status of an existing booking. Returns None if it does not exist."""

    @abstractmethod
    async def list_active_between(self, start: datetime, end: datetime) -> list[Booking]:
        """
        Active bookings whose [start_time, end_time) intersects [start, end),
        in insertion order.
        """

    @abstractmethod
    async def query(
        self,
        *,
        user_id: Optional[str] = None,
        coach_id: Optional[str] = None,
        court_id: Optional[str] = None,
        day: Optional[date] = None,
        active_only: bool = False,
    ) -> list[Booking]:
        """Filtered bookings in insertion order. Sorting is the caller's concern."""
