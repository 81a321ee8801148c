"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .booking_store import BookingStore, StoreConflictError
from .memory_store import InMemoryBookingStore

__all__ = ['BookingStore', 'StoreConflictError', 'InMemoryBookingStore']
