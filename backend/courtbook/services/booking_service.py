"""
Booking lifecycle manager with serialized, availability-checked creation.

CONCURRENCY STRATEGY: Single Writer
===================================

Problem:
  Two members quote the same court at 19:00, both see "available", both submit.
  If both creates run "check availability -> append" interleaved, both commit.
  Result: Double-booking.

Solution:
  Every mutation (create, cancel, respond, blackout toggle) runs inside one
  asyncio.Lock. Inside the lock, create re-runs the availability check against
  current state, prices the slot, and appends. Nothing can slip in between the
  check and the append.

  Previews (quotes, availability checks, listings) do not take the lock. They
  may be slightly stale; that is fine because they carry no correctness
  guarantee. The commit point is the only place the invariant is enforced.

  For the SQL store the table's partial unique indexes back this up across
  processes; a violation comes back as StoreConflictError.

State machine:
  pending_approval -> confirmed | rejected | cancelled
  confirmed        -> cancelled
  cancelled, rejected: terminal
"""

import asyncio
import uuid
from datetime import date, datetime
from typing import Optional

from courtbook.core.logging import get_logger
from courtbook.core.metrics import (
    booking_latency,
    record_blackout_toggle,
    record_booking_attempt,
    record_transition,
)
from courtbook.schemas.booking import (
    SLOT_DURATION,
    AddOns,
    BlackoutState,
    Booking,
    BookingStatus,
    is_hour_aligned,
)
from courtbook.schemas.result import BookingOutcome, FailureKind
from courtbook.schemas.stats import RevenueSummary
from courtbook.services.availability_service import check_availability
from courtbook.services.catalog_service import ResourceCatalog
from courtbook.services.interfaces.booking_store import BookingStore, StoreConflictError
from courtbook.services.pricing_service import PricingCalculator
from courtbook.services.stats_service import summarize_revenue

logger = get_logger(__name__)

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING_APPROVAL: {
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
    },
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.REJECTED: set(),
}

COACH_DECISIONS = (BookingStatus.CONFIRMED, BookingStatus.REJECTED)


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def new_booking_id() -> str:
    return uuid.uuid4().hex


class BookingManager:

    def __init__(
        self,
        store: BookingStore,
        catalog: ResourceCatalog,
        pricing: PricingCalculator,
        latency_ms: int = 0,
    ):
        self.store = store
        self.catalog = catalog
        self.pricing = pricing
        self.latency_ms = latency_ms
        # Guards the booking collection and the coach blackout sets
        self._lock = asyncio.Lock()

    async def _simulate_latency(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def create(
        self,
        court_id: str,
        user_id: str,
        slot_start: datetime,
        add_ons: Optional[AddOns] = None,
        coach_id: Optional[str] = None,
    ) -> BookingOutcome:
        """
        Create a booking after re-checking availability under the lock.

        The price is computed here and frozen into the booking. Bookings with a
        coach start as pending_approval, all others are confirmed immediately.
        """
        add_ons = add_ons or AddOns()

        if slot_start.tzinfo is not None or not is_hour_aligned(slot_start):
            record_booking_attempt("invalid")
            return BookingOutcome.failure(
                FailureKind.INVALID_SLOT,
                "Slot must start on the hour in local time.",
            )

        await self._simulate_latency()

        with booking_latency.time():
            async with self._lock:
                day, hour = slot_start.date(), slot_start.hour
                availability = await check_availability(
                    self.store, self.catalog, court_id, day, hour, coach_id
                )
                if not availability.available:
                    logger.warning(
                        "booking_rejected_unavailable",
                        court_id=court_id,
                        user_id=user_id,
                        coach_id=coach_id,
                        slot_start=slot_start,
                        reason=availability.reason,
                    )
                    record_booking_attempt("conflict")
                    return BookingOutcome.failure(FailureKind.UNAVAILABLE, availability.reason)

                pricing = self.pricing.compute_price(
                    court_id, day, hour, add_ons.rackets, add_ons.shoes, coach_id
                )
                booking = Booking(
                    id=new_booking_id(),
                    court_id=court_id,
                    user_id=user_id,
                    start_time=slot_start,
                    end_time=slot_start + SLOT_DURATION,
                    add_ons=add_ons,
                    coach_id=coach_id,
                    pricing=pricing,
                    status=BookingStatus.PENDING_APPROVAL if coach_id else BookingStatus.CONFIRMED,
                    created_at=datetime.now(),
                )

                try:
                    await self.store.add(booking)
                except StoreConflictError:
                    record_booking_attempt("conflict")
                    return BookingOutcome.failure(
                        FailureKind.UNAVAILABLE,
                        "Slot was taken by another booking.",
                    )

        logger.info(
            "booking_created",
            booking_id=booking.id,
            court_id=court_id,
            user_id=user_id,
            coach_id=coach_id,
            slot_start=slot_start,
            status=booking.status,
            total=pricing.total,
        )
        record_booking_attempt("created")
        return BookingOutcome.success(booking)

    async def cancel(self, booking_id: str) -> BookingOutcome:
        """
        Cancel a booking. Cancelling a cancelled or rejected booking is a
        successful no-op (changed=False).
        """
        await self._simulate_latency()

        async with self._lock:
            booking = await self.store.get(booking_id)
            if booking is None:
                record_transition("not_found")
                return BookingOutcome.failure(FailureKind.NOT_FOUND, "Booking not found.")

            if not can_transition(booking.status, BookingStatus.CANCELLED):
                record_transition("noop")
                return BookingOutcome.success(booking, changed=False)

            updated = await self.store.update_status(booking_id, BookingStatus.CANCELLED)

        logger.info(
            "booking_cancelled",
            booking_id=booking_id,
            user_id=updated.user_id,
            previous_status=booking.status,
        )
        record_transition("cancelled")
        return BookingOutcome.success(updated)

    async def respond(self, booking_id: str, decision: BookingStatus) -> BookingOutcome:
        """Coach decision on a pending booking: confirmed or rejected."""
        try:
            decision = BookingStatus(decision)
        except ValueError:
            decision = None
        if decision not in COACH_DECISIONS:
            record_transition("invalid")
            return BookingOutcome.failure(
                FailureKind.INVALID_TRANSITION,
                "Coach decision must be confirmed or rejected.",
            )

        await self._simulate_latency()

        async with self._lock:
            booking = await self.store.get(booking_id)
            if booking is None:
                record_transition("not_found")
                return BookingOutcome.failure(FailureKind.NOT_FOUND, "Booking not found.")

            if not can_transition(booking.status, decision):
                logger.warning(
                    "booking_response_rejected",
                    booking_id=booking_id,
                    status=booking.status,
                    decision=decision,
                )
                record_transition("invalid")
                return BookingOutcome.failure(
                    FailureKind.INVALID_TRANSITION,
                    f"Booking is {booking.status.value}; only pending bookings accept a coach decision.",
                )

            updated = await self.store.update_status(booking_id, decision)

        logger.info(
            "booking_responded",
            booking_id=booking_id,
            coach_id=booking.coach_id,
            decision=decision,
        )
        record_transition(decision.value)
        return BookingOutcome.success(updated)

    async def toggle_coach_blackout(self, coach_id: str, slot_start: datetime) -> Optional[BlackoutState]:
        """
        Flip a coach blackout slot. Returns None for an unknown coach, or for a
        slot start that is timezone-aware or off the hour, which no slot could match.
        """
        if slot_start.tzinfo is not None or not is_hour_aligned(slot_start):
            logger.warning("coach_blackout_rejected", coach_id=coach_id, slot_start=slot_start)
            return None

        await self._simulate_latency()

        async with self._lock:
            blocked = self.catalog.toggle_blackout(coach_id, slot_start)

        if blocked is None:
            return None

        logger.info(
            "coach_blackout_toggled",
            coach_id=coach_id,
            slot_start=slot_start,
            blocked=blocked,
        )
        record_blackout_toggle(blocked)
        return BlackoutState(coach_id=coach_id, slot_start=slot_start, blocked=blocked)

    async def get(self, booking_id: str) -> Optional[Booking]:
        await self._simulate_latency()
        return await self.store.get(booking_id)

    async def list_for_user(self, user_id: str) -> list[Booking]:
        """All of a member's bookings, newest slot first."""
        await self._simulate_latency()
        bookings = await self.store.query(user_id=user_id)
        return sorted(bookings, key=lambda b: b.start_time, reverse=True)

    async def list_for_coach(self, coach_id: str) -> list[Booking]:
        """A coach's active bookings, oldest slot first."""
        await self._simulate_latency()
        bookings = await self.store.query(coach_id=coach_id, active_only=True)
        return sorted(bookings, key=lambda b: b.start_time)

    async def list_all(self) -> list[Booking]:
        """Every booking regardless of status, newest slot first."""
        await self._simulate_latency()
        bookings = await self.store.query()
        return sorted(bookings, key=lambda b: b.start_time, reverse=True)

    async def list_for_date(self, day: date, court_id: Optional[str] = None) -> list[Booking]:
        """Active bookings on one calendar day, by slot then court."""
        await self._simulate_latency()
        bookings = await self.store.query(day=day, court_id=court_id, active_only=True)
        return sorted(bookings, key=lambda b: (b.start_time, b.court_id))

    async def revenue_summary(self) -> RevenueSummary:
        await self._simulate_latency()
        bookings = await self.store.query(active_only=True)
        return summarize_revenue(bookings)
