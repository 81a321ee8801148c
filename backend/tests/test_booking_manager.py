"""
Tests for the booking lifecycle manager, including concurrency scenarios.
"""

import asyncio
from datetime import timezone
from decimal import Decimal

import pytest

from courtbook.core.logging import render_domain_values
from courtbook.schemas.booking import AddOns, BookingStatus
from courtbook.schemas.pricing import PricingRules
from courtbook.schemas.result import FailureKind
from courtbook.services.booking_service import BookingManager, can_transition
from courtbook.services.interfaces import InMemoryBookingStore, StoreConflictError
from tests.helpers import SATURDAY, SUNDAY, TUESDAY, slot


class ConflictingStore(InMemoryBookingStore):
    """Simulates another process winning the slot at the database."""

    async def add(self, booking):
        raise StoreConflictError("uq_active_court_slot")


@pytest.mark.asyncio
async def test_coachless_booking_is_confirmed(engine):
    outcome = await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10))
    assert outcome.ok and outcome.changed
    assert outcome.booking.status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_coach_booking_waits_for_approval(engine):
    outcome = await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10), coach_id="coach1")
    assert outcome.booking.status == BookingStatus.PENDING_APPROVAL


@pytest.mark.asyncio
async def test_booking_covers_one_hour_and_freezes_price(engine):
    outcome = await engine.bookings.create(
        "c1", "user_123", slot(SATURDAY, 19), AddOns(rackets=2, shoes=1), coach_id="coach1"
    )
    booking = outcome.booking
    assert booking.end_time - booking.start_time == slot(SATURDAY, 20) - slot(SATURDAY, 19)
    assert booking.pricing.total == Decimal("75.50")


@pytest.mark.asyncio
async def test_rule_change_does_not_touch_existing_booking(engine):
    outcome = await engine.bookings.create("c1", "user_123", slot(SATURDAY, 19))
    engine.rules.set_rules(PricingRules(
        weekend_surcharge=Decimal("50"),
        peak_hour_multiplier=Decimal("3"),
        peak_start_hour=8,
        peak_end_hour=22,
        racket_price=Decimal("9"),
        shoe_price=Decimal("9"),
    ))

    stored = await engine.bookings.get(outcome.booking.id)
    assert stored.pricing == outcome.booking.pricing
    assert stored.pricing.total == Decimal("37.50")
    assert engine.pricing.compute_price("c1", SATURDAY, 19).total == Decimal("210.00")


@pytest.mark.asyncio
async def test_unavailable_slot_is_not_stored(engine):
    await engine.bookings.create("c1", "user_123", slot(TUESDAY, 19))
    outcome = await engine.bookings.create("c1", "someone_else", slot(TUESDAY, 19))

    assert not outcome.ok
    assert outcome.kind == FailureKind.UNAVAILABLE
    assert outcome.reason == "Court is booked."
    assert len(await engine.bookings.list_all()) == 1


@pytest.mark.asyncio
async def test_misaligned_slot_rejected(engine):
    outcome = await engine.bookings.create("c1", "user_123", slot(TUESDAY, 19).replace(minute=30))
    assert outcome.kind == FailureKind.INVALID_SLOT
    assert await engine.bookings.list_all() == []


@pytest.mark.asyncio
async def test_store_conflict_maps_to_unavailable(engine):
    manager = BookingManager(ConflictingStore(), engine.catalog, engine.pricing)
    outcome = await manager.create("c1", "user_123", slot(TUESDAY, 19))
    assert outcome.kind == FailureKind.UNAVAILABLE


@pytest.mark.asyncio
async def test_concurrent_creates_book_slot_once(engine):
    """10 members race for the same court slot; exactly one wins."""
    engine.bookings.latency_ms = 1

    outcomes = await asyncio.gather(*[
        engine.bookings.create("c1", f"user_{i}", slot(SATURDAY, 19))
        for i in range(10)
    ])

    assert sum(o.ok for o in outcomes) == 1
    assert {o.reason for o in outcomes if not o.ok} == {"Court is booked."}
    assert len(await engine.bookings.list_for_date(SATURDAY, "c1")) == 1


@pytest.mark.asyncio
async def test_concurrent_creates_commit_coach_once(engine):
    """Same coach, same hour, three different courts; exactly one wins."""
    engine.bookings.latency_ms = 1

    outcomes = await asyncio.gather(*[
        engine.bookings.create(court, "user_123", slot(SATURDAY, 11), coach_id="coach2")
        for court in ("c1", "c2", "c3")
    ])

    assert sum(o.ok for o in outcomes) == 1
    assert len(await engine.bookings.list_for_coach("coach2")) == 1


@pytest.mark.asyncio
async def test_cancel_is_idempotent(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10))).booking

    first = await engine.bookings.cancel(booking.id)
    assert first.ok and first.changed
    assert first.booking.status == BookingStatus.CANCELLED

    second = await engine.bookings.cancel(booking.id)
    assert second.ok and not second.changed
    assert second.booking.status == BookingStatus.CANCELLED


@pytest.mark.asyncio
async def test_cancel_rejected_booking_is_noop(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10), coach_id="coach1")).booking
    await engine.bookings.respond(booking.id, BookingStatus.REJECTED)

    outcome = await engine.bookings.cancel(booking.id)
    assert outcome.ok and not outcome.changed
    assert (await engine.bookings.get(booking.id)).status == BookingStatus.REJECTED


@pytest.mark.asyncio
async def test_cancel_pending_booking(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10), coach_id="coach1")).booking
    outcome = await engine.bookings.cancel(booking.id)
    assert outcome.booking.status == BookingStatus.CANCELLED


@pytest.mark.asyncio
async def test_cancel_unknown_booking(engine):
    outcome = await engine.bookings.cancel("missing")
    assert outcome.kind == FailureKind.NOT_FOUND


@pytest.mark.asyncio
async def test_coach_confirms_pending_booking(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10), coach_id="coach1")).booking

    outcome = await engine.bookings.respond(booking.id, BookingStatus.CONFIRMED)
    assert outcome.ok
    assert outcome.booking.status == BookingStatus.CONFIRMED

    again = await engine.bookings.respond(booking.id, BookingStatus.REJECTED)
    assert again.kind == FailureKind.INVALID_TRANSITION
    assert (await engine.bookings.get(booking.id)).status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_respond_requires_pending(engine):
    confirmed = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10))).booking
    cancelled = (await engine.bookings.create("c2", "user_123", slot(TUESDAY, 10), coach_id="coach1")).booking
    await engine.bookings.cancel(cancelled.id)

    for booking_id in (confirmed.id, cancelled.id):
        outcome = await engine.bookings.respond(booking_id, BookingStatus.CONFIRMED)
        assert outcome.kind == FailureKind.INVALID_TRANSITION


@pytest.mark.asyncio
async def test_respond_rejects_non_decision_status(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 10), coach_id="coach1")).booking

    for decision in (BookingStatus.CANCELLED, "bogus"):
        outcome = await engine.bookings.respond(booking.id, decision)
        assert outcome.kind == FailureKind.INVALID_TRANSITION
    assert (await engine.bookings.get(booking.id)).status == BookingStatus.PENDING_APPROVAL


@pytest.mark.asyncio
async def test_respond_unknown_booking(engine):
    outcome = await engine.bookings.respond("missing", BookingStatus.CONFIRMED)
    assert outcome.kind == FailureKind.NOT_FOUND


def test_terminal_states_have_no_exits():
    for terminal in (BookingStatus.CANCELLED, BookingStatus.REJECTED):
        for target in BookingStatus:
            assert not can_transition(terminal, target)


@pytest.mark.asyncio
async def test_blackout_toggle_round_trip(engine):
    first = await engine.bookings.toggle_coach_blackout("coach1", slot(TUESDAY, 9))
    second = await engine.bookings.toggle_coach_blackout("coach1", slot(TUESDAY, 9))

    assert first.blocked is True
    assert second.blocked is False
    assert engine.catalog.get_coach("coach1").blocked_slots == set()


@pytest.mark.asyncio
async def test_blackout_unknown_coach(engine):
    assert await engine.bookings.toggle_coach_blackout("ghost", slot(TUESDAY, 9)) is None


@pytest.mark.asyncio
async def test_blackout_rejects_slot_off_the_hour(engine):
    off_hour = slot(TUESDAY, 19).replace(minute=30)
    aware = slot(TUESDAY, 19).replace(tzinfo=timezone.utc)

    assert await engine.bookings.toggle_coach_blackout("coach1", off_hour) is None
    assert await engine.bookings.toggle_coach_blackout("coach1", aware) is None
    assert engine.catalog.get_coach("coach1").blocked_slots == set()


@pytest.mark.asyncio
async def test_blackout_leaves_existing_bookings_alone(engine):
    booking = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 9), coach_id="coach1")).booking
    await engine.bookings.toggle_coach_blackout("coach1", slot(TUESDAY, 9))

    assert (await engine.bookings.get(booking.id)).status == BookingStatus.PENDING_APPROVAL


@pytest.mark.asyncio
async def test_user_listing_newest_first(engine):
    for hour in (9, 15, 12):
        await engine.bookings.create("c1", "user_123", slot(TUESDAY, hour))
    await engine.bookings.create("c1", "someone_else", slot(TUESDAY, 18))

    bookings = await engine.bookings.list_for_user("user_123")
    assert [b.start_time.hour for b in bookings] == [15, 12, 9]


@pytest.mark.asyncio
async def test_coach_listing_active_oldest_first(engine):
    late = (await engine.bookings.create("c1", "user_123", slot(TUESDAY, 20), coach_id="coach1")).booking
    early = (await engine.bookings.create("c2", "user_123", slot(TUESDAY, 9), coach_id="coach1")).booking
    rejected = (await engine.bookings.create("c3", "user_123", slot(TUESDAY, 12), coach_id="coach1")).booking
    cancelled = (await engine.bookings.create("c3", "user_123", slot(TUESDAY, 13), coach_id="coach1")).booking
    await engine.bookings.respond(rejected.id, BookingStatus.REJECTED)
    await engine.bookings.cancel(cancelled.id)

    bookings = await engine.bookings.list_for_coach("coach1")
    assert [b.id for b in bookings] == [early.id, late.id]


@pytest.mark.asyncio
async def test_admin_listing_includes_every_status(engine):
    kept = (await engine.bookings.create("c1", "user_123", slot(SATURDAY, 9))).booking
    dropped = (await engine.bookings.create("c1", "user_123", slot(SUNDAY, 9))).booking
    await engine.bookings.cancel(dropped.id)

    bookings = await engine.bookings.list_all()
    assert [b.id for b in bookings] == [dropped.id, kept.id]


@pytest.mark.asyncio
async def test_date_listing_active_only(engine):
    await engine.bookings.create("c2", "user_123", slot(TUESDAY, 11))
    await engine.bookings.create("c1", "user_123", slot(TUESDAY, 11))
    await engine.bookings.create("c1", "user_123", slot(TUESDAY, 8))
    await engine.bookings.create("c1", "user_123", slot(SATURDAY, 8))
    gone = (await engine.bookings.create("c3", "user_123", slot(TUESDAY, 9))).booking
    await engine.bookings.cancel(gone.id)

    bookings = await engine.bookings.list_for_date(TUESDAY)
    assert [(b.court_id, b.start_time.hour) for b in bookings] == [("c1", 8), ("c1", 11), ("c2", 11)]

    only_c2 = await engine.bookings.list_for_date(TUESDAY, court_id="c2")
    assert [b.court_id for b in only_c2] == ["c2"]


@pytest.mark.asyncio
async def test_revenue_counts_confirmed_only(engine):
    await engine.bookings.create("c1", "user_123", slot(TUESDAY, 19))   # 30.00
    await engine.bookings.create("c1", "user_123", slot(SATURDAY, 10))  # 25.00
    await engine.bookings.create("c2", "user_123", slot(SATURDAY, 11), coach_id="coach1")  # pending
    cancelled = (await engine.bookings.create("c3", "user_123", slot(SATURDAY, 12))).booking
    await engine.bookings.cancel(cancelled.id)

    summary = await engine.bookings.revenue_summary()
    assert summary.booking_count == 2
    assert summary.total_revenue == Decimal("55.00")
    assert summary.average_booking_value == Decimal("27.50")
    assert [(d.day, d.revenue) for d in summary.daily] == [
        (SATURDAY, Decimal("25.00")),
        (TUESDAY, Decimal("30.00")),
    ]


@pytest.mark.asyncio
async def test_revenue_empty(engine):
    summary = await engine.bookings.revenue_summary()
    assert summary.booking_count == 0
    assert summary.average_booking_value == Decimal("0")
    assert summary.daily == []


def test_log_processor_renders_engine_values():
    event = render_domain_values(None, "info", {
        "event": "booking_created",
        "status": BookingStatus.CONFIRMED,
        "total": Decimal("37.50"),
        "slot_start": slot(SATURDAY, 19),
    })
    assert event == {
        "event": "booking_created",
        "status": "confirmed",
        "total": "37.50",
        "slot_start": "2026-10-17T19:00:00",
    }
