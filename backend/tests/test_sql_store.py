"""
Tests for the SQLAlchemy booking store against a throwaway SQLite file.
"""

from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio

from courtbook.core.config import Settings
from courtbook.infrastructure.sql_store import SqlBookingStore
from courtbook.schemas.booking import SLOT_DURATION, AddOns, Booking, BookingStatus
from courtbook.services.engine_factory import build_engine
from courtbook.services.interfaces import StoreConflictError
from courtbook.services.pricing_service import price_slot
from courtbook.seed import initial_pricing_rules
from tests.helpers import SATURDAY, TUESDAY, slot


def make_booking(booking_id, court_id="c1", hour=19, day=TUESDAY, coach_id=None, user_id="user_123"):
    start = slot(day, hour)
    return Booking(
        id=booking_id,
        court_id=court_id,
        user_id=user_id,
        coach_id=coach_id,
        start_time=start,
        end_time=start + SLOT_DURATION,
        add_ons=AddOns(rackets=1),
        pricing=price_slot(initial_pricing_rules(Settings()), Decimal("20"), day, hour, rackets=1),
        status=BookingStatus.PENDING_APPROVAL if coach_id else BookingStatus.CONFIRMED,
        created_at=datetime(2026, 10, 1, 9, 0),
    )


@pytest_asyncio.fixture
async def store(tmp_path):
    store = SqlBookingStore(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    await store.initialize()
    yield store
    await store.close()


@pytest.mark.asyncio
async def test_add_and_get_round_trip(store):
    booking = make_booking("b1", coach_id="coach1")
    await store.add(booking)

    loaded = await store.get("b1")
    assert loaded == booking
    assert loaded.pricing.total == Decimal("35.00")


@pytest.mark.asyncio
async def test_get_missing(store):
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_update_status(store):
    await store.add(make_booking("b1"))

    updated = await store.update_status("b1", BookingStatus.CANCELLED)
    assert updated.status == BookingStatus.CANCELLED
    assert (await store.get("b1")).status == BookingStatus.CANCELLED
    assert await store.update_status("missing", BookingStatus.CANCELLED) is None


@pytest.mark.asyncio
async def test_query_filters(store):
    await store.add(make_booking("b1", court_id="c1", coach_id="coach1"))
    await store.add(make_booking("b2", court_id="c2", user_id="bob"))
    await store.add(make_booking("b3", court_id="c1", day=SATURDAY))
    await store.update_status("b2", BookingStatus.CANCELLED)

    assert [b.id for b in await store.query(user_id="user_123")] == ["b1", "b3"]
    assert [b.id for b in await store.query(coach_id="coach1")] == ["b1"]
    assert [b.id for b in await store.query(court_id="c1", day=TUESDAY)] == ["b1"]
    assert [b.id for b in await store.query(day=TUESDAY, active_only=True)] == ["b1"]
    assert len(await store.query()) == 3


@pytest.mark.asyncio
async def test_list_active_between(store):
    await store.add(make_booking("b1", hour=18))
    await store.add(make_booking("b2", court_id="c2", hour=19))
    await store.add(make_booking("b3", court_id="c3", hour=19))
    await store.update_status("b3", BookingStatus.REJECTED)

    found = await store.list_active_between(slot(TUESDAY, 19), slot(TUESDAY, 20))
    assert [b.id for b in found] == ["b2"]


@pytest.mark.asyncio
async def test_second_active_court_slot_conflicts(store):
    await store.add(make_booking("b1"))

    with pytest.raises(StoreConflictError):
        await store.add(make_booking("b2", user_id="bob"))


@pytest.mark.asyncio
async def test_second_active_coach_slot_conflicts(store):
    await store.add(make_booking("b1", court_id="c1", coach_id="coach1"))

    with pytest.raises(StoreConflictError):
        await store.add(make_booking("b2", court_id="c2", coach_id="coach1"))


@pytest.mark.asyncio
async def test_cancelled_row_frees_the_slot(store):
    await store.add(make_booking("b1"))
    await store.update_status("b1", BookingStatus.CANCELLED)

    await store.add(make_booking("b2"))
    assert [b.id for b in await store.query(active_only=True)] == ["b2"]


@pytest.mark.asyncio
async def test_manager_on_sql_store(store):
    engine = build_engine(Settings(BOOKING_STORE="sql"), store=store)

    first = await engine.bookings.create("c1", "user_123", slot(SATURDAY, 19), coach_id="coach1")
    second = await engine.bookings.create("c1", "bob", slot(SATURDAY, 19))
    assert first.ok
    assert second.reason == "Court is booked."

    confirmed = await engine.bookings.respond(first.booking.id, BookingStatus.CONFIRMED)
    assert confirmed.booking.status == BookingStatus.CONFIRMED

    summary = await engine.bookings.revenue_summary()
    assert summary.total_revenue == Decimal("62.50")
