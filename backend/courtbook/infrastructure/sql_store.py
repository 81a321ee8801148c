"""
SQL booking store built on SQLAlchemy's async engine.

CONCURRENCY NOTE
================

Within one process the BookingManager lock already serializes the
"check availability -> insert" sequence. Across processes that lock does not
exist, so the table carries partial unique indexes on (court_id, start_time)
and (coach_id, start_time) over active rows only. A second active insert for
the same slot fails with IntegrityError, which we surface as
StoreConflictError. The database is the final safety net.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from courtbook.core.logging import get_logger
from courtbook.core.metrics import record_store_operation
from courtbook.db.base import Base
from courtbook.db.session import build_engine, build_session_factory
from courtbook.models.booking import BookingRecord
from courtbook.schemas.booking import ACTIVE_STATUSES, Booking, BookingStatus
from courtbook.services.interfaces.booking_store import BookingStore, StoreConflictError

logger = get_logger(__name__)

_ACTIVE_VALUES = [s.value for s in ACTIVE_STATUSES]


class SqlBookingStore(BookingStore):

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = build_session_factory(self.engine)

    async def initialize(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("booking_store_ready", backend=self.engine.url.get_backend_name())

    async def close(self) -> None:
        await self.engine.dispose()

    async def add(self, booking: Booking) -> Booking:
        record_store_operation("write")
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(BookingRecord.from_booking(booking))
        except IntegrityError as e:
            logger.warning("booking_insert_conflict", booking_id=booking.id, error=str(e.orig))
            raise StoreConflictError(str(e.orig)) from e
        return booking

    async def get(self, booking_id: str) -> Optional[Booking]:
        record_store_operation("read")
        async with self.session_factory() as session:
            record = await session.get(BookingRecord, booking_id)
            return record.to_booking() if record else None

    async def update_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        record_store_operation("write")
        async with self.session_factory() as session:
            async with session.begin():
                record = await session.get(BookingRecord, booking_id)
                if record is None:
                    return None
                record.status = status.value
            return record.to_booking()

    async def list_active_between(self, start: datetime, end: datetime) -> list[Booking]:
        record_store_operation("read")
        query = (
            select(BookingRecord)
            .where(
                BookingRecord.start_time < end,
                BookingRecord.end_time > start,
                BookingRecord.status.in_(_ACTIVE_VALUES),
            )
            .order_by(BookingRecord.created_at.asc(), BookingRecord.id.asc())
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [r.to_booking() for r in result.scalars().all()]

    async def query(
        self,
        *,
        user_id: Optional[str] = None,
        coach_id: Optional[str] = None,
        court_id: Optional[str] = None,
        day: Optional[date] = None,
        active_only: bool = False,
    ) -> list[Booking]:
        record_store_operation("read")
        query = select(BookingRecord)

        if user_id is not None:
            query = query.where(BookingRecord.user_id == user_id)
        if coach_id is not None:
            query = query.where(BookingRecord.coach_id == coach_id)
        if court_id is not None:
            query = query.where(BookingRecord.court_id == court_id)
        if day is not None:
            day_start = datetime.combine(day, time.min)
            query = query.where(
                BookingRecord.start_time >= day_start,
                BookingRecord.start_time < day_start + timedelta(days=1),
            )
        if active_only:
            query = query.where(BookingRecord.status.in_(_ACTIVE_VALUES))

        query = query.order_by(BookingRecord.created_at.asc(), BookingRecord.id.asc())
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [r.to_booking() for r in result.scalars().all()]
