"""
Booking table backing the SQL booking store.

Key design decisions:
- The price snapshot is stored as JSON and never rewritten after insert
- Status field allows cancellation without deleting records
- Partial unique indexes allow at most one active booking per (court, slot)
  and per (coach, slot); cancelled/rejected rows do not count
"""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Index, Integer, String, text

from courtbook.db.base import Base, TimestampMixin
from courtbook.schemas.booking import AddOns, Booking
from courtbook.schemas.pricing import PricingBreakdown

ACTIVE_STATUS_SQL = text("status IN ('pending_approval', 'confirmed')")


class BookingRecord(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True)
    court_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    coach_id = Column(String(64), nullable=True, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    rackets = Column(Integer, nullable=False, default=0)
    shoes = Column(Integer, nullable=False, default=0)
    pricing = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="check_booking_slot_order"),
        CheckConstraint("rackets BETWEEN 0 AND 4", name="check_booking_rackets_range"),
        CheckConstraint("shoes BETWEEN 0 AND 4", name="check_booking_shoes_range"),
        CheckConstraint(
            "status IN ('pending_approval', 'confirmed', 'cancelled', 'rejected')",
            name="check_booking_status",
        ),
        Index("ix_bookings_start_time", "start_time"),
        Index(
            "uq_active_court_slot", "court_id", "start_time", unique=True,
            sqlite_where=ACTIVE_STATUS_SQL, postgresql_where=ACTIVE_STATUS_SQL,
        ),
        Index(
            "uq_active_coach_slot", "coach_id", "start_time", unique=True,
            sqlite_where=ACTIVE_STATUS_SQL, postgresql_where=ACTIVE_STATUS_SQL,
        ),
    )

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingRecord":
        return cls(
            id=booking.id,
            court_id=booking.court_id,
            user_id=booking.user_id,
            coach_id=booking.coach_id,
            start_time=booking.start_time,
            end_time=booking.end_time,
            rackets=booking.add_ons.rackets,
            shoes=booking.add_ons.shoes,
            pricing=booking.pricing.model_dump(mode="json"),
            status=booking.status.value,
            created_at=booking.created_at,
        )

    def to_booking(self) -> Booking:
        return Booking(
            id=self.id,
            court_id=self.court_id,
            user_id=self.user_id,
            coach_id=self.coach_id,
            start_time=self.start_time,
            end_time=self.end_time,
            add_ons=AddOns(rackets=self.rackets, shoes=self.shoes),
            pricing=PricingBreakdown.model_validate(self.pricing),
            status=self.status,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<BookingRecord(id={self.id}, court={self.court_id}, start={self.start_time}, status={self.status})>"
