"""
Pydantic schemas for booking-related request/response validation.

A booking always covers exactly one hour-aligned slot. Slot timestamps are
naive wall-clock times in the club's local calendar.
"""

import enum
from datetime import date, datetime, timedelta
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field, model_validator

from courtbook.schemas.pricing import PricingBreakdown

SLOT_DURATION = timedelta(hours=1)
MAX_ADDON_QUANTITY = 4


def is_hour_aligned(moment: datetime) -> bool:
    return moment.minute == 0 and moment.second == 0 and moment.microsecond == 0


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Strict half-open interval overlap; touching intervals do not overlap."""
    return start_a < end_b and end_a > start_b


def validate_slot_start(value: datetime) -> datetime:
    if value.tzinfo is not None:
        raise ValueError("slot_start must be a local wall-clock time without a UTC offset")
    if not is_hour_aligned(value):
        raise ValueError("slot_start must be aligned to the hour")
    return value


SlotStart = Annotated[datetime, AfterValidator(validate_slot_start)]


class BookingStatus(str, enum.Enum):
    PENDING_APPROVAL = "pending_approval"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"

    @property
    def is_active(self) -> bool:
        return self not in (BookingStatus.CANCELLED, BookingStatus.REJECTED)


ACTIVE_STATUSES = (BookingStatus.PENDING_APPROVAL, BookingStatus.CONFIRMED)


class AddOns(BaseModel):
    rackets: int = Field(default=0, ge=0, le=MAX_ADDON_QUANTITY)
    shoes: int = Field(default=0, ge=0, le=MAX_ADDON_QUANTITY)

    model_config = {"frozen": True}


class Booking(BaseModel):
    id: str
    court_id: str
    user_id: str
    start_time: datetime
    end_time: datetime
    add_ons: AddOns
    coach_id: Optional[str] = None
    pricing: PricingBreakdown
    status: BookingStatus
    created_at: datetime

    model_config = {"from_attributes": True}

    @property
    def is_active(self) -> bool:
        return self.status.is_active


class BookingCreate(BaseModel):
    court_id: str = Field(..., min_length=1)
    slot_start: SlotStart
    slot_end: Optional[datetime] = None
    add_ons: AddOns = Field(default_factory=AddOns)
    coach_id: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def check_slot_end(self) -> "BookingCreate":
        if self.slot_end is not None and self.slot_end != self.slot_start + SLOT_DURATION:
            raise ValueError("slot_end must be exactly one hour after slot_start")
        return self


class BookingDecision(BaseModel):
    decision: Literal["confirmed", "rejected"]


class BookingCancelResponse(BaseModel):
    message: str
    booking_id: str
    status: BookingStatus


class BlackoutToggle(BaseModel):
    slot_start: SlotStart


class BlackoutState(BaseModel):
    coach_id: str
    slot_start: datetime
    blocked: bool


class SlotCell(BaseModel):
    """One court/hour cell of the day grid."""

    court_id: str
    day: date
    hour: int
    booked: bool
