"""
Pydantic schemas for the resource catalog: courts and coaches.
"""

import enum
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CourtType(str, enum.Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"


class Court(BaseModel):
    id: str
    name: str
    type: CourtType
    base_price: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}


class Coach(BaseModel):
    id: str
    name: str
    specialty: str
    hourly_rate: Decimal = Field(..., ge=0)
    bio: str = ""
    rating: float = Field(5.0, ge=0, le=5)
    # Slot starts the coach declared unavailable, independent of bookings
    blocked_slots: set[datetime] = Field(default_factory=set)


class CoachResponse(BaseModel):
    id: str
    name: str
    specialty: str
    hourly_rate: Decimal
    bio: str
    rating: float
    blocked_slots: list[datetime]

    @classmethod
    def from_coach(cls, coach: Coach) -> "CoachResponse":
        return cls(
            id=coach.id,
            name=coach.name,
            specialty=coach.specialty,
            hourly_rate=coach.hourly_rate,
            bio=coach.bio,
            rating=coach.rating,
            blocked_slots=sorted(coach.blocked_slots),
        )
