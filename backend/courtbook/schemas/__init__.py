from courtbook.schemas.booking import (
    AddOns, BlackoutState, BlackoutToggle, Booking, BookingCancelResponse,
    BookingCreate, BookingDecision, BookingStatus, SlotCell,
)
from courtbook.schemas.catalog import Coach, CoachResponse, Court, CourtType
from courtbook.schemas.pricing import PricingBreakdown, PricingRules
from courtbook.schemas.result import AvailabilityResult, BookingOutcome, ConflictKind, FailureKind
from courtbook.schemas.stats import DailyRevenue, RevenueSummary
from courtbook.schemas.user import Role, User, UserCreate, UserLogin

__all__ = [
    "AddOns", "BlackoutState", "BlackoutToggle", "Booking", "BookingCancelResponse",
    "BookingCreate", "BookingDecision", "BookingStatus", "SlotCell",
    "Coach", "CoachResponse", "Court", "CourtType",
    "PricingBreakdown", "PricingRules",
    "AvailabilityResult", "BookingOutcome", "ConflictKind", "FailureKind",
    "DailyRevenue", "RevenueSummary",
    "Role", "User", "UserCreate", "UserLogin",
]
