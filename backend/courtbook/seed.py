"""
Seed data loaded into the catalog and user directory at startup.
"""

from decimal import Decimal

from courtbook.core.config import Settings
from courtbook.schemas.catalog import Coach, Court, CourtType
from courtbook.schemas.pricing import PricingRules
from courtbook.schemas.user import Role, User

INITIAL_COURTS = [
    Court(id="c1", name="Court A (Center)", type=CourtType.INDOOR, base_price=Decimal("20")),
    Court(id="c2", name="Court B (East)", type=CourtType.INDOOR, base_price=Decimal("20")),
    Court(id="c3", name="Court C (Outdoor)", type=CourtType.OUTDOOR, base_price=Decimal("15")),
]

INITIAL_USERS = [
    User(id="user_123", name="Alice Member", email="alice@test.com", role=Role.MEMBER),
    User(id="coach1", name="John Doe", email="john@test.com", role=Role.COACH),
    User(id="admin1", name="Admin User", email="admin@courtconnect.com", role=Role.ADMIN),
]


def initial_coaches() -> list[Coach]:
    """Fresh coach records; blackout sets are mutable so never share them."""
    return [
        Coach(
            id="coach1",
            name="John Doe",
            specialty="Badminton Pro",
            hourly_rate=Decimal("25"),
            bio="Former national champion with 10 years of coaching experience.",
            rating=4.9,
        ),
        Coach(
            id="coach2",
            name="Sarah Smith",
            specialty="Fitness & Agility",
            hourly_rate=Decimal("20"),
            bio="Certified strength and conditioning specialist focusing on court agility.",
            rating=4.7,
        ),
    ]


def initial_pricing_rules(settings: Settings) -> PricingRules:
    return PricingRules(
        weekend_surcharge=settings.WEEKEND_SURCHARGE,
        peak_hour_multiplier=settings.PEAK_HOUR_MULTIPLIER,
        peak_start_hour=settings.PEAK_START_HOUR,
        peak_end_hour=settings.PEAK_END_HOUR,
        racket_price=settings.RACKET_PRICE,
        shoe_price=settings.SHOE_PRICE,
    )
