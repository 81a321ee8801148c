"""
Dynamic pricing for court slots.

PRICING ALGORITHM
=================

  subtotal = base price of the court
  weekend (Sat/Sun)   -> subtotal += weekend_surcharge        (flat, once per slot)
  peak hour           -> subtotal *= peak_hour_multiplier     (surcharge included)
  equipment_fee       =  rackets * racket_price + shoes * shoe_price
  coach_fee           =  coach hourly rate
  total               =  subtotal + equipment_fee + coach_fee, rounded to cents

Equipment and coach fees are never scaled by weekend or peak rules.

Unknown court or coach ids contribute zero instead of failing. Quotes are
requested speculatively while a user is still choosing, so a half-filled
selection must still price.

Rounding: only `total` is rounded, to 0.01 with ROUND_HALF_UP.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from courtbook.core.logging import get_logger
from courtbook.core.metrics import record_price_quote
from courtbook.schemas.pricing import PricingBreakdown, PricingRules
from courtbook.services.catalog_service import ResourceCatalog

logger = get_logger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0")


def is_weekend(day: date) -> bool:
    # Monday=0 .. Sunday=6
    return day.weekday() >= 5


def price_slot(
    rules: PricingRules,
    base_price: Decimal,
    day: date,
    hour: int,
    rackets: int = 0,
    shoes: int = 0,
    coach_rate: Decimal = ZERO,
) -> PricingBreakdown:
    """Pure pricing arithmetic for one slot."""
    weekend = is_weekend(day)
    peak = rules.is_peak(hour)

    subtotal = base_price
    weekend_fee = ZERO
    multiplier = Decimal("1")

    if weekend:
        weekend_fee = rules.weekend_surcharge
        subtotal += weekend_fee

    if peak:
        multiplier = rules.peak_hour_multiplier
        subtotal *= multiplier

    equipment_fee = rackets * rules.racket_price + shoes * rules.shoe_price
    total = (subtotal + equipment_fee + coach_rate).quantize(CENT, rounding=ROUND_HALF_UP)

    return PricingBreakdown(
        base_price=base_price,
        weekend_surcharge=weekend_fee,
        time_multiplier=multiplier,
        subtotal=subtotal,
        equipment_fee=equipment_fee,
        coach_fee=coach_rate,
        total=total,
        is_peak=peak,
        is_weekend=weekend,
    )


class PricingRulesStore:
    """Holds the current pricing rules. Rule edits never touch stored bookings."""

    def __init__(self, rules: PricingRules):
        self._rules = rules

    def get_rules(self) -> PricingRules:
        return self._rules

    def set_rules(self, rules: PricingRules) -> PricingRules:
        previous = self._rules
        self._rules = rules
        logger.info(
            "pricing_rules_updated",
            previous=previous.model_dump(mode="json"),
            current=rules.model_dump(mode="json"),
        )
        return rules


class PricingCalculator:
    """Resolves catalog references, then prices against the current rules."""

    def __init__(self, catalog: ResourceCatalog, rules_store: PricingRulesStore):
        self.catalog = catalog
        self.rules_store = rules_store

    def compute_price(
        self,
        court_id: str,
        day: date,
        hour: int,
        rackets: int = 0,
        shoes: int = 0,
        coach_id: Optional[str] = None,
    ) -> PricingBreakdown:
        court = self.catalog.get_court(court_id)
        base_price = court.base_price if court else ZERO

        coach_rate = ZERO
        if coach_id:
            coach = self.catalog.get_coach(coach_id)
            if coach:
                coach_rate = coach.hourly_rate

        breakdown = price_slot(
            self.rules_store.get_rules(),
            base_price,
            day,
            hour,
            rackets=rackets,
            shoes=shoes,
            coach_rate=coach_rate,
        )
        record_price_quote(breakdown.is_peak, breakdown.is_weekend)
        return breakdown
