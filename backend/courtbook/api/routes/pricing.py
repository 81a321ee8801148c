"""
Pricing endpoints: live quotes and the admin-editable rules.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from courtbook.api.deps import require_role
from courtbook.schemas.booking import MAX_ADDON_QUANTITY
from courtbook.schemas.pricing import PricingBreakdown, PricingRules
from courtbook.schemas.user import Role, User
from courtbook.services.engine_factory import BookingEngine, get_engine

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.get("/quote", response_model=PricingBreakdown)
async def quote(
    court_id: str,
    day: date = Query(..., alias="date"),
    hour: int = Query(..., ge=0, le=23),
    rackets: int = Query(0, ge=0, le=MAX_ADDON_QUANTITY),
    shoes: int = Query(0, ge=0, le=MAX_ADDON_QUANTITY),
    coach_id: Optional[str] = None,
    engine: BookingEngine = Depends(get_engine),
):
    """
    Itemized price for a prospective slot.
    Unknown court or coach ids price at zero rather than failing.
    """
    return engine.pricing.compute_price(court_id, day, hour, rackets, shoes, coach_id)


@router.get("/rules", response_model=PricingRules)
async def get_rules(engine: BookingEngine = Depends(get_engine)):
    return engine.rules.get_rules()


@router.put("/rules", response_model=PricingRules)
async def set_rules(
    rules: PricingRules,
    user: User = Depends(require_role(Role.ADMIN)),
    engine: BookingEngine = Depends(get_engine),
):
    """Replace the pricing rules. Existing bookings keep their frozen prices."""
    return engine.rules.set_rules(rules)
