"""
Pydantic schemas for pricing rules and itemized price breakdowns.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class PricingRules(BaseModel):
    weekend_surcharge: Decimal = Field(..., ge=0)
    peak_hour_multiplier: Decimal = Field(..., ge=1)
    peak_start_hour: int = Field(..., ge=0, le=24)
    peak_end_hour: int = Field(..., ge=0, le=24)
    racket_price: Decimal = Field(..., ge=0)
    shoe_price: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_peak_window(self) -> "PricingRules":
        if self.peak_start_hour > self.peak_end_hour:
            raise ValueError("peak_start_hour must not be after peak_end_hour")
        return self

    def is_peak(self, hour: int) -> bool:
        """Peak window is half-open: [peak_start_hour, peak_end_hour)."""
        return self.peak_start_hour <= hour < self.peak_end_hour


class PricingBreakdown(BaseModel):
    """Itemized price for one slot. Frozen into a booking at creation time."""

    base_price: Decimal
    weekend_surcharge: Decimal
    time_multiplier: Decimal
    subtotal: Decimal
    equipment_fee: Decimal
    coach_fee: Decimal
    total: Decimal
    is_peak: bool
    is_weekend: bool

    model_config = {"frozen": True}
