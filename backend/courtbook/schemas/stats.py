"""
Pydantic schemas for the admin revenue summary.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class DailyRevenue(BaseModel):
    day: date
    revenue: Decimal


class RevenueSummary(BaseModel):
    total_revenue: Decimal
    booking_count: int
    average_booking_value: Decimal
    daily: list[DailyRevenue]
