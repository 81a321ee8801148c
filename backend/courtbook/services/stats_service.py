"""
Revenue figures for the admin dashboard. Only confirmed bookings count.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from courtbook.schemas.booking import Booking, BookingStatus
from courtbook.schemas.stats import DailyRevenue, RevenueSummary

CHART_DAYS = 7


def summarize_revenue(bookings: Iterable[Booking], days: int = CHART_DAYS) -> RevenueSummary:
    confirmed = [b for b in bookings if b.status == BookingStatus.CONFIRMED]

    total = sum((b.pricing.total for b in confirmed), Decimal("0"))
    count = len(confirmed)
    average = (total / count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) if count else Decimal("0.00")

    per_day = defaultdict(lambda: Decimal("0"))
    for b in confirmed:
        per_day[b.start_time.date()] += b.pricing.total

    # Most recent `days` days with revenue, oldest first
    recent = sorted(per_day)[-days:] if days > 0 else []
    return RevenueSummary(
        total_revenue=total,
        booking_count=count,
        average_booking_value=average,
        daily=[DailyRevenue(day=d, revenue=per_day[d]) for d in recent],
    )
