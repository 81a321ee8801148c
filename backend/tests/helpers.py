"""
Shared dates and caller headers for tests.
"""

from datetime import date, datetime, time

SATURDAY = date(2026, 10, 17)
SUNDAY = date(2026, 10, 18)
TUESDAY = date(2026, 10, 20)

MEMBER_HEADERS = {"X-User-Id": "user_123"}
COACH_HEADERS = {"X-User-Id": "coach1"}
ADMIN_HEADERS = {"X-User-Id": "admin1"}


def slot(day: date, hour: int) -> datetime:
    return datetime.combine(day, time(hour=hour))
