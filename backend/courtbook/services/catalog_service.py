"""
Resource catalog: bookable courts and coaches, including each coach's
blackout set.

Blackout slots are tracked separately from bookings. Toggling a blackout never
touches existing bookings, and booking a coach never adds to the blackout set.
"""

from datetime import datetime
from typing import Iterable, Optional

from courtbook.core.logging import get_logger
from courtbook.schemas.catalog import Coach, Court

logger = get_logger(__name__)


class ResourceCatalog:

    def __init__(self, courts: Iterable[Court] = (), coaches: Iterable[Coach] = ()):
        self._courts: dict[str, Court] = {c.id: c for c in courts}
        self._coaches: dict[str, Coach] = {c.id: c for c in coaches}

    def get_court(self, court_id: str) -> Optional[Court]:
        return self._courts.get(court_id)

    def list_courts(self) -> list[Court]:
        return list(self._courts.values())

    def get_coach(self, coach_id: str) -> Optional[Coach]:
        return self._coaches.get(coach_id)

    def list_coaches(self) -> list[Coach]:
        return list(self._coaches.values())

    def add_coach(self, coach: Coach) -> Coach:
        self._coaches[coach.id] = coach
        logger.info("coach_registered", coach_id=coach.id, name=coach.name)
        return coach

    def is_blocked(self, coach_id: str, slot_start: datetime) -> bool:
        coach = self._coaches.get(coach_id)
        return coach is not None and slot_start in coach.blocked_slots

    def toggle_blackout(self, coach_id: str, slot_start: datetime) -> Optional[bool]:
        """
        Flip membership of slot_start in the coach's blackout set.
        Returns the new membership, or None if the coach is unknown.

        Callers that race this against booking creation must hold the
        booking manager's lock.
        """
        coach = self._coaches.get(coach_id)
        if coach is None:
            return None

        if slot_start in coach.blocked_slots:
            coach.blocked_slots.discard(slot_start)
            return False
        coach.blocked_slots.add(slot_start)
        return True
