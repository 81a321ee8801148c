"""
User directory handling login by email lookup and signup.

There are no passwords: identifying a caller is the collaborator's job and
real authentication is out of scope for this service.
"""

import uuid
from decimal import Decimal
from typing import Iterable, Optional

from fastapi import HTTPException, status

from courtbook.core.logging import get_logger
from courtbook.schemas.catalog import Coach
from courtbook.schemas.user import Role, User, UserCreate, UserLogin
from courtbook.services.catalog_service import ResourceCatalog

logger = get_logger(__name__)

DEFAULT_COACH_SPECIALTY = "General Trainer"
DEFAULT_COACH_RATE = Decimal("20")


class UserDirectory:

    def __init__(self, catalog: ResourceCatalog, users: Iterable[User] = ()):
        self.catalog = catalog
        self._users: dict[str, User] = {u.id: u for u in users}

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in self._users.values():
            if user.email.lower() == email:
                return user
        return None

    def login(self, login_data: UserLogin) -> User:
        """Raises 401 if no user has this email."""
        user = self.find_by_email(login_data.email)
        if user is None:
            logger.warning("login_failed", email=login_data.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        logger.info("user_logged_in", user_id=user.id, role=user.role.value)
        return user

    def signup(self, user_data: UserCreate) -> User:
        """
        Register a new user. Coaches are also added to the catalog so they can
        be attached to bookings. Raises 409 if the email is taken.
        """
        if self.find_by_email(user_data.email):
            logger.warning("registration_failed", reason="email_exists", email=user_data.email)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        user = User(
            id=f"user_{uuid.uuid4().hex[:8]}",
            name=user_data.name,
            email=user_data.email,
            role=user_data.role,
        )
        self._users[user.id] = user

        if user.role == Role.COACH:
            self.catalog.add_coach(
                Coach(
                    id=user.id,
                    name=user.name,
                    specialty=DEFAULT_COACH_SPECIALTY,
                    hourly_rate=DEFAULT_COACH_RATE,
                    bio="New coach at CourtConnect!",
                    rating=5.0,
                )
            )

        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return user
