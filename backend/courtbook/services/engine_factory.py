"""
Engine factory.
Wires catalog, pricing, store and booking manager from configuration.
"""

from dataclasses import dataclass
from typing import Optional

from courtbook.core.config import Settings, get_settings
from courtbook.seed import INITIAL_COURTS, INITIAL_USERS, initial_coaches, initial_pricing_rules
from courtbook.services.booking_service import BookingManager
from courtbook.services.catalog_service import ResourceCatalog
from courtbook.services.interfaces.booking_store import BookingStore
from courtbook.services.interfaces.memory_store import InMemoryBookingStore
from courtbook.services.pricing_service import PricingCalculator, PricingRulesStore
from courtbook.services.user_service import UserDirectory


@dataclass
class BookingEngine:
    catalog: ResourceCatalog
    rules: PricingRulesStore
    pricing: PricingCalculator
    store: BookingStore
    bookings: BookingManager
    users: UserDirectory
    settings: Settings


def get_booking_store(settings: Settings) -> BookingStore:
    """
    Get configured booking store.

    - memory: InMemoryBookingStore (default, tests)
    - sql: SqlBookingStore against DATABASE_URL
    """
    if settings.BOOKING_STORE == "sql":
        # Imported lazily so the memory store needs no database driver
        from courtbook.infrastructure.sql_store import SqlBookingStore

        return SqlBookingStore(settings.DATABASE_URL, echo=settings.DB_ECHO)
    return InMemoryBookingStore()


def build_engine(
    settings: Optional[Settings] = None,
    store: Optional[BookingStore] = None,
) -> BookingEngine:
    """Build a fully seeded engine. Each call returns independent state."""
    settings = settings or get_settings()
    store = store or get_booking_store(settings)

    catalog = ResourceCatalog(INITIAL_COURTS, initial_coaches())
    rules = PricingRulesStore(initial_pricing_rules(settings))
    pricing = PricingCalculator(catalog, rules)
    bookings = BookingManager(store, catalog, pricing, latency_ms=settings.SIMULATED_LATENCY_MS)
    users = UserDirectory(catalog, INITIAL_USERS)

    return BookingEngine(
        catalog=catalog,
        rules=rules,
        pricing=pricing,
        store=store,
        bookings=bookings,
        users=users,
        settings=settings,
    )


# Singleton instance
_engine: Optional[BookingEngine] = None


def get_engine() -> BookingEngine:
    """Get process-wide engine singleton."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine
