"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Court Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Booking store: "memory" or "sql"
    BOOKING_STORE: str = "memory"
    DATABASE_URL: str = "sqlite+aiosqlite:///./courtbook.db"
    # Migrations only; derived from DATABASE_URL when empty
    DATABASE_URL_SYNC: str = ""
    DB_ECHO: bool = False

    # Club calendar (24h clock, closing hour is exclusive)
    OPENING_HOUR: int = 8
    CLOSING_HOUR: int = 22

    # Simulated round-trip latency for engine operations
    SIMULATED_LATENCY_MS: int = 0

    # Pricing rules applied at startup
    WEEKEND_SURCHARGE: Decimal = Decimal("5")
    PEAK_HOUR_MULTIPLIER: Decimal = Decimal("1.5")
    PEAK_START_HOUR: int = 18
    PEAK_END_HOUR: int = 21
    RACKET_PRICE: Decimal = Decimal("5")
    SHOE_PRICE: Decimal = Decimal("3")

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
