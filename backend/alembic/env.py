"""
Alembic environment for the bookings table.

The app talks to the database through an async driver; alembic runs
synchronously, so the URL is taken from DATABASE_URL_SYNC, or derived from
DATABASE_URL by dropping the async driver suffix.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from courtbook.core.config import get_settings
from courtbook.db.base import Base
from courtbook.models import BookingRecord  # noqa: F401

ASYNC_DRIVERS = {"aiosqlite": "sqlite", "asyncpg": "postgresql"}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_url() -> str:
    settings = get_settings()
    if settings.DATABASE_URL_SYNC:
        return settings.DATABASE_URL_SYNC
    url = make_url(settings.DATABASE_URL)
    _, _, driver = url.drivername.partition("+")
    if driver in ASYNC_DRIVERS:
        url = url.set(drivername=ASYNC_DRIVERS[driver])
    return url.render_as_string(hide_password=False)


def configure_context(**kwargs) -> None:
    # SQLite cannot ALTER constraints in place; batch mode rebuilds the table
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    configure_context(
        url=migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = migration_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        configure_context(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
