"""
Alembic migration environment for the venue platform schema.

The database URL is resolved in this order:
  1. `alembic -x url=...` on the command line
  2. DATABASE_URL_SYNC from settings
  3. DATABASE_URL with its async driver swapped for the sync one

SQLite connections get batch mode, since SQLite can't ALTER most constraints in place.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from venue_platform.core.config import get_settings
from venue_platform.db.base import Base
import venue_platform.models  # noqa: F401  registers every table on Base.metadata

ASYNC_DRIVERS = {"+asyncpg": "", "+aiosqlite": ""}

config = context.config
settings = get_settings()


def sync_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    if override:
        return override
    if settings.DATABASE_URL_SYNC:
        return settings.DATABASE_URL_SYNC
    url = settings.DATABASE_URL
    for driver, replacement in ASYNC_DRIVERS.items():
        url = url.replace(driver, replacement)
    return url


config.set_main_option("sqlalchemy.url", sync_url())

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of touching a database."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
