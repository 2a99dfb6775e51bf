# migrations/env.py
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from invoicing.models import Base  # users, tax_profiles, invoices

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# The app runs on async drivers; migrations run on their sync counterparts
_SYNC_SCHEMES = {
    "postgres://": "postgresql+psycopg://",
    "postgresql://": "postgresql+psycopg://",
    "postgresql+asyncpg://": "postgresql+psycopg://",
    "postgresql+psycopg2://": "postgresql+psycopg://",
    "sqlite+aiosqlite://": "sqlite://",
}


def _sync_url(url: str) -> str:
    for prefix, replacement in _SYNC_SCHEMES.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix) :]
    return url


def _database_url() -> str:
    # Programmatic config (tests) wins over the environment
    url = (
        config.get_main_option("sqlalchemy.url")
        or os.getenv("ALEMBIC_DATABASE_URL")
        or os.getenv("DATABASE_URL")
    )
    if not url:
        raise RuntimeError("set DATABASE_URL (or ALEMBIC_DATABASE_URL) to run migrations")
    return _sync_url(url)


def _configure_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        # SQLite cannot ALTER most constraints in place
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    url = _database_url()
    context.configure(url=url, literal_binds=True, **_configure_options(url))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = _database_url()
    section = dict(config.get_section(config.config_ini_section) or {})
    section["sqlalchemy.url"] = url
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
