"""Async engine and session factory construction.

Nothing here runs at import time: ``create_app`` builds the engine from
``Settings.database_url`` and tests build their own against SQLite.
"""

from sqlalchemy import event
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Sync or driverless Postgres schemes all run on asyncpg at runtime
_ASYNCPG_PREFIXES = (
    "postgresql+psycopg://",
    "postgresql+psycopg2://",
    "postgresql://",
    "postgres://",
)
# libpq-only query options asyncpg rejects
_UNSUPPORTED_ASYNCPG_OPTIONS = ("channel_binding",)


def _apply_asyncpg_scheme(database_url: str) -> str:
    for prefix in _ASYNCPG_PREFIXES:
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url


def _asyncpg_connect_args(url: URL) -> tuple[URL, dict]:
    """Move ``sslmode`` into asyncpg's ``ssl`` argument and drop what asyncpg rejects."""
    query = dict(url.query)
    connect_args = {}
    sslmode = query.pop("sslmode", None)
    if sslmode:
        connect_args["ssl"] = sslmode
    for option in _UNSUPPORTED_ASYNCPG_OPTIONS:
        query.pop(option, None)
    return url._replace(query=query), connect_args


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    # SQLite only enforces ON DELETE CASCADE with this pragma on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    url = make_url(_apply_asyncpg_scheme(database_url))
    connect_args = {}
    if url.get_backend_name() == "postgresql" and url.get_driver_name() == "asyncpg":
        url, connect_args = _asyncpg_connect_args(url)

    kwargs.setdefault("pool_pre_ping", True)
    engine = create_async_engine(url, connect_args=connect_args, **kwargs)
    if url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit off: services map entities to DTOs after the commit
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
