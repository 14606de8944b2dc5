"""
Engine and session lifecycle.

Every ledger and sequencer operation opens its own session and scoped
transaction from the factory built here, so the storage adapter owns the
connection lifecycle and a dropped connection surfaces as an error on the
operation that hit it rather than being silently re-opened.

SQLite notes:
  pysqlite's implicit BEGIN is disabled and replaced with an explicit one.
  Plain reads use a deferred BEGIN and never take the write lock; write
  transactions opened through `begin_write` use BEGIN IMMEDIATE, so they take
  the lock up front and concurrent writers queue on the busy timeout instead
  of failing mid-transaction. The database runs in WAL mode so open readers
  do not hold up a writer's commit. Foreign keys are switched on per
  connection.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from boxoffice.core.config import get_settings


WRITE_OPTIONS = {"sqlite_begin": "IMMEDIATE"}


def build_engine(database_url: str, **overrides) -> AsyncEngine:
    settings = get_settings()
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(
            url,
            connect_args={"timeout": settings.SQLITE_BUSY_TIMEOUT},
            poolclass=NullPool,
            **overrides,
        )
        _install_sqlite_hooks(engine)
        return engine

    options = dict(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=False,
    )
    options.update(overrides)
    return create_async_engine(url, **options)


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


async def begin_write(session: AsyncSession) -> None:
    """
    Bind `session` to a connection whose transaction takes the write lock at
    BEGIN. Call first thing inside `session.begin()`; a no-op outside SQLite.
    """
    await session.connection(execution_options=WRITE_OPTIONS)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(get_settings().DATABASE_URL, echo=get_settings().DEBUG)
SessionLocal = build_session_factory(engine)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency for services that scope their own transactions."""
    return SessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding a read session, closed after the request."""
    async with SessionLocal() as session:
        yield session


async def dispose_engine() -> None:
    await engine.dispose()
