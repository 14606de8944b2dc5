"""
Pytest fixtures for the test database, services and HTTP client.

Each test gets its own SQLite database file, so sessions in one test can run
truly concurrent transactions against a shared store.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("SEED_DEMO_CATALOG", "false")

from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from boxoffice.main import app
from boxoffice.db.base import Base
from boxoffice.db.session import build_engine, build_session_factory, get_db, get_session_factory
from boxoffice.domain import Show, TicketHolder
from boxoffice.models.show import Show as ShowRow
from boxoffice.services.catalog_service import to_show
from boxoffice.services.reservation_ledger import ReservationLedger
from boxoffice.services.ticket_service import issue_ticket


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh schema in a per-test database file."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'boxoffice_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def unreachable_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory for a store that cannot be opened (its directory does not exist)."""
    broken = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'boxoffice.db'}")
    yield build_session_factory(broken)
    await broken.dispose()


@pytest.fixture
def ledger(session_factory) -> ReservationLedger:
    return ReservationLedger(session_factory)


async def create_show(session_factory, title: str, show_time: str, price: str, rows: int, cols: int) -> Show:
    async with session_factory() as session:
        async with session.begin():
            row = ShowRow(
                title=title,
                show_time=show_time,
                price=Decimal(price),
                layout_rows=rows,
                layout_cols=cols,
            )
            session.add(row)
            await session.flush()
            return to_show(row)


@pytest_asyncio.fixture
async def nova_show(session_factory) -> Show:
    """Nova @ 3:00 PM: 2x2 grid at 100 per seat."""
    return await create_show(session_factory, "Nova", "3:00 PM", "100", 2, 2)


@pytest_asyncio.fixture
async def big_show(session_factory) -> Show:
    return await create_show(session_factory, "Avengers Endgame", "2:30 PM", "350.00", 5, 10)


@pytest_asyncio.fixture
async def holder(session_factory) -> TicketHolder:
    return await issue_ticket(session_factory)


@pytest_asyncio.fixture
async def other_holder(session_factory, holder) -> TicketHolder:
    return await issue_ticket(session_factory)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
