"""
Tests for the show catalog store and seeding.
"""

from decimal import Decimal

import pytest

from boxoffice.domain import ShowNotFoundError, StorageError
from boxoffice.services.catalog_service import (
    DEMO_CATALOG,
    ShowSeed,
    get_show,
    get_show_by_id,
    list_shows,
    seed_catalog,
)


@pytest.mark.asyncio
async def test_seed_demo_catalog_once(session_factory):
    assert await seed_catalog(session_factory) == len(DEMO_CATALOG)
    assert await seed_catalog(session_factory) == 0

    async with session_factory() as db:
        shows = await list_shows(db)
    assert len(shows) == len(DEMO_CATALOG)


@pytest.mark.asyncio
async def test_list_shows_ordered_by_title_then_time(session_factory):
    await seed_catalog(session_factory, [
        ShowSeed("Nova", "3:00 PM", Decimal("100"), 2, 2),
        ShowSeed("Avengers Endgame", "6:30 PM", Decimal("350"), 5, 10),
        ShowSeed("Avengers Endgame", "2:30 PM", Decimal("350"), 5, 10),
    ])

    async with session_factory() as db:
        shows = await list_shows(db)

    assert [show.key for show in shows] == [
        "Avengers Endgame @ 2:30 PM",
        "Avengers Endgame @ 6:30 PM",
        "Nova @ 3:00 PM",
    ]


@pytest.mark.asyncio
async def test_get_show_by_title_and_time(session_factory, nova_show):
    async with session_factory() as db:
        show = await get_show(db, "Nova", "3:00 PM")

    assert show == nova_show
    assert (show.rows, show.cols) == (2, 2)
    assert show.price == 100


@pytest.mark.asyncio
async def test_get_show_unknown_time(session_factory, nova_show):
    async with session_factory() as db:
        with pytest.raises(ShowNotFoundError) as exc_info:
            await get_show(db, "Nova", "9:00 PM")
    assert exc_info.value.show_ref == "Nova @ 9:00 PM"


@pytest.mark.asyncio
async def test_get_show_by_id(session_factory, nova_show):
    async with session_factory() as db:
        assert await get_show_by_id(db, nova_show.id) == nova_show
        with pytest.raises(ShowNotFoundError):
            await get_show_by_id(db, nova_show.id + 100)


@pytest.mark.asyncio
async def test_catalog_reads_on_unreachable_store(unreachable_factory):
    async with unreachable_factory() as db:
        with pytest.raises(StorageError):
            await get_show_by_id(db, 1)
        with pytest.raises(StorageError):
            await list_shows(db)
