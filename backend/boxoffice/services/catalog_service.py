"""
Catalog store: read-only lookup of show configurations.

Shows are populated once by `seed_catalog` and never modified afterwards, so
the listing is safe to cache.
"""

from decimal import Decimal
from typing import Iterable, NamedTuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.core.logging import get_logger
from boxoffice.db.session import begin_write
from boxoffice.domain import Show, ShowNotFoundError, StorageError, show_key
from boxoffice.models.show import Show as ShowRow

logger = get_logger(__name__)


class ShowSeed(NamedTuple):
    title: str
    show_time: str
    price: Decimal
    rows: int
    cols: int


DEMO_CATALOG = (
    ShowSeed("Avengers Endgame", "2:30 PM", Decimal("350.00"), 5, 10),
    ShowSeed("Avengers Endgame", "6:30 PM", Decimal("350.00"), 5, 10),
    ShowSeed("Star Wars: The Force Awakens", "4:00 PM", Decimal("350.00"), 6, 8),
    ShowSeed("Minecraft: The Movie", "1:00 PM", Decimal("350.00"), 4, 6),
)


def to_show(row: ShowRow) -> Show:
    return Show(
        id=row.id,
        title=row.title,
        show_time=row.show_time,
        price=Decimal(row.price),
        rows=row.layout_rows,
        cols=row.layout_cols,
    )


async def list_shows(db: AsyncSession) -> list[Show]:
    """All shows ordered by title, then show time."""
    try:
        result = await db.execute(
            select(ShowRow).order_by(ShowRow.title.asc(), ShowRow.show_time.asc(), ShowRow.id.asc())
        )
        rows = result.scalars().all()
    except (SQLAlchemyError, OSError) as e:
        logger.error("catalog_read_failed", error=str(e))
        raise StorageError() from e
    return [to_show(row) for row in rows]


async def get_show(db: AsyncSession, title: str, show_time: str) -> Show:
    try:
        result = await db.execute(
            select(ShowRow).where(ShowRow.title == title, ShowRow.show_time == show_time)
        )
        row = result.scalar_one_or_none()
    except (SQLAlchemyError, OSError) as e:
        logger.error("catalog_read_failed", title=title, show_time=show_time, error=str(e))
        raise StorageError() from e
    if row is None:
        raise ShowNotFoundError(show_key(title, show_time))
    return to_show(row)


async def get_show_by_id(db: AsyncSession, show_id: int) -> Show:
    try:
        row = await db.get(ShowRow, show_id)
    except (SQLAlchemyError, OSError) as e:
        logger.error("catalog_read_failed", show_id=show_id, error=str(e))
        raise StorageError() from e
    if row is None:
        raise ShowNotFoundError(str(show_id))
    return to_show(row)


async def seed_catalog(
    session_factory: async_sessionmaker[AsyncSession],
    shows: Iterable[ShowSeed] = DEMO_CATALOG,
) -> int:
    """
    Insert `shows` if the catalog is empty. Returns the number inserted.
    A concurrent seeder losing the race on uq_show_title_time inserts nothing.
    """
    try:
        async with session_factory() as session:
            async with session.begin():
                await begin_write(session)
                existing = (await session.execute(select(func.count()).select_from(ShowRow))).scalar()
                if existing:
                    logger.debug("catalog_seed_skipped", existing=existing)
                    return 0

                rows = [
                    ShowRow(
                        title=seed.title,
                        show_time=seed.show_time,
                        price=seed.price,
                        layout_rows=seed.rows,
                        layout_cols=seed.cols,
                    )
                    for seed in shows
                ]
                session.add_all(rows)
    except IntegrityError:
        logger.info("catalog_seed_raced", reason="already_seeded")
        return 0

    logger.info("catalog_seeded", shows=len(rows))
    return len(rows)
