"""
Show catalog endpoints with Redis caching on the listing.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from boxoffice.api.deps import get_ledger
from boxoffice.db.session import get_db
from boxoffice.schemas.show import ShowResponse, SeatMapResponse
from boxoffice.services.catalog_service import list_shows, get_show, get_show_by_id
from boxoffice.services.cache_service import get_cached_shows, set_cached_shows
from boxoffice.services.reservation_ledger import ReservationLedger
from boxoffice.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/shows", tags=["Shows"])


@router.get("/", response_model=list[ShowResponse])
async def list_shows_endpoint(db: AsyncSession = Depends(get_db)):
    """
    List every show ordered by title, then time.
    The catalog is read-only once seeded, so the listing is served from Redis when possible.
    """
    cached = await get_cached_shows()
    if cached is not None:
        logger.info("shows_list_cache_hit")
        return [ShowResponse(**item) for item in cached]

    shows = [ShowResponse.model_validate(show) for show in await list_shows(db)]
    await set_cached_shows([show.model_dump(mode="json") for show in shows])
    return shows


@router.get("/lookup", response_model=ShowResponse)
async def lookup_show_endpoint(
    title: str = Query(..., min_length=1),
    show_time: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """Find a show by its title and time label."""
    return ShowResponse.model_validate(await get_show(db, title, show_time))


@router.get("/{show_id}", response_model=ShowResponse)
async def get_show_endpoint(show_id: int, db: AsyncSession = Depends(get_db)):
    return ShowResponse.model_validate(await get_show_by_id(db, show_id))


@router.get("/{show_id}/seats", response_model=SeatMapResponse)
async def get_seat_map_endpoint(
    show_id: int,
    db: AsyncSession = Depends(get_db),
    ledger: ReservationLedger = Depends(get_ledger),
):
    """
    Current seat availability. Not cached: it is refreshed on every explicit
    reload and may already be stale when the customer commits.
    """
    show = await get_show_by_id(db, show_id)
    reserved = await ledger.status_for(show.id)
    return SeatMapResponse.build(show, reserved)
