"""
Seat booking endpoint.

A thin adapter over BookingSession: load current availability, toggle the
requested seats, submit once. The reservation ledger decides the outcome;
this module only maps it to a status code.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.api.deps import get_ledger
from boxoffice.db.session import get_session_factory
from boxoffice.domain import CommitResult, Seat, SeatState
from boxoffice.schemas.booking import BookingCreate, BookingResponse, BookingRejectedResponse
from boxoffice.schemas.show import SeatRef
from boxoffice.services.booking_service import BookingOutcome, BookingSession
from boxoffice.services.catalog_service import get_show_by_id
from boxoffice.services.reservation_ledger import ReservationLedger
from boxoffice.services.ticket_service import get_holder
from boxoffice.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/shows", tags=["Bookings"])

SEAT_TAKEN_MESSAGE = "Some of the requested seats are already reserved. Please choose again."


def _rejected(status_code: int, result: str, message: str, reserved: frozenset[Seat]) -> JSONResponse:
    body = BookingRejectedResponse(
        status=result,
        message=message,
        reserved=[SeatRef.from_seat(seat) for seat in sorted(reserved)],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post(
    "/{show_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_409_CONFLICT: {"model": BookingRejectedResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": BookingRejectedResponse},
    },
)
async def create_booking(
    show_id: int,
    booking_data: BookingCreate,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    ledger: ReservationLedger = Depends(get_ledger),
):
    """
    Reserve every requested seat for the ticket holder, or none of them.

    409 when any seat is already reserved (either in the freshly loaded seat
    map or by a booking that committed in the meantime), with the current
    availability so the customer can choose again. 503 on storage failure;
    nothing was reserved and the request can be retried.
    """
    async with session_factory() as db:
        show = await get_show_by_id(db, show_id)
        holder = await get_holder(db, booking_data.holder_id)

    session = BookingSession(holder, ledger, show)
    await session.load()

    requested = list(dict.fromkeys((seat.row, seat.col) for seat in booking_data.seats))
    taken = [Seat(row, col).name for row, col in requested if session.toggle(row, col) is SeatState.RESERVED]
    if taken:
        logger.info("booking_rejected_stale_selection", show_id=show.id, seats=taken)
        return _rejected(
            status.HTTP_409_CONFLICT,
            CommitResult.CONFLICT.value,
            SEAT_TAKEN_MESSAGE,
            session.grid.reserved_seats(),
        )

    outcome: BookingOutcome = await session.submit()

    if outcome.result is CommitResult.CONFLICT:
        return _rejected(status.HTTP_409_CONFLICT, outcome.result.value, outcome.message, outcome.reserved)
    if outcome.result is CommitResult.ERROR:
        return _rejected(status.HTTP_503_SERVICE_UNAVAILABLE, outcome.result.value, outcome.message, outcome.reserved)

    summary = outcome.summary
    return BookingResponse(
        status=outcome.result.value,
        message=outcome.message,
        ticket_code=summary.ticket_code,
        show_id=show.id,
        title=summary.title,
        show_time=summary.show_time,
        seats=summary.seat_names,
        unit_price=summary.unit_price,
        total=summary.total,
    )
