"""
Booking session: drives one customer's seat selection for one show.

A BookingSession carries everything a booking needs (the ticket holder, the
ledger handle and the show), so nothing is read from process-wide state and
several sessions can run side by side in one process.

Flow:
  load()    -> ledger.status_for, then grid.reset (selection cleared)
  toggle()  -> pure grid update
  submit()  -> one atomic ledger.commit of the current selection, then:
     SUCCESS  -> summary returned, grid reloaded (new seats now reserved)
     CONFLICT -> conflict notice, grid reloaded, selection discarded
     ERROR    -> generic notice, grid refreshed but the selection kept so
                 the customer can retry

The session never retries a conflicting commit on its own: availability has
changed, so the customer must choose again.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from boxoffice.core.logging import get_logger
from boxoffice.domain import (
    CommitResult,
    EmptySelectionError,
    Seat,
    SeatGrid,
    SeatState,
    Show,
    StorageError,
    TicketHolder,
)
from boxoffice.services.reservation_ledger import ReservationLedger

logger = get_logger(__name__)

CONFLICT_MESSAGE = "One or more of your selected seats were just taken. Please choose again."
ERROR_MESSAGE = "We could not complete your booking. Please try again."


@dataclass(frozen=True)
class BookingSummary:
    ticket_code: str
    title: str
    show_time: str
    seat_names: list[str]
    unit_price: Decimal
    total: Decimal

    @property
    def seat_list(self) -> str:
        return ", ".join(self.seat_names)


@dataclass(frozen=True)
class BookingOutcome:
    result: CommitResult
    message: str
    summary: BookingSummary | None = None
    reserved: frozenset[Seat] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        return self.result is CommitResult.SUCCESS


class BookingSession:
    def __init__(self, holder: TicketHolder, ledger: ReservationLedger, show: Show) -> None:
        self.holder = holder
        self.ledger = ledger
        self.show = show
        self.grid = SeatGrid(show.rows, show.cols)

    async def load(self) -> frozenset[Seat]:
        """Seed the grid with current occupancy; clears the selection. Raises StorageError."""
        occupied = await self.ledger.status_for(self.show.id)
        self.grid.reset(occupied)
        return occupied

    def toggle(self, row: int, col: int) -> SeatState:
        return self.grid.toggle(row, col)

    def selected_seats(self) -> list[Seat]:
        return self.grid.selected_seats()

    def seat_names(self) -> list[str]:
        return [seat.name for seat in self.grid.selected_seats()]

    def total(self) -> Decimal:
        return self.grid.total(self.show.price)

    async def submit(self) -> BookingOutcome:
        seats = self.grid.selected_seats()
        if not seats:
            raise EmptySelectionError()

        summary = BookingSummary(
            ticket_code=self.holder.ticket_code,
            title=self.show.title,
            show_time=self.show.show_time,
            seat_names=[seat.name for seat in seats],
            unit_price=self.show.price,
            total=self.total(),
        )
        result = await self.ledger.commit(self.show.id, self.holder.id, seats)

        if result is CommitResult.SUCCESS:
            reserved = await self._resync(self.grid.reserved_seats() | frozenset(seats))
            return BookingOutcome(
                result=result,
                message=f"Booking confirmed for seats {summary.seat_list}",
                summary=summary,
                reserved=reserved,
            )

        if result is CommitResult.CONFLICT:
            logger.info(
                "booking_resync",
                show_id=self.show.id,
                ticket_code=self.holder.ticket_code,
                discarded=summary.seat_names,
            )
            reserved = await self._resync(self.grid.reserved_seats())
            return BookingOutcome(result=result, message=CONFLICT_MESSAGE, reserved=reserved)

        return BookingOutcome(result=result, message=ERROR_MESSAGE, reserved=await self._refresh_keeping_selection())

    async def _refresh_keeping_selection(self) -> frozenset[Seat]:
        try:
            occupied = await self.ledger.status_for(self.show.id)
        except StorageError as e:
            logger.warning("booking_refresh_failed", show_id=self.show.id, error=str(e))
            return self.grid.reserved_seats()
        self.grid.refresh(occupied)
        return occupied

    async def _resync(self, fallback: frozenset[Seat]) -> frozenset[Seat]:
        """Reload and clear the selection; if the reload fails, reset from `fallback`."""
        try:
            return await self.load()
        except StorageError as e:
            logger.warning("booking_refresh_failed", show_id=self.show.id, error=str(e))
            self.grid.reset(fallback)
            return fallback
