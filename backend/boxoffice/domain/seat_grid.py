"""
In-memory seat matrix for one show plus the session's selection set.

Pure state: no I/O. Callers seed it from the reservation ledger and re-render
from whatever it returns.
"""

from decimal import Decimal
from typing import Iterable

from boxoffice.domain.errors import InvalidCoordinateError
from boxoffice.domain.models import Seat, SeatState


class SeatGrid:
    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError("Seat grid needs at least one row and one column")
        self.rows = rows
        self.cols = cols
        self._reserved: set[Seat] = set()
        # dict keeps insertion order, used as an ordered set
        self._selected: dict[Seat, None] = {}

    def reset(self, occupied: Iterable[Seat | tuple[int, int]]) -> None:
        """Mark `occupied` as reserved, everything else available, and drop the selection."""
        self._selected.clear()
        self._reserved = self._in_grid(occupied)

    def refresh(self, occupied: Iterable[Seat | tuple[int, int]]) -> None:
        """Like reset, but keep selected seats that are still available."""
        self._reserved = self._in_grid(occupied)
        self._selected = {seat: None for seat in self._selected if seat not in self._reserved}

    def toggle(self, row: int, col: int) -> SeatState:
        self._check(row, col)
        seat = Seat(row, col)
        if seat in self._reserved:
            return SeatState.RESERVED
        if seat in self._selected:
            del self._selected[seat]
            return SeatState.AVAILABLE
        self._selected[seat] = None
        return SeatState.SELECTED

    def state(self, row: int, col: int) -> SeatState:
        self._check(row, col)
        seat = Seat(row, col)
        if seat in self._reserved:
            return SeatState.RESERVED
        if seat in self._selected:
            return SeatState.SELECTED
        return SeatState.AVAILABLE

    def selected_seats(self) -> list[Seat]:
        return list(self._selected)

    def reserved_seats(self) -> frozenset[Seat]:
        return frozenset(self._reserved)

    @property
    def selected_count(self) -> int:
        return len(self._selected)

    def total(self, unit_price: Decimal) -> Decimal:
        return self.selected_count * unit_price

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise InvalidCoordinateError(row, col, self.rows, self.cols)

    def _in_grid(self, occupied: Iterable[Seat | tuple[int, int]]) -> set[Seat]:
        seats = {seat if isinstance(seat, Seat) else Seat(*seat) for seat in occupied}
        return {seat for seat in seats if 0 <= seat.row < self.rows and 0 <= seat.col < self.cols}
