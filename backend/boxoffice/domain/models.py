"""Domain value types shared by the grid, the ledger and the booking session."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from boxoffice.domain.errors import InvalidCoordinateError

MAX_ROWS = 26


def seat_name(row: int, col: int) -> str:
    """Row letter plus 1-based column: (2, 4) -> "C5"."""
    return f"{chr(ord('A') + row)}{col + 1}"


@dataclass(frozen=True, order=True)
class Seat:
    row: int
    col: int

    @property
    def name(self) -> str:
        return seat_name(self.row, self.col)


class SeatState(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SELECTED = "selected"


class CommitResult(str, Enum):
    """Outcome of an atomic multi-seat commit; values double as metric labels."""

    SUCCESS = "success"
    CONFLICT = "conflict"
    ERROR = "error"


@dataclass(frozen=True)
class Show:
    id: int
    title: str
    show_time: str
    price: Decimal
    rows: int
    cols: int

    def __post_init__(self) -> None:
        if not 1 <= self.rows <= MAX_ROWS:
            raise ValueError(f"Show rows must be between 1 and {MAX_ROWS}")
        if self.cols < 1:
            raise ValueError("Show cols must be at least 1")
        if self.price < 0:
            raise ValueError("Show price cannot be negative")

    @property
    def key(self) -> str:
        return show_key(self.title, self.show_time)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_seat(self, row: int, col: int) -> None:
        if not self.contains(row, col):
            raise InvalidCoordinateError(row, col, self.rows, self.cols)


@dataclass(frozen=True)
class TicketHolder:
    id: int
    ticket_code: str


def show_key(title: str, show_time: str) -> str:
    """Composite catalog key, e.g. "Nova @ 3:00 PM"."""
    return f"{title} @ {show_time}"
