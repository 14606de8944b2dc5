from boxoffice.domain.errors import (
    DomainError,
    EmptySelectionError,
    ErrorCode,
    HolderNotFoundError,
    InvalidCoordinateError,
    ShowNotFoundError,
    StorageError,
    TicketIssueError,
)
from boxoffice.domain.models import CommitResult, Seat, SeatState, Show, TicketHolder, seat_name, show_key
from boxoffice.domain.seat_grid import SeatGrid

__all__ = [
    "CommitResult",
    "DomainError",
    "EmptySelectionError",
    "ErrorCode",
    "HolderNotFoundError",
    "InvalidCoordinateError",
    "Seat",
    "SeatGrid",
    "SeatState",
    "Show",
    "ShowNotFoundError",
    "StorageError",
    "TicketHolder",
    "TicketIssueError",
    "seat_name",
    "show_key",
]
