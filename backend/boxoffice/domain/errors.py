"""Domain error codes for the box office."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SHOW_NOT_FOUND = "SHOW_NOT_FOUND"
    HOLDER_NOT_FOUND = "HOLDER_NOT_FOUND"
    INVALID_COORDINATE = "INVALID_COORDINATE"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    STORAGE_ERROR = "STORAGE_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ShowNotFoundError(DomainError):
    """Raised when a show lookup by id or title/time finds nothing."""

    def __init__(self, show_ref: str) -> None:
        super().__init__(
            code=ErrorCode.SHOW_NOT_FOUND,
            message=f"Show {show_ref} not found",
        )
        self.show_ref = show_ref


class HolderNotFoundError(DomainError):
    """Raised when a ticket holder id is unknown."""

    def __init__(self, holder_id: int) -> None:
        super().__init__(
            code=ErrorCode.HOLDER_NOT_FOUND,
            message=f"Ticket holder {holder_id} not found",
        )
        self.holder_id = holder_id


class InvalidCoordinateError(DomainError):
    """Raised for a seat reference outside the show's grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COORDINATE,
            message=f"Seat ({row}, {col}) is outside the {rows}x{cols} grid",
        )
        self.row = row
        self.col = col


class EmptySelectionError(DomainError):
    """Raised when a commit is requested with no seats selected."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_SELECTION,
            message="Please select at least one seat to proceed",
        )


class StorageError(DomainError):
    """Raised when the store fails for a reason other than a seat conflict."""

    def __init__(self, message: str = "The booking store is unavailable, please try again") -> None:
        super().__init__(code=ErrorCode.STORAGE_ERROR, message=message)


class TicketIssueError(StorageError):
    """Raised when no unique ticket code could be issued within the retry budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(message=f"Could not issue a queue ticket after {attempts} attempts")
        self.attempts = attempts
