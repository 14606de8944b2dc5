"""
Pydantic schemas for the show catalog and seat map.
"""

from decimal import Decimal
from pydantic import BaseModel, Field

from boxoffice.domain import Seat, Show


class ShowResponse(BaseModel):
    id: int
    title: str
    show_time: str
    price: Decimal
    rows: int
    cols: int

    model_config = {"from_attributes": True}


class SeatRef(BaseModel):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    name: str | None = None

    @classmethod
    def from_seat(cls, seat: Seat) -> "SeatRef":
        return cls(row=seat.row, col=seat.col, name=seat.name)


class SeatMapResponse(BaseModel):
    show_id: int
    rows: int
    cols: int
    reserved: list[SeatRef]
    available_count: int

    @classmethod
    def build(cls, show: Show, reserved: frozenset[Seat]) -> "SeatMapResponse":
        return cls(
            show_id=show.id,
            rows=show.rows,
            cols=show.cols,
            reserved=[SeatRef.from_seat(seat) for seat in sorted(reserved)],
            available_count=show.rows * show.cols - len(reserved),
        )
