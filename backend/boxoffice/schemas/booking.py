"""
Pydantic schemas for seat booking request/response validation.
"""

from decimal import Decimal
from pydantic import BaseModel, Field

from boxoffice.schemas.show import SeatRef


class BookingCreate(BaseModel):
    holder_id: int
    seats: list[SeatRef] = Field(default_factory=list)


class BookingResponse(BaseModel):
    status: str
    message: str
    ticket_code: str
    show_id: int
    title: str
    show_time: str
    seats: list[str]
    unit_price: Decimal
    total: Decimal


class BookingRejectedResponse(BaseModel):
    status: str
    message: str
    reserved: list[SeatRef]
