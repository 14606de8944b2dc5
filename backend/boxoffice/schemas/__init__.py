from boxoffice.schemas.show import ShowResponse, SeatRef, SeatMapResponse
from boxoffice.schemas.ticket import TicketResponse
from boxoffice.schemas.booking import BookingCreate, BookingResponse, BookingRejectedResponse

__all__ = [
    "ShowResponse", "SeatRef", "SeatMapResponse",
    "TicketResponse",
    "BookingCreate", "BookingResponse", "BookingRejectedResponse",
]
