"""
Pydantic schemas for queue tickets.
"""

from pydantic import BaseModel


class TicketResponse(BaseModel):
    holder_id: int
    ticket_code: str
