"""
Queue ticket endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.db.session import get_db, get_session_factory
from boxoffice.schemas.ticket import TicketResponse
from boxoffice.services.ticket_service import issue_ticket, get_holder

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.post("/", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def issue_ticket_endpoint(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Claim the next queue ticket. Start of every customer session."""
    holder = await issue_ticket(session_factory)
    return TicketResponse(holder_id=holder.id, ticket_code=holder.ticket_code)


@router.get("/{holder_id}", response_model=TicketResponse)
async def get_ticket_endpoint(holder_id: int, db: AsyncSession = Depends(get_db)):
    holder = await get_holder(db, holder_id)
    return TicketResponse(holder_id=holder.id, ticket_code=holder.ticket_code)
