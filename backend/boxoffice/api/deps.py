"""
Shared FastAPI dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.db.session import get_session_factory
from boxoffice.services.reservation_ledger import ReservationLedger


def get_ledger(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ReservationLedger:
    return ReservationLedger(session_factory)
