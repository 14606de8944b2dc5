"""
Ticket holder: one row per walk-up customer session.

The unique constraint on ticket_code is what makes concurrent issuance safe:
two sessions that compute the same next code cannot both insert it.
"""

from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from boxoffice.db.base import Base, TimestampMixin


class Holder(Base, TimestampMixin):
    __tablename__ = "holders"

    id = Column(Integer, primary_key=True, index=True)
    ticket_code = Column(String(32), nullable=False)

    reservations = relationship("Reservation", back_populates="holder")

    __table_args__ = (
        UniqueConstraint("ticket_code", name="uq_holders_ticket_code"),
    )

    def __repr__(self) -> str:
        return f"<Holder(id={self.id}, ticket_code={self.ticket_code})>"
