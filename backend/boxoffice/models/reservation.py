"""
Reservation model binding one seat of a show to a holder.

Key design decisions:
- Unique constraint on (show_id, row_idx, col_idx) is the final arbiter for
  concurrent commits; an application pre-check cannot close the race
- Rows are append-only: there is no status column and no cancellation path
"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from boxoffice.db.base import Base, TimestampMixin


class Reservation(Base, TimestampMixin):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    show_id = Column(Integer, ForeignKey("shows.id"), nullable=False)
    holder_id = Column(Integer, ForeignKey("holders.id"), nullable=False, index=True)
    row_idx = Column(Integer, nullable=False)
    col_idx = Column(Integer, nullable=False)

    show = relationship("Show", back_populates="reservations")
    holder = relationship("Holder", back_populates="reservations")

    __table_args__ = (
        # Also serves lookups by show_id, so no separate index on it
        UniqueConstraint("show_id", "row_idx", "col_idx", name="uq_reservation_seat"),
        CheckConstraint("row_idx >= 0", name="check_reservation_row_non_negative"),
        CheckConstraint("col_idx >= 0", name="check_reservation_col_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Reservation(show={self.show_id}, seat=({self.row_idx},{self.col_idx}), holder={self.holder_id})>"
