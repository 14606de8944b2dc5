"""
Show model: a movie title at a time slot with its own seat grid and price.

Rows are capped at 26 so every row has a single-letter name (A-Z).
"""

from sqlalchemy import Column, Integer, String, Numeric, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from boxoffice.db.base import Base


class Show(Base):
    __tablename__ = "shows"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    show_time = Column(String(32), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    layout_rows = Column(Integer, nullable=False)
    layout_cols = Column(Integer, nullable=False)

    reservations = relationship("Reservation", back_populates="show")

    __table_args__ = (
        UniqueConstraint("title", "show_time", name="uq_show_title_time"),
        CheckConstraint("layout_rows >= 1 AND layout_rows <= 26", name="check_show_rows_range"),
        CheckConstraint("layout_cols >= 1", name="check_show_cols_positive"),
        CheckConstraint("price >= 0", name="check_show_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Show(id={self.id}, title={self.title}, time={self.show_time}, grid={self.layout_rows}x{self.layout_cols})>"
