"""Initial schema: holders, shows, reservations with seat uniqueness.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "holders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ticket_code", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("ticket_code", name="uq_holders_ticket_code"),
    )
    op.create_index("ix_holders_id", "holders", ["id"])

    op.create_table(
        "shows",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("show_time", sa.String(32), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("layout_rows", sa.Integer(), nullable=False),
        sa.Column("layout_cols", sa.Integer(), nullable=False),
        sa.UniqueConstraint("title", "show_time", name="uq_show_title_time"),
        sa.CheckConstraint("layout_rows >= 1 AND layout_rows <= 26", name="check_show_rows_range"),
        sa.CheckConstraint("layout_cols >= 1", name="check_show_cols_positive"),
        sa.CheckConstraint("price >= 0", name="check_show_price_non_negative"),
    )
    op.create_index("ix_shows_id", "shows", ["id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("show_id", sa.Integer(), sa.ForeignKey("shows.id"), nullable=False),
        sa.Column("holder_id", sa.Integer(), sa.ForeignKey("holders.id"), nullable=False),
        sa.Column("row_idx", sa.Integer(), nullable=False),
        sa.Column("col_idx", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        # SEAT UNIQUENESS: the only thing standing between two customers and the
        # same seat. Commits insert blindly and rely on this to reject the loser.
        # Its leading column also serves seat-map lookups by show_id.
        sa.UniqueConstraint("show_id", "row_idx", "col_idx", name="uq_reservation_seat"),
        sa.CheckConstraint("row_idx >= 0", name="check_reservation_row_non_negative"),
        sa.CheckConstraint("col_idx >= 0", name="check_reservation_col_non_negative"),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index("ix_reservations_holder_id", "reservations", ["holder_id"])


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_table("shows")
    op.drop_table("holders")
