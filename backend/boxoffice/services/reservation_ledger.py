"""
Reservation ledger: the transactional store of committed seat assignments.

CONCURRENCY STRATEGY: Unique Constraint as Final Arbiter
========================================================

Problem:
  Two customers look at the same seat map, both see C5 free, both submit.
  Any "check it is free, then insert" done in the application races.

Solution:
  reservations carries UNIQUE(show_id, row_idx, col_idx). A commit inserts
  every requested seat inside one scoped transaction:

  1. BEGIN (BEGIN IMMEDIATE on SQLite, see boxoffice.db.session)
  2. Verify the show and holder exist and every seat is inside the grid
  3. INSERT one row per seat
  4. COMMIT

  If any insert collides with an existing row, including one committed by
  another session a moment ago, the database raises an integrity error, the
  whole transaction is rolled back and the caller gets CONFLICT. Any other
  storage failure is rolled back the same way and reported as ERROR. No
  partial booking is ever visible, and SUCCESS is only returned after COMMIT.

  Rows are inserted in seat order, not selection order, so two overlapping
  requests always contend for their shared seats in the same sequence and
  the loser sees a unique violation rather than a lock deadlock.

  status_for() reads are allowed to be stale; the constraint re-validates
  at insert time.
"""

import time
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.core.logging import get_logger
from boxoffice.core.metrics import booking_latency, record_booking_attempt
from boxoffice.db.session import begin_write
from boxoffice.domain import (
    CommitResult,
    EmptySelectionError,
    HolderNotFoundError,
    Seat,
    ShowNotFoundError,
    StorageError,
)
from boxoffice.models.holder import Holder
from boxoffice.models.reservation import Reservation
from boxoffice.models.show import Show as ShowRow
from boxoffice.services.catalog_service import to_show

logger = get_logger(__name__)


class ReservationLedger:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def status_for(self, show_id: int) -> frozenset[Seat]:
        """Seats currently reserved for a show. Raises StorageError if the store fails."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Reservation.row_idx, Reservation.col_idx).where(Reservation.show_id == show_id)
                )
                rows = result.all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("seat_status_failed", show_id=show_id, error=str(e))
            raise StorageError() from e
        return frozenset(Seat(row, col) for row, col in rows)

    async def commit(
        self,
        show_id: int,
        holder_id: int,
        seats: Iterable[Seat | tuple[int, int]],
    ) -> CommitResult:
        """
        Reserve all `seats` for `holder_id` atomically.

        Raises EmptySelectionError, ShowNotFoundError, HolderNotFoundError or
        InvalidCoordinateError (all rolled back, nothing written). Returns
        CONFLICT when any seat is already taken and ERROR on other storage
        failures.
        """
        # Duplicates in one request collapse, first occurrence wins the position
        requested = list(dict.fromkeys(seat if isinstance(seat, Seat) else Seat(*seat) for seat in seats))
        if not requested:
            raise EmptySelectionError()

        seat_names = [seat.name for seat in requested]
        start_time = time.perf_counter()
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await begin_write(session)
                    await self._validate(session, show_id, holder_id, requested)
                    session.add_all(
                        Reservation(
                            show_id=show_id,
                            holder_id=holder_id,
                            row_idx=seat.row,
                            col_idx=seat.col,
                        )
                        for seat in sorted(requested)
                    )
                    await session.flush()
        except IntegrityError:
            logger.warning(
                "booking_conflict",
                show_id=show_id,
                holder_id=holder_id,
                seats=seat_names,
            )
            record_booking_attempt(CommitResult.CONFLICT.value)
            return CommitResult.CONFLICT
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "booking_storage_error",
                show_id=show_id,
                holder_id=holder_id,
                seats=seat_names,
                error=str(e),
            )
            record_booking_attempt(CommitResult.ERROR.value)
            return CommitResult.ERROR
        finally:
            booking_latency.observe(time.perf_counter() - start_time)

        logger.info(
            "booking_committed",
            show_id=show_id,
            holder_id=holder_id,
            seats=seat_names,
        )
        record_booking_attempt(CommitResult.SUCCESS.value, seat_count=len(requested))
        return CommitResult.SUCCESS

    async def _validate(
        self,
        session: AsyncSession,
        show_id: int,
        holder_id: int,
        seats: list[Seat],
    ) -> None:
        show_row = await session.get(ShowRow, show_id)
        if show_row is None:
            raise ShowNotFoundError(str(show_id))
        if await session.get(Holder, holder_id) is None:
            raise HolderNotFoundError(holder_id)

        show = to_show(show_row)
        for seat in seats:
            show.check_seat(seat.row, seat.col)
