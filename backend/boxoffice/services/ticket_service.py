"""
Queue ticket sequencer.

SEQUENCING STRATEGY: Durable Maximum with Retry
===============================================

The next ticket code is derived from the highest code already stored, never
from an in-memory counter, so numbering survives restarts and is shared by
every kiosk process pointed at the same database.

Two sessions starting at the same moment can both read max=N and both try to
insert <prefix>N+1. The unique constraint on holders.ticket_code rejects the
second insert; that session rolls back, recomputes the maximum and tries
again, up to TICKET_ISSUE_MAX_ATTEMPTS times.
"""

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boxoffice.core.config import get_settings, is_valid_prefix
from boxoffice.core.logging import get_logger
from boxoffice.core.metrics import record_ticket_issued
from boxoffice.db.session import begin_write
from boxoffice.domain import HolderNotFoundError, StorageError, TicketHolder, TicketIssueError
from boxoffice.models.holder import Holder

logger = get_logger(__name__)


async def next_ticket_code(session: AsyncSession, prefix: str) -> str:
    """<prefix><max suffix + 1>, with a maximum of 0 when nothing was issued yet."""
    suffix = func.substr(Holder.ticket_code, len(prefix) + 1)
    # only codes of exactly this prefix followed by a number; "AB7" is not an "A" code
    first_suffix_char = func.substr(Holder.ticket_code, len(prefix) + 1, 1)
    result = await session.execute(
        select(func.max(cast(suffix, Integer))).where(
            Holder.ticket_code.startswith(prefix, autoescape=True),
            first_suffix_char.between("0", "9"),
        )
    )
    current = result.scalar() or 0
    return f"{prefix}{current + 1}"


async def issue_ticket(
    session_factory: async_sessionmaker[AsyncSession],
    prefix: str | None = None,
) -> TicketHolder:
    """Persist a new holder with the next ticket code and return it."""
    settings = get_settings()
    prefix = prefix or settings.TICKET_PREFIX
    if not is_valid_prefix(prefix):
        raise ValueError(f"Ticket prefix must be letters only, got {prefix!r}")
    max_attempts = settings.TICKET_ISSUE_MAX_ATTEMPTS

    for attempt in range(1, max_attempts + 1):
        try:
            async with session_factory() as session:
                async with session.begin():
                    await begin_write(session)
                    code = await next_ticket_code(session, prefix)
                    holder = Holder(ticket_code=code)
                    session.add(holder)
                    await session.flush()
                    holder_id = holder.id
        except IntegrityError:
            logger.info("ticket_retry", attempt=attempt, reason="duplicate_code")
            continue
        except (SQLAlchemyError, OSError) as e:
            logger.error("ticket_issue_failed", attempt=attempt, error=str(e))
            raise StorageError() from e

        record_ticket_issued(retries=attempt - 1)
        logger.info("ticket_issued", holder_id=holder_id, ticket_code=code, attempt=attempt)
        return TicketHolder(id=holder_id, ticket_code=code)

    logger.error("ticket_issue_exhausted", attempts=max_attempts)
    raise TicketIssueError(max_attempts)


async def get_holder(db: AsyncSession, holder_id: int) -> TicketHolder:
    try:
        holder = await db.get(Holder, holder_id)
    except (SQLAlchemyError, OSError) as e:
        logger.error("holder_read_failed", holder_id=holder_id, error=str(e))
        raise StorageError() from e
    if holder is None:
        raise HolderNotFoundError(holder_id)
    return TicketHolder(id=holder.id, ticket_code=holder.ticket_code)
