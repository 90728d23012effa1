"""CRUD operations for saved tickets."""

from collections.abc import Iterable
from datetime import date

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lottery_optimizer.db.models.saved_ticket import SavedTicket


async def create(session: AsyncSession, ticket: dict) -> SavedTicket:
    obj = SavedTicket(**ticket)
    session.add(obj)
    await session.flush()
    return obj


async def get_by_id(session: AsyncSession, ticket_id: str) -> SavedTicket | None:
    result = await session.execute(
        select(SavedTicket).where(SavedTicket.id == ticket_id)
    )
    return result.scalar_one_or_none()


async def get_tickets(
    session: AsyncSession,
    *,
    lottery_type: str | None = None,
    statuses: Iterable[str] | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[SavedTicket]:
    query = select(SavedTicket)

    if lottery_type:
        query = query.where(SavedTicket.lottery_type == lottery_type)
    if statuses is not None:
        query = query.where(SavedTicket.status.in_(list(statuses)))
    if date_from:
        query = query.where(SavedTicket.expected_draw >= date_from)
    if date_to:
        query = query.where(SavedTicket.expected_draw <= date_to)

    query = query.order_by(desc(SavedTicket.created_at), SavedTicket.id)

    result = await session.execute(query)
    return list(result.scalars().all())


async def update_fields(session: AsyncSession, ticket_id: str, values: dict) -> bool:
    """Update a ticket in a single statement. Returns False if the id is unknown."""
    result = await session.execute(
        update(SavedTicket)
        .where(SavedTicket.id == ticket_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def delete_by_id(session: AsyncSession, ticket_id: str) -> bool:
    result = await session.execute(
        delete(SavedTicket).where(SavedTicket.id == ticket_id)
    )
    return result.rowcount > 0


async def count_by_lottery_and_status(session: AsyncSession) -> list[tuple[str, str, int]]:
    result = await session.execute(
        select(SavedTicket.lottery_type, SavedTicket.status, func.count(SavedTicket.id))
        .group_by(SavedTicket.lottery_type, SavedTicket.status)
    )
    return [(row[0], row[1], row[2]) for row in result.all()]


async def count_all(session: AsyncSession) -> int:
    return (await session.execute(select(func.count(SavedTicket.id)))).scalar() or 0
