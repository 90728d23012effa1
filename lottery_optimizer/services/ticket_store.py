"""Ticket store: durable CRUD for saved tickets.

Every public method opens its own session and commits before returning, so
callers only ever see fully written tickets. Returned values are pydantic
snapshots, detached from the database.
"""

import uuid
from datetime import datetime

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lottery_optimizer.db.crud import saved_tickets as crud
from lottery_optimizer.db.models.saved_ticket import SavedTicket
from lottery_optimizer.exceptions import TicketNotFoundError
from lottery_optimizer.lottery.rules import calculate_game_cost, validate_numbers
from lottery_optimizer.schemas.lottery import GameResult
from lottery_optimizer.schemas.ticket import (
    Ticket,
    TicketCreate,
    TicketFilter,
    TicketStats,
    TicketStatus,
)


def _to_ticket(row: SavedTicket) -> Ticket:
    result = None
    if row.status == TicketStatus.CHECKED.value and row.hit_count is not None:
        result = GameResult(
            contest_number=row.draw_contest if row.draw_contest is not None else row.contest_number,
            draw_date=row.draw_date,
            drawn_numbers=row.drawn_numbers or [],
            matches=row.matches or [],
            hit_count=row.hit_count,
            prize=row.prize_description or "",
            prize_amount=row.prize_amount or 0.0,
            is_winner=bool(row.is_winner),
        )

    return Ticket(
        id=row.id,
        lottery_type=row.lottery_type,
        numbers=list(row.numbers),
        expected_draw=row.expected_draw,
        contest_number=row.contest_number,
        status=row.status,
        cost=row.cost,
        prize=row.prize,
        created_at=row.created_at,
        checked_at=row.checked_at,
        result=result,
    )


def _result_values(result: GameResult) -> dict:
    return {
        "prize": result.prize_amount if result.is_winner else 0.0,
        "hit_count": result.hit_count,
        "matches": list(result.matches),
        "drawn_numbers": list(result.drawn_numbers),
        "prize_description": result.prize,
        "prize_amount": result.prize_amount,
        "is_winner": result.is_winner,
        "draw_contest": result.contest_number,
        "draw_date": result.draw_date,
    }


class TicketStore:
    """Persistence for saved tickets, bound to an injected session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, request: TicketCreate) -> Ticket:
        """Validate and persist a new ticket in ``pending`` status.

        Raises:
            TicketValidationError: numbers break the lottery's rules.
        """
        numbers = validate_numbers(request.lottery_type, request.numbers)
        cost = request.cost
        if cost is None:
            cost = calculate_game_cost(request.lottery_type, len(numbers))

        values = {
            "id": str(uuid.uuid4()),
            "lottery_type": request.lottery_type.value,
            "numbers": numbers,
            "expected_draw": request.expected_draw,
            "contest_number": request.contest_number,
            "status": TicketStatus.PENDING.value,
            "cost": cost,
            "prize": 0.0,
            "created_at": datetime.now(),
            "checked_at": None,
        }

        async with self._session_factory() as session:
            async with session.begin():
                row = await crud.create(session, values)
            ticket = _to_ticket(row)

        logger.info(
            "Saved {} ticket {} for contest {}: {}",
            ticket.lottery_type.value, ticket.id, ticket.contest_number, ticket.numbers,
        )
        return ticket

    async def get(self, ticket_id: str) -> Ticket:
        async with self._session_factory() as session:
            row = await crud.get_by_id(session, ticket_id)
            if row is None:
                raise TicketNotFoundError(ticket_id)
            return _to_ticket(row)

    async def list_tickets(self, ticket_filter: TicketFilter | None = None) -> list[Ticket]:
        """Tickets matching the filter, newest first."""
        ticket_filter = ticket_filter or TicketFilter()
        async with self._session_factory() as session:
            rows = await crud.get_tickets(
                session,
                lottery_type=ticket_filter.lottery_type.value if ticket_filter.lottery_type else None,
                statuses=[ticket_filter.status.value] if ticket_filter.status else None,
                date_from=ticket_filter.from_date,
                date_to=ticket_filter.to_date,
            )
            return [_to_ticket(r) for r in rows]

    async def list_pending(self) -> list[Ticket]:
        return await self.list_tickets(TicketFilter(status=TicketStatus.PENDING))

    async def list_by_status(self, *statuses: TicketStatus) -> list[Ticket]:
        async with self._session_factory() as session:
            rows = await crud.get_tickets(session, statuses=[s.value for s in statuses])
            return [_to_ticket(r) for r in rows]

    async def update_status(
        self,
        ticket_id: str,
        status: TicketStatus,
        result: GameResult | None = None,
    ) -> None:
        """Move a ticket to ``status`` and stamp ``checked_at``.

        When a result is given, the prize and the match details are written
        in the same statement, so readers never see a checked ticket without
        its outcome.

        Raises:
            TicketNotFoundError: no ticket with that id.
        """
        values = {"status": status.value, "checked_at": datetime.now()}
        if result is not None:
            values.update(_result_values(result))

        async with self._session_factory() as session:
            async with session.begin():
                updated = await crud.update_fields(session, ticket_id, values)
        if not updated:
            raise TicketNotFoundError(ticket_id)

        logger.debug("Ticket {} -> {}", ticket_id, status.value)

    async def delete(self, ticket_id: str) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                deleted = await crud.delete_by_id(session, ticket_id)
        if not deleted:
            raise TicketNotFoundError(ticket_id)
        logger.info("Deleted ticket {}", ticket_id)

    async def stats(self) -> TicketStats:
        """Ticket counts per lottery and status, plus the grand total."""
        async with self._session_factory() as session:
            rows = await crud.count_by_lottery_and_status(session)
            total = await crud.count_all(session)

        by_lottery: dict[str, dict[str, int]] = {}
        for lottery_type, status, count in rows:
            by_lottery.setdefault(lottery_type, {})[status] = count

        return TicketStats(by_lottery_and_status=by_lottery, total=total)
