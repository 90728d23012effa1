"""
Tests for the ticket store (SQLite via aiosqlite).
"""

from datetime import date

import pytest

from lottery_optimizer.exceptions import TicketNotFoundError, TicketValidationError
from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.lottery import GameResult
from lottery_optimizer.schemas.ticket import TicketCreate, TicketFilter, TicketStatus
from lottery_optimizer.services.ticket_store import TicketStore


def _request(lottery_type=LotteryType.MEGA_SENA, numbers=(6, 5, 4, 3, 2, 1),
             contest=2700, expected=date(2024, 4, 9), cost=None) -> TicketCreate:
    return TicketCreate(
        lottery_type=lottery_type,
        numbers=list(numbers),
        expected_draw=expected,
        contest_number=contest,
        cost=cost,
    )


class TestCreate:
    """Ticket creation."""

    async def test_new_ticket_is_pending(self, store):
        ticket = await store.create(_request())

        assert ticket.status == TicketStatus.PENDING
        assert ticket.checked_at is None
        assert ticket.prize == 0.0
        assert ticket.result is None
        assert ticket.numbers == [1, 2, 3, 4, 5, 6]

    async def test_default_cost_is_official_price(self, store):
        ticket = await store.create(_request(numbers=range(1, 8)))
        assert ticket.cost == 35.0

    async def test_explicit_cost_kept(self, store):
        ticket = await store.create(_request(cost=12.5))
        assert ticket.cost == 12.5

    async def test_ids_are_unique(self, store):
        a = await store.create(_request())
        b = await store.create(_request())
        assert a.id != b.id

    async def test_invalid_numbers_rejected(self, store):
        with pytest.raises(TicketValidationError):
            await store.create(_request(numbers=[1, 1, 2, 3, 4, 5]))

        assert (await store.stats()).total == 0

    async def test_accepts_alias_lottery_type(self, store):
        ticket = await store.create(_request(lottery_type="Lotofácil", numbers=range(1, 16)))
        assert ticket.lottery_type == LotteryType.LOTOFACIL


class TestGet:
    """Lookup by id."""

    async def test_round_trip(self, store):
        created = await store.create(_request())
        fetched = await store.get(created.id)
        assert fetched == created

    async def test_unknown_id(self, store):
        with pytest.raises(TicketNotFoundError):
            await store.get("missing")

    async def test_survives_new_store_instance(self, store, session_factory):
        created = await store.create(_request())
        assert await TicketStore(session_factory).get(created.id) == created


class TestList:
    """Filtered listing."""

    async def test_empty_filter_returns_all_newest_first(self, store):
        first = await store.create(_request())
        second = await store.create(_request(contest=2701))
        third = await store.create(_request(contest=2702))

        tickets = await store.list_tickets()
        assert [t.id for t in tickets] == [third.id, second.id, first.id]

    async def test_filter_by_lottery_type(self, store):
        await store.create(_request())
        loto = await store.create(_request(LotteryType.LOTOFACIL, numbers=range(1, 16)))

        tickets = await store.list_tickets(TicketFilter(lottery_type=LotteryType.LOTOFACIL))
        assert [t.id for t in tickets] == [loto.id]

    async def test_filter_by_status(self, store):
        a = await store.create(_request())
        b = await store.create(_request())
        await store.update_status(a.id, TicketStatus.ERROR)

        assert [t.id for t in await store.list_pending()] == [b.id]
        errored = await store.list_tickets(TicketFilter(status=TicketStatus.ERROR))
        assert [t.id for t in errored] == [a.id]

    async def test_filter_by_expected_draw_range(self, store):
        await store.create(_request(expected=date(2024, 1, 1)))
        mid = await store.create(_request(expected=date(2024, 2, 15)))
        await store.create(_request(expected=date(2024, 3, 30)))

        tickets = await store.list_tickets(
            TicketFilter(from_date=date(2024, 2, 1), to_date=date(2024, 2, 28))
        )
        assert [t.id for t in tickets] == [mid.id]

    async def test_list_by_status_several(self, store):
        a = await store.create(_request())
        b = await store.create(_request())
        await store.create(_request())
        await store.update_status(a.id, TicketStatus.ERROR)
        await store.update_status(b.id, TicketStatus.CHECKED)

        ids = {t.id for t in await store.list_by_status(TicketStatus.ERROR, TicketStatus.CHECKED)}
        assert ids == {a.id, b.id}


class TestUpdateStatus:
    """Status transitions."""

    async def test_checked_with_result_writes_everything(self, store):
        ticket = await store.create(_request())
        result = GameResult(
            contest_number=2700,
            draw_date=date(2024, 4, 9),
            drawn_numbers=[1, 2, 3, 4, 50, 60],
            matches=[1, 2, 3, 4],
            hit_count=4,
            prize="Quadra",
            prize_amount=1000.0,
            is_winner=True,
        )

        await store.update_status(ticket.id, TicketStatus.CHECKED, result)
        updated = await store.get(ticket.id)

        assert updated.status == TicketStatus.CHECKED
        assert updated.checked_at is not None
        assert updated.prize == 1000.0
        assert updated.result == result

    async def test_losing_result_has_zero_prize(self, store):
        ticket = await store.create(_request())
        result = GameResult(
            contest_number=2700, drawn_numbers=[1, 2, 3, 7, 8, 9], matches=[1, 2, 3],
            hit_count=3, prize="3 acertos",
        )
        await store.update_status(ticket.id, TicketStatus.CHECKED, result)

        updated = await store.get(ticket.id)
        assert updated.prize == 0.0
        assert updated.result.is_winner is False

    async def test_error_stamps_checked_at(self, store):
        ticket = await store.create(_request())
        await store.update_status(ticket.id, TicketStatus.ERROR)

        updated = await store.get(ticket.id)
        assert updated.status == TicketStatus.ERROR
        assert updated.checked_at is not None
        assert updated.result is None

    async def test_unknown_id(self, store):
        with pytest.raises(TicketNotFoundError):
            await store.update_status("missing", TicketStatus.CHECKED)


class TestDeleteAndStats:
    """Deletion and counts."""

    async def test_delete(self, store):
        ticket = await store.create(_request())
        await store.delete(ticket.id)

        with pytest.raises(TicketNotFoundError):
            await store.get(ticket.id)

    async def test_delete_unknown(self, store):
        with pytest.raises(TicketNotFoundError):
            await store.delete("missing")

    async def test_stats(self, store):
        a = await store.create(_request())
        await store.create(_request())
        await store.create(_request(LotteryType.LOTOFACIL, numbers=range(1, 16)))
        await store.update_status(a.id, TicketStatus.CHECKED)

        stats = await store.stats()
        assert stats.total == 3
        assert stats.by_lottery_and_status == {
            "megasena": {"pending": 1, "checked": 1},
            "lotofacil": {"pending": 1},
        }

    async def test_stats_empty(self, store):
        stats = await store.stats()
        assert stats.total == 0
        assert stats.by_lottery_and_status == {}
