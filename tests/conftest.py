"""Shared fixtures: a throwaway SQLite database per test and a fake draw source."""

import asyncio
from datetime import date, datetime

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from lottery_optimizer.db.engine import build_session_factory, init_db
from lottery_optimizer.exceptions import DrawNotAvailableError
from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.lottery import DrawResult, PrizeTier
from lottery_optimizer.schemas.ticket import Ticket, TicketStatus
from lottery_optimizer.scraper.base import DrawSource
from lottery_optimizer.services.ticket_store import TicketStore


class FakeDrawSource(DrawSource):
    """In-memory draw source. Unknown contests are 'not drawn yet'."""

    def __init__(self):
        self.draws: dict[tuple[LotteryType, int], DrawResult] = {}
        self.failures: dict[tuple[LotteryType, int], Exception] = {}
        self.calls: list[tuple[LotteryType, int]] = []
        self.delay = 0.0  # seconds each lookup takes

    def add_draw(self, lottery_type: LotteryType, draw: DrawResult):
        self.draws[(lottery_type, draw.contest_number)] = draw

    def fail(self, lottery_type: LotteryType, contest_number: int, error: Exception):
        self.failures[(lottery_type, contest_number)] = error

    async def fetch_draw(self, lottery_type, contest_number):
        key = (LotteryType(lottery_type), contest_number)
        self.calls.append(key)
        if self.delay:
            await asyncio.sleep(self.delay)
        if key in self.failures:
            raise self.failures[key]
        if key not in self.draws:
            raise DrawNotAvailableError(key[0].value, contest_number)
        return self.draws[key]


def mega_sena_draw(contest=2700, numbers=(1, 2, 3, 4, 5, 6), sena=50_000_000.0,
                   quina=50_000.0, quadra=1_000.0) -> DrawResult:
    return DrawResult(
        contest_number=contest,
        draw_date=date(2024, 4, 9),
        numbers=list(numbers),
        prize_tiers=[
            PrizeTier(description="Sena", winners=1, prize=sena),
            PrizeTier(description="Quina", winners=50, prize=quina),
            PrizeTier(description="Quadra", winners=3000, prize=quadra),
        ],
    )


def lotofacil_draw(contest=3000, numbers=tuple(range(1, 16)), tiers=None) -> DrawResult:
    if tiers is None:
        tiers = [
            ("15 acertos", 1_500_000.0),
            ("14 acertos", 1_800.0),
            ("13 acertos", 30.0),
            ("12 acertos", 12.0),
            ("11 acertos", 6.0),
        ]
    return DrawResult(
        contest_number=contest,
        draw_date=date(2024, 1, 10),
        numbers=list(numbers),
        prize_tiers=[PrizeTier(description=d, winners=1, prize=p) for d, p in tiers],
    )


@pytest.fixture
def make_ticket():
    """Build detached Ticket snapshots for pure analytics tests."""
    counter = {"n": 0}

    def _make(
        *,
        cost=5.0,
        prize=0.0,
        status=TicketStatus.CHECKED,
        created_at=None,
        lottery_type=LotteryType.MEGA_SENA,
        numbers=(1, 2, 3, 4, 5, 6),
        contest_number=2700,
        expected_draw=date(2024, 4, 9),
    ) -> Ticket:
        counter["n"] += 1
        return Ticket(
            id=f"t{counter['n']}",
            lottery_type=lottery_type,
            numbers=list(numbers),
            expected_draw=expected_draw,
            contest_number=contest_number,
            status=status,
            cost=cost,
            prize=prize,
            created_at=created_at or datetime(2024, 4, 1, 12, 0, counter["n"]),
            checked_at=None,
        )

    return _make


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tickets.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return TicketStore(session_factory)


@pytest.fixture
def draw_source():
    return FakeDrawSource()


@pytest.fixture
def build_mega_sena_draw():
    return mega_sena_draw


@pytest.fixture
def build_lotofacil_draw():
    return lotofacil_draw
