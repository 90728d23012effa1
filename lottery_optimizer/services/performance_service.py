"""Performance service: ROI, win rate, streaks and trends over saved tickets.

Every call re-reads the store; nothing here is cached between calls. The
module-level functions are pure and work on any sequence of tickets.
"""

import math
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from loguru import logger

from lottery_optimizer.lottery.rules import LOTTERY_RULES, LotteryType, parse_lottery_type
from lottery_optimizer.schemas.performance import (
    DailyPerformance,
    LotteryMetrics,
    MonthlyTrend,
    NumberFrequency,
    PerformanceMetrics,
    PeriodMetrics,
)
from lottery_optimizer.schemas.ticket import Ticket, TicketFilter, TicketStatus
from lottery_optimizer.services.ticket_store import TicketStore

PERIOD_WINDOWS = {"last_30_days": 30, "last_90_days": 90, "last_365_days": 365}
FAVORITE_NUMBERS_COUNT = 10


def is_win(ticket: Ticket) -> bool:
    return ticket.status == TicketStatus.CHECKED and ticket.prize > 0


def _roi_percentage(investment: float, winnings: float) -> float:
    if investment <= 0:
        return 0.0
    return (winnings - investment) / investment * 100


def _totals(tickets: Sequence[Ticket]) -> tuple[float, float, int]:
    """(investment, winnings, wins) for a group of tickets."""
    investment = sum(t.cost for t in tickets)
    winnings = sum(t.prize for t in tickets if is_win(t))
    wins = sum(1 for t in tickets if is_win(t))
    return investment, winnings, wins


def calculate_general_metrics(metrics: PerformanceMetrics, tickets: Sequence[Ticket]) -> None:
    investment, winnings, wins = _totals(tickets)
    win_amounts = [t.prize for t in tickets if is_win(t)]

    metrics.total_games = len(tickets)
    metrics.total_investment = investment
    metrics.total_winnings = winnings
    metrics.roi = winnings - investment
    metrics.roi_percentage = _roi_percentage(investment, winnings)
    metrics.games_with_wins = wins
    metrics.win_rate = wins / len(tickets) if tickets else 0.0
    metrics.average_win_amount = sum(win_amounts) / len(win_amounts) if win_amounts else 0.0
    metrics.biggest_win = max(win_amounts, default=0.0)


def _streak_key(order: str):
    if order == "draw":
        return lambda t: (t.expected_draw, t.contest_number, t.created_at)
    return lambda t: t.created_at


def calculate_streaks(
    metrics: PerformanceMetrics,
    tickets: Iterable[Ticket],
    order: str = "created_at",
) -> None:
    """Win/loss streaks over checked tickets only.

    ``order`` is ``created_at`` (when the ticket was saved) or ``draw``
    (expected draw date, then contest number). Pending and errored tickets
    neither extend nor break a streak.
    """
    checked = sorted(
        (t for t in tickets if t.status == TicketStatus.CHECKED),
        key=_streak_key(order),
    )

    current_win = longest_win = 0
    current_loss = longest_loss = 0
    for ticket in checked:
        if ticket.prize > 0:
            current_win += 1
            current_loss = 0
            longest_win = max(longest_win, current_win)
        else:
            current_loss += 1
            current_win = 0
            longest_loss = max(longest_loss, current_loss)

    metrics.current_win_streak = current_win
    metrics.longest_win_streak = longest_win
    metrics.current_loss_streak = current_loss
    metrics.longest_loss_streak = longest_loss


def calculate_period_stats(tickets: Iterable[Ticket], since: datetime) -> PeriodMetrics:
    period = [t for t in tickets if t.created_at > since]
    if not period:
        return PeriodMetrics()

    investment, winnings, wins = _totals(period)
    return PeriodMetrics(
        games=len(period),
        investment=investment,
        winnings=winnings,
        roi=winnings - investment,
        roi_percentage=_roi_percentage(investment, winnings),
        win_rate=wins / len(period),
    )


def favorite_numbers(tickets: Iterable[Ticket], limit: int = FAVORITE_NUMBERS_COUNT) -> list[int]:
    """Most played numbers; ties go to the lower number."""
    counter = Counter()
    for ticket in tickets:
        counter.update(ticket.numbers)
    ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [num for num, _ in ranked[:limit]]


def calculate_lottery_stats(name: str, tickets: Sequence[Ticket]) -> LotteryMetrics:
    if not tickets:
        return LotteryMetrics(name=name)

    investment, winnings, wins = _totals(tickets)
    win_amounts = [t.prize for t in tickets if is_win(t)]

    return LotteryMetrics(
        name=name,
        games=len(tickets),
        investment=investment,
        winnings=winnings,
        roi=winnings - investment,
        roi_percentage=_roi_percentage(investment, winnings),
        win_rate=wins / len(tickets),
        average_win=sum(win_amounts) / len(win_amounts) if win_amounts else 0.0,
        favorite_numbers=favorite_numbers(tickets),
    )


def calculate_lottery_metrics(metrics: PerformanceMetrics, tickets: Sequence[Ticket]) -> None:
    by_type: dict[LotteryType, list[Ticket]] = defaultdict(list)
    for ticket in tickets:
        by_type[ticket.lottery_type].append(ticket)

    for lottery_type, rules in LOTTERY_RULES.items():
        metrics.by_lottery[lottery_type.value] = calculate_lottery_stats(
            rules.name, by_type.get(lottery_type, [])
        )


def calculate_performance_history(tickets: Iterable[Ticket]) -> list[DailyPerformance]:
    """One entry per calendar day with at least one ticket, oldest first."""
    daily: dict = defaultdict(list)
    for ticket in tickets:
        daily[ticket.created_at.date()].append(ticket)

    history = []
    for day in sorted(daily):
        investment, winnings, _ = _totals(daily[day])
        history.append(DailyPerformance(
            date=day,
            games=len(daily[day]),
            investment=investment,
            winnings=winnings,
            roi=winnings - investment,
            roi_percentage=_roi_percentage(investment, winnings),
        ))
    return history


def calculate_monthly_trends(tickets: Iterable[Ticket]) -> list[MonthlyTrend]:
    """One entry per calendar month, oldest first, with month-over-month growth."""
    monthly: dict = defaultdict(list)
    for ticket in tickets:
        monthly[(ticket.created_at.year, ticket.created_at.month)].append(ticket)

    trends = []
    for year, month in sorted(monthly):
        group = monthly[(year, month)]
        investment, winnings, _ = _totals(group)
        trends.append(MonthlyTrend(
            month=f"{year:04d}-{month:02d}",
            year=year,
            games=len(group),
            investment=investment,
            winnings=winnings,
            roi=winnings - investment,
            roi_percentage=_roi_percentage(investment, winnings),
        ))

    for prev, cur in zip(trends, trends[1:]):
        if prev.roi_percentage != 0:
            cur.growth = (cur.roi_percentage - prev.roi_percentage) / abs(prev.roi_percentage) * 100

    return trends


def build_metrics(
    tickets: Sequence[Ticket],
    now: datetime | None = None,
    streak_order: str = "created_at",
) -> PerformanceMetrics:
    now = now or datetime.now()
    metrics = PerformanceMetrics()

    calculate_general_metrics(metrics, tickets)
    calculate_streaks(metrics, tickets, order=streak_order)
    for field_name, days in PERIOD_WINDOWS.items():
        setattr(metrics, field_name, calculate_period_stats(tickets, now - timedelta(days=days)))
    calculate_lottery_metrics(metrics, tickets)
    metrics.performance_history = calculate_performance_history(tickets)
    metrics.monthly_trends = calculate_monthly_trends(tickets)

    return metrics


def number_frequencies(tickets: Iterable[Ticket]) -> list[NumberFrequency]:
    """Per-number play counts with hot/cold flags (mean +/- one std dev)."""
    stats: dict[int, NumberFrequency] = {}
    checked: Counter = Counter()
    won: Counter = Counter()

    for ticket in tickets:
        for num in ticket.numbers:
            entry = stats.get(num)
            if entry is None:
                entry = stats[num] = NumberFrequency(number=num, frequency=0)
            entry.frequency += 1
            if entry.last_seen is None or ticket.created_at > entry.last_seen:
                entry.last_seen = ticket.created_at
            if ticket.status == TicketStatus.CHECKED:
                checked[num] += 1
                if ticket.prize > 0:
                    won[num] += 1

    if not stats:
        return []

    freqs = [e.frequency for e in stats.values()]
    mean = sum(freqs) / len(freqs)
    std_dev = math.sqrt(sum((f - mean) ** 2 for f in freqs) / len(freqs))

    for num, entry in stats.items():
        entry.win_rate = won[num] / checked[num] if checked[num] else 0.0
        if entry.frequency > mean + std_dev:
            entry.is_hot = True
        elif entry.frequency < mean - std_dev:
            entry.is_cold = True

    return sorted(stats.values(), key=lambda e: (-e.frequency, e.number))


class PerformanceAggregator:
    """Read-only analytics over the ticket store."""

    def __init__(self, store: TicketStore, *, streak_order: str = "created_at"):
        self.store = store
        self.streak_order = streak_order

    async def compute_metrics(self, now: datetime | None = None) -> PerformanceMetrics:
        tickets = await self.store.list_tickets()
        logger.info("Computing performance metrics over {} tickets", len(tickets))

        metrics = build_metrics(tickets, now=now, streak_order=self.streak_order)

        logger.info(
            "ROI {:.2f}% | win rate {:.2f}%",
            metrics.roi_percentage, metrics.win_rate * 100,
        )
        return metrics

    async def number_frequency_analysis(self, lottery_type: str | LotteryType) -> list[NumberFrequency]:
        lottery_type = parse_lottery_type(lottery_type)
        tickets = await self.store.list_tickets(TicketFilter(lottery_type=lottery_type))
        frequencies = number_frequencies(tickets)
        logger.info("Number frequency for {}: {} numbers analysed", lottery_type.value, len(frequencies))
        return frequencies
