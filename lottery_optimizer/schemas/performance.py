"""Pydantic schemas for performance analytics.

Money fields are in BRL. ``roi`` is always an absolute amount
(winnings - investment) and ``roi_percentage`` the same relative to the
investment, already multiplied by 100. ``win_rate`` is a fraction in [0, 1].
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class PeriodMetrics(BaseModel):
    games: int = 0
    investment: float = 0.0
    winnings: float = 0.0
    roi: float = 0.0
    roi_percentage: float = 0.0
    win_rate: float = 0.0


class LotteryMetrics(BaseModel):
    name: str
    games: int = 0
    investment: float = 0.0
    winnings: float = 0.0
    roi: float = 0.0
    roi_percentage: float = 0.0
    win_rate: float = 0.0
    average_win: float = 0.0
    favorite_numbers: list[int] = Field(default_factory=list)


class DailyPerformance(BaseModel):
    date: date
    games: int
    investment: float
    winnings: float
    roi: float
    roi_percentage: float


class MonthlyTrend(BaseModel):
    month: str  # YYYY-MM
    year: int
    games: int
    investment: float
    winnings: float
    roi: float
    roi_percentage: float
    growth: float = 0.0  # change of roi_percentage vs previous month, in %


class PerformanceMetrics(BaseModel):
    # General
    total_games: int = 0
    total_investment: float = 0.0
    total_winnings: float = 0.0
    roi: float = 0.0
    roi_percentage: float = 0.0

    # Hits
    games_with_wins: int = 0
    win_rate: float = 0.0
    average_win_amount: float = 0.0
    biggest_win: float = 0.0

    # Streaks
    current_win_streak: int = 0
    longest_win_streak: int = 0
    current_loss_streak: int = 0
    longest_loss_streak: int = 0

    # Trailing windows
    last_30_days: PeriodMetrics = Field(default_factory=PeriodMetrics)
    last_90_days: PeriodMetrics = Field(default_factory=PeriodMetrics)
    last_365_days: PeriodMetrics = Field(default_factory=PeriodMetrics)

    # Keyed by lottery type value ("megasena", "lotofacil")
    by_lottery: dict[str, LotteryMetrics] = Field(default_factory=dict)

    performance_history: list[DailyPerformance] = Field(default_factory=list)
    monthly_trends: list[MonthlyTrend] = Field(default_factory=list)


class NumberFrequency(BaseModel):
    number: int
    frequency: int
    win_rate: float = 0.0  # share of this number's checked tickets that won
    last_seen: datetime | None = None
    is_hot: bool = False
    is_cold: bool = False
