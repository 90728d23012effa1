"""Pydantic schemas for official draws and per-ticket outcomes."""

from datetime import date

from pydantic import BaseModel, Field


class PrizeTier(BaseModel):
    """One row of a draw's prize table (``listaRateioPremio``)."""

    description: str
    winners: int = 0
    prize: float = 0.0


class DrawResult(BaseModel):
    """An official draw as reported by the data source."""

    contest_number: int
    draw_date: date | None = None
    numbers: list[int]  # in draw order
    prize_tiers: list[PrizeTier] = Field(default_factory=list)
    accumulated: bool = False
    next_contest_number: int | None = None
    next_draw_date: date | None = None


class GameResult(BaseModel):
    """Outcome of matching one ticket against one draw. Never persisted as-is."""

    contest_number: int
    draw_date: date | None = None
    drawn_numbers: list[int]
    matches: list[int]
    hit_count: int
    prize: str  # tier label such as "Quina", or "3 acertos" below the prize line
    prize_amount: float = 0.0
    is_winner: bool = False
