"""Pydantic schemas for saved tickets."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.lottery import GameResult


class TicketStatus(str, Enum):
    PENDING = "pending"
    CHECKED = "checked"
    ERROR = "error"


def _coerce_lottery_type(value):
    if isinstance(value, str):
        try:
            return LotteryType(value)
        except ValueError:
            return value
    return value


class TicketCreate(BaseModel):
    lottery_type: LotteryType
    numbers: list[int]
    expected_draw: date
    contest_number: int = Field(ge=1)
    cost: float | None = Field(None, ge=0)  # None = official price for the number count

    @field_validator("lottery_type", mode="before")
    @classmethod
    def accept_lottery_aliases(cls, value):
        return _coerce_lottery_type(value)


class TicketFilter(BaseModel):
    """Optional filters for listing tickets. Unset fields do not constrain."""

    lottery_type: LotteryType | None = None
    status: TicketStatus | None = None
    from_date: date | None = None  # on expected_draw, inclusive
    to_date: date | None = None

    @field_validator("lottery_type", mode="before")
    @classmethod
    def accept_lottery_aliases(cls, value):
        return _coerce_lottery_type(value)


class Ticket(BaseModel):
    id: str
    lottery_type: LotteryType
    numbers: list[int]
    expected_draw: date
    contest_number: int
    status: TicketStatus
    cost: float
    prize: float
    created_at: datetime
    checked_at: datetime | None = None
    result: GameResult | None = None


class TicketStats(BaseModel):
    by_lottery_and_status: dict[str, dict[str, int]]
    total: int


class SweepReport(BaseModel):
    """Summary of one pass over pending tickets."""

    checked: int = 0
    still_pending: int = 0
    failed: int = 0
    failed_ids: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.checked + self.still_pending + self.failed
