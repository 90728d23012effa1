"""Saved ticket ORM model."""

from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lottery_optimizer.db.base import Base


class SavedTicket(Base):
    """A user's saved play, checked later against the official draw."""

    __tablename__ = "saved_tickets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    lottery_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    expected_draw: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    contest_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending", index=True)
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    prize: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    checked_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Outcome of the last successful check
    hit_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    matches: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    drawn_numbers: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    prize_description: Mapped[str | None] = mapped_column(String(60), nullable=True)
    prize_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_winner: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    draw_contest: Mapped[int | None] = mapped_column(Integer, nullable=True)
    draw_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("ix_saved_tickets_lottery_contest", "lottery_type", "contest_number"),
    )

    def __repr__(self) -> str:
        return f"<SavedTicket id={self.id} {self.lottery_type} #{self.contest_number} status={self.status}>"
