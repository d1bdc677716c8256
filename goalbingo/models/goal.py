"""Goal ORM model."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Integer, SmallInteger, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalbingo.models.base import Base

if TYPE_CHECKING:
    from goalbingo.models.card import Card


class Goal(Base):
    """One square of a card."""

    __tablename__ = "goals"
    __table_args__ = (UniqueConstraint("card_code", "position", name="uq_goal_card_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_code: Mapped[str] = mapped_column(
        String(32), ForeignKey("cards.code", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 0..24, row-major
    text: Mapped[str] = mapped_column(Text, nullable=False)
    is_free_space: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    card: Mapped[Card] = relationship(back_populates="goals")
