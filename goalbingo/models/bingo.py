"""Bingo ORM model.

One row per completed line. ``(card_code, type, index_num)`` is unique.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalbingo.models.base import Base, utcnow

if TYPE_CHECKING:
    from goalbingo.models.card import Card


class Bingo(Base):
    __tablename__ = "bingos"
    __table_args__ = (UniqueConstraint("card_code", "type", "index_num", name="uq_bingo_card_line"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_code: Mapped[str] = mapped_column(
        String(32), ForeignKey("cards.code", ondelete="CASCADE"), index=True, nullable=False
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # row | column | diagonal
    index_num: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    card: Mapped[Card] = relationship(back_populates="bingos")
