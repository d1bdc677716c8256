"""Card ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from goalbingo.models.base import Base, utcnow

if TYPE_CHECKING:
    from goalbingo.models.bingo import Bingo
    from goalbingo.models.goal import Goal


class Card(Base):
    """A personal 5x5 bingo card, addressed by its shareable code."""

    __tablename__ = "cards"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    owner_name: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    theme: Mapped[str] = mapped_column(String(32), nullable=False, default="default")
    stamp_icon: Mapped[str] = mapped_column(String(64), nullable=False, default="⭐")
    stamp_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#FFD700")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    goals: Mapped[list[Goal]] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Goal.position",
    )
    bingos: Mapped[list[Bingo]] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
