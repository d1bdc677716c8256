"""Repository layer for Card persistence."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from goalbingo.models.card import Card
from goalbingo.models.goal import Goal


class CardRepository:
    """CRUD operations for Card and its goals."""

    def get_by_code(self, session: Session, code: str) -> Card | None:
        stmt = (
            select(Card)
            .where(Card.code == code)
            .options(selectinload(Card.goals), selectinload(Card.bingos))
        )
        return session.scalars(stmt).one_or_none()

    def create(
        self,
        session: Session,
        *,
        code: str,
        owner_name: str,
        display_name: str,
        goals: Sequence[dict[str, Any]],
    ) -> Card:
        """Insert a card and all of its goals in one flush.

        Raises:
            sqlalchemy.exc.IntegrityError: if ``code`` already exists.
        """

        card = Card(code=code, owner_name=owner_name, display_name=display_name)
        card.goals = [Goal(**fields) for fields in goals]
        session.add(card)
        session.flush()
        return card

    def update(self, session: Session, card: Card, fields: dict[str, Any]) -> Card:
        for name, value in fields.items():
            setattr(card, name, value)
        session.flush()
        return card

    def delete(self, session: Session, card: Card) -> None:
        session.delete(card)
        session.flush()
