"""Repository layer for Bingo persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from goalbingo.models.bingo import Bingo


class BingoRepository:
    """Add, remove and list line records for a card."""

    def list_for_card(self, session: Session, card_code: str) -> Sequence[Bingo]:
        stmt = (
            select(Bingo)
            .where(Bingo.card_code == card_code)
            .order_by(Bingo.type.asc(), Bingo.index_num.asc())
        )
        return list(session.scalars(stmt).all())

    def get(self, session: Session, card_code: str, line_type: str, index: int) -> Bingo | None:
        stmt = select(Bingo).where(
            Bingo.card_code == card_code,
            Bingo.type == line_type,
            Bingo.index_num == index,
        )
        return session.scalars(stmt).one_or_none()

    def add(self, session: Session, card_code: str, line_type: str, index: int) -> Bingo:
        bingo = Bingo(card_code=card_code, type=line_type, index_num=index)
        session.add(bingo)
        session.flush()  # assign PK, surface unique violations here
        return bingo

    def remove(self, session: Session, card_code: str, line_type: str, index: int) -> bool:
        stmt = delete(Bingo).where(
            Bingo.card_code == card_code,
            Bingo.type == line_type,
            Bingo.index_num == index,
        )
        result = session.execute(stmt)
        return bool(result.rowcount)
