"""Business logic for bingo records: direct add/remove and server-side reconciliation."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from goalbingo.errors import NotFoundError
from goalbingo.models.bingo import Bingo
from goalbingo.models.card import Card
from goalbingo.repositories.bingo_repository import BingoRepository
from goalbingo.repositories.card_repository import CardRepository
from goalbingo.services.line_detection import Line, LineType, build_grid, detect_complete_lines
from goalbingo.services.reconciler import ReconcileOutcome, apply_plan, plan_reconciliation

logger = logging.getLogger(__name__)


def bingo_to_line(bingo: Bingo) -> Line:
    return Line(LineType(bingo.type), int(bingo.index_num))


class BingoService:
    """Bingo record use-cases."""

    def __init__(
        self,
        repository: BingoRepository | None = None,
        card_repository: CardRepository | None = None,
    ) -> None:
        self._repo = repository or BingoRepository()
        self._cards = card_repository or CardRepository()

    def _require_card(self, session: Session, code: str) -> Card:
        card = self._cards.get_by_code(session, code)
        if card is None:
            raise NotFoundError(message=f"Card {code} not found")
        return card

    def list_bingos(self, session: Session, code: str) -> list[Bingo]:
        return list(self._repo.list_for_card(session, code))

    def add_bingo(self, session: Session, code: str, line: Line) -> tuple[Bingo, bool]:
        """Record ``line`` for card ``code``.

        Returns the record and whether it was created. Adding a line that is
        already recorded returns the existing record.
        """

        self._require_card(session, code)
        existing = self._repo.get(session, code, line.type.value, line.index)
        if existing is not None:
            return existing, False

        bingo = self._repo.add(session, code, line.type.value, line.index)
        logger.info("Bingo added card=%s line=%s", code, line)
        return bingo, True

    def remove_bingo(self, session: Session, code: str, line: Line) -> bool:
        self._require_card(session, code)
        removed = self._repo.remove(session, code, line.type.value, line.index)
        if removed:
            logger.info("Bingo removed card=%s line=%s", code, line)
        return removed

    def reconcile(self, session: Session, code: str) -> ReconcileOutcome:
        """Recompute complete lines for ``code`` and sync its bingo records.

        Runs inside the request transaction, so a store failure aborts the
        whole pass and the next call starts again from the persisted state.
        """

        card = self._require_card(session, code)
        detected = detect_complete_lines(build_grid(card.goals))
        persisted = {bingo_to_line(b) for b in self._repo.list_for_card(session, code)}
        plan = plan_reconciliation(detected, persisted)

        outcome = apply_plan(
            plan,
            add=lambda line: self._repo.add(session, code, line.type.value, line.index),
            remove=lambda line: self._repo.remove(session, code, line.type.value, line.index),
        )
        if not plan.is_empty:
            logger.info(
                "Reconciled card=%s added=%s removed=%s",
                code,
                ",".join(str(line) for line in sorted(outcome.added)) or "-",
                ",".join(str(line) for line in sorted(outcome.removed)) or "-",
            )
        return outcome
