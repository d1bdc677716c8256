"""Business logic for creating, reading, updating and deleting cards."""

from __future__ import annotations

import logging
import random
import re
import string
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from goalbingo.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from goalbingo.models.bingo import Bingo
from goalbingo.models.card import Card
from goalbingo.models.goal import Goal
from goalbingo.repositories.bingo_repository import BingoRepository
from goalbingo.repositories.card_repository import CardRepository
from goalbingo.services.line_detection import CELL_COUNT, CENTER_POSITION
from goalbingo.utils.sanitize import clean_optional, clean_text

logger = logging.getLogger(__name__)

CARD_CODE_RE = re.compile(r"^[A-Z0-9]+-\d{4}-[A-Z0-9]{4}$")

_NAME_MAX = 10
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
_SUFFIX_LENGTH = 4
_FALLBACK_NAME = "CARD"

# Schema field name -> Card column.
_SETTINGS_COLUMNS = {
    "display_name": "display_name",
    "theme": "theme",
    "stamp_icon": "stamp_icon",
    "stamp_color": "stamp_color",
}


@dataclass(frozen=True)
class CardDetails:
    card: Card
    goals: list[Goal]
    bingos: list[Bingo]


def generate_card_code(owner_name: str, *, year: int | None = None, rng: random.Random | None = None) -> str:
    """Build ``NAME-YEAR-XXXX`` from the owner's name.

    NAME keeps only ASCII letters, uppercased, at most 10 of them. Names with
    no letters fall back to ``CARD`` so the code stays well formed.
    """

    rng = rng or random.SystemRandom()
    name = re.sub(r"[^A-Z]", "", owner_name.upper())[:_NAME_MAX] or _FALLBACK_NAME
    year = year if year is not None else date.today().year
    suffix = "".join(rng.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{name}-{year:04d}-{suffix}"


def is_valid_card_code(code: str) -> bool:
    return bool(CARD_CODE_RE.match(code or ""))


def layout_goals(texts: Sequence[str], free_space_index: int, *, rng: random.Random | None = None) -> list[dict[str, Any]]:
    """Place the free space in the center and shuffle the other 24 around it.

    Returns one dict per grid position (0..24) with ``position``, ``text`` and
    ``is_free_space``.
    """

    rng = rng or random.SystemRandom()
    others = [text for i, text in enumerate(texts) if i != free_space_index]
    rng.shuffle(others)  # Fisher-Yates

    layout: list[dict[str, Any]] = []
    remaining = iter(others)
    for position in range(CELL_COUNT):
        if position == CENTER_POSITION:
            layout.append({"position": position, "text": texts[free_space_index], "is_free_space": True})
        else:
            layout.append({"position": position, "text": next(remaining), "is_free_space": False})
    return layout


class CardService:
    """Card use-cases."""

    def __init__(
        self,
        repository: CardRepository | None = None,
        bingo_repository: BingoRepository | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._repo = repository or CardRepository()
        self._bingos = bingo_repository or BingoRepository()
        self._rng = rng or random.SystemRandom()

    @staticmethod
    def _validate_new_card(owner_name: str, goals: Sequence[str], free_space_index: int) -> None:
        if not owner_name or not owner_name.strip():
            raise ValidationError("ownerName is required", details={"ownerName": ["Required"]})
        if len(goals) != CELL_COUNT:
            raise ValidationError(
                f"Exactly {CELL_COUNT} goals are required",
                details={"goals": [f"Expected {CELL_COUNT} goals, got {len(goals)}"]},
            )
        blank = [i for i, text in enumerate(goals) if not str(text).strip()]
        if blank:
            raise ValidationError("Goals must not be empty", details={"goals": {i: ["Empty goal"] for i in blank}})
        if not 0 <= int(free_space_index) < CELL_COUNT:
            raise ValidationError(
                "freeSpaceIndex out of range",
                details={"freeSpaceIndex": [f"Must be between 0 and {CELL_COUNT - 1}"]},
            )

    def create_card(
        self,
        session: Session,
        *,
        owner_name: str,
        goals: Sequence[str],
        free_space_index: int,
    ) -> Card:
        """Create a card with its 25 goals.

        The free space goal starts completed. A generated code that already
        exists is reported as a ConflictError; callers retry the request.
        """

        self._validate_new_card(owner_name, goals, free_space_index)

        texts = [clean_text(str(text)) for text in goals]
        layout = layout_goals(texts, int(free_space_index), rng=self._rng)
        today = date.today()
        for fields in layout:
            if fields["is_free_space"]:
                fields["is_completed"] = True
                fields["completed_date"] = today

        owner = clean_text(owner_name)
        code = generate_card_code(owner_name, rng=self._rng)

        try:
            card = self._repo.create(session, code=code, owner_name=owner, display_name=owner, goals=layout)
        except IntegrityError as exc:
            session.rollback()
            logger.warning("Card code collision code=%s", code)
            raise ConflictError(message="Failed to create card, please retry") from exc

        logger.info("Card created code=%s", code)
        return card

    def _require_card(self, session: Session, code: str) -> Card:
        if not is_valid_card_code(code):
            raise NotFoundError(message="Card not found")
        card = self._repo.get_by_code(session, code)
        if card is None:
            raise NotFoundError(message="Card not found")
        return card

    def get_card(self, session: Session, code: str) -> CardDetails:
        card = self._require_card(session, code)
        return CardDetails(
            card=card,
            goals=sorted(card.goals, key=lambda g: g.position),
            bingos=list(self._bingos.list_for_card(session, code)),
        )

    def update_settings(self, session: Session, code: str, changes: dict[str, Any]) -> Card:
        card = self._require_card(session, code)

        fields: dict[str, Any] = {}
        for key, column in _SETTINGS_COLUMNS.items():
            if key in changes and changes[key] is not None:
                fields[column] = changes[key]
        if not fields:
            raise ValidationError("No updates provided")

        for column in ("display_name", "stamp_icon"):
            if column in fields:
                fields[column] = clean_optional(fields[column])

        return self._repo.update(session, card, fields)

    def delete_card(self, session: Session, code: str, owner_name: str) -> None:
        card = self._require_card(session, code)
        if clean_text(owner_name or "") != card.owner_name:
            logger.info("Delete refused for card=%s: owner mismatch", code)
            raise ForbiddenError(message="Owner name does not match")

        self._repo.delete(session, card)
        logger.info("Card deleted code=%s", code)
