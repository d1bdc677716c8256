"""Card routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from goalbingo.db import get_session
from goalbingo.schemas.bingo import ReconcileResultSchema
from goalbingo.schemas.card import CardCreateSchema, CardDeleteSchema, CardDetailsSchema, CardSchema, CardUpdateSchema
from goalbingo.services.bingo_service import BingoService
from goalbingo.services.card_service import CardService
from goalbingo.utils.responses import ok

cards_bp = Blueprint("cards", __name__)

_card_schema = CardSchema()
_details_schema = CardDetailsSchema()
_create_schema = CardCreateSchema()
_update_schema = CardUpdateSchema()
_delete_schema = CardDeleteSchema()
_reconcile_schema = ReconcileResultSchema()
_service = CardService()
_bingo_service = BingoService()


@cards_bp.post("/cards")
def create_card():
    """Create a card from 25 goal texts and return its code."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    session = get_session()
    card = _service.create_card(
        session,
        owner_name=str(data["owner_name"]),
        goals=list(data["goals"]),
        free_space_index=int(data["free_space_index"]),
    )

    # Commit occurs in teardown if no exception.
    return ok({"code": card.code}, status_code=201)


@cards_bp.get("/cards/<code>")
def get_card(code: str):
    session = get_session()
    details = _service.get_card(session, code)
    return ok(_details_schema.dump(details))


@cards_bp.put("/cards/<code>")
def update_card(code: str):
    """Update display name, theme or stamp settings."""

    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    session = get_session()
    card = _service.update_settings(session, code, data)
    return ok(_card_schema.dump(card))


@cards_bp.delete("/cards/<code>")
def delete_card(code: str):
    """Delete a card, its goals and its bingos. Requires the owner's name."""

    payload = request.get_json(silent=True) or {}
    data = _delete_schema.load(payload)

    session = get_session()
    _service.delete_card(session, code, str(data["owner_name"]))
    return ok({"deleted": code})


@cards_bp.post("/cards/<code>/bingos/reconcile")
def reconcile_bingos(code: str):
    """Recheck every line of the card and sync its bingo records."""

    session = get_session()
    _service.get_card(session, code)
    outcome = _bingo_service.reconcile(session, code)
    bingos = _bingo_service.list_bingos(session, code)
    return ok(
        _reconcile_schema.dump(
            {
                "added": sorted(outcome.added),
                "removed": sorted(outcome.removed),
                "failed": sorted(outcome.failed),
                "bingos": bingos,
            }
        )
    )
