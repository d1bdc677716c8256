"""Bingo record routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from goalbingo.db import get_session
from goalbingo.errors import ValidationError
from goalbingo.schemas.bingo import BingoCreateSchema, BingoSchema
from goalbingo.services.bingo_service import BingoService
from goalbingo.services.line_detection import Line
from goalbingo.utils.responses import ok

bingos_bp = Blueprint("bingos", __name__)

_bingo_schema = BingoSchema()
_create_schema = BingoCreateSchema()
_service = BingoService()


def _parse_line(line_type: str, index: int) -> Line:
    try:
        return Line(line_type, index)  # type: ignore[arg-type]
    except ValueError as exc:
        raise ValidationError(str(exc), details={"type": line_type, "index": index}) from exc


@bingos_bp.post("/bingos")
def add_bingo():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    session = get_session()
    line = _parse_line(data["type"], int(data["index"]))
    bingo, created = _service.add_bingo(session, str(data["card_code"]), line)
    return ok(_bingo_schema.dump(bingo), status_code=201 if created else 200)


@bingos_bp.delete("/bingos/<card_code>/<line_type>/<int:index>")
def remove_bingo(card_code: str, line_type: str, index: int):
    session = get_session()
    line = _parse_line(line_type, index)
    removed = _service.remove_bingo(session, card_code, line)
    return ok({"removed": removed})
