"""Marshmallow schemas for bingo records."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from goalbingo.services.line_detection import LineType

LINE_TYPES = [t.value for t in LineType]


class BingoSchema(Schema):
    """Serialize Bingo."""

    id = fields.Int(required=True)
    card_code = fields.Str(required=True)
    type = fields.Str(required=True)
    index = fields.Int(required=True, attribute="index_num")
    completed_at = fields.DateTime()


class BingoCreateSchema(Schema):
    """Validate add-bingo payload. Diagonals only have indexes 0 and 1."""

    card_code = fields.Str(required=True, data_key="cardCode", validate=validate.Length(min=1, max=32))
    type = fields.Str(required=True, validate=validate.OneOf(LINE_TYPES))
    index = fields.Integer(required=True, strict=True)

    @validates_schema
    def _validate_index(self, data, **kwargs):  # type: ignore[no-untyped-def]
        line_type = data.get("type")
        index = data.get("index")
        if line_type is None or index is None:
            return
        upper = LineType(line_type).line_count - 1
        if not 0 <= int(index) <= upper:
            raise ValidationError({"index": [f"{line_type} index must be between 0 and {upper}"]})


class LineSchema(Schema):
    """Serialize a Line value (not a stored record)."""

    type = fields.Function(lambda line: line.type.value)
    index = fields.Int()


class ReconcileResultSchema(Schema):
    added = fields.List(fields.Nested(LineSchema), required=True)
    removed = fields.List(fields.Nested(LineSchema), required=True)
    failed = fields.List(fields.Nested(LineSchema), required=True)
    bingos = fields.List(fields.Nested(BingoSchema), required=True)
