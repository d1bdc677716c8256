"""Marshmallow schemas for cards."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from goalbingo.schemas.bingo import BingoSchema
from goalbingo.schemas.fields import TrimmedString
from goalbingo.schemas.goal import GoalSchema
from goalbingo.services.line_detection import CELL_COUNT

THEMES = ("default", "royal", "sunset", "ocean", "forest", "lavender", "sunset-pink")

STAMP_COLOR_RE = r"^#[0-9A-Fa-f]{6}$"


class CardSchema(Schema):
    """Serialize Card."""

    code = fields.Str(required=True)
    owner_name = fields.Str(required=True)
    display_name = fields.Str(required=True)
    theme = fields.Str(required=True)
    stamp_icon = fields.Str(required=True)
    stamp_color = fields.Str(required=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class CardDetailsSchema(Schema):
    """Serialize a card together with its goals and bingos."""

    card = fields.Nested(CardSchema, required=True)
    goals = fields.List(fields.Nested(GoalSchema), required=True)
    bingos = fields.List(fields.Nested(BingoSchema), required=True)


class CardCreateSchema(Schema):
    """Validate create Card payload."""

    owner_name = TrimmedString(required=True, data_key="ownerName", validate=validate.Length(min=1, max=50))
    goals = fields.List(
        TrimmedString(validate=validate.Length(min=1, max=100)),
        required=True,
        validate=validate.Length(equal=CELL_COUNT),
    )
    free_space_index = fields.Integer(
        required=True,
        data_key="freeSpaceIndex",
        strict=True,
        validate=validate.Range(min=0, max=CELL_COUNT - 1),
    )


class CardUpdateSchema(Schema):
    """Validate partial settings update."""

    display_name = TrimmedString(data_key="displayName", validate=validate.Length(min=1, max=50))
    theme = fields.Str(validate=validate.OneOf(THEMES))
    stamp_icon = TrimmedString(data_key="stampIcon", validate=validate.Length(min=1, max=16))
    stamp_color = fields.Str(
        data_key="stampColor",
        validate=validate.Regexp(STAMP_COLOR_RE, error="Must be a #RRGGBB color"),
    )


class CardDeleteSchema(Schema):
    owner_name = fields.Str(required=True, data_key="ownerName", validate=validate.Length(min=1, max=50))
