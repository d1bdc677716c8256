"""Marshmallow schemas for goals."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from goalbingo.schemas.fields import TrimmedString


class GoalSchema(Schema):
    """Serialize Goal."""

    id = fields.Int(required=True)
    card_code = fields.Str(required=True)
    position = fields.Int(required=True)
    text = fields.Str(required=True)
    is_free_space = fields.Bool(required=True)
    is_completed = fields.Bool(required=True)
    completed_date = fields.Date(allow_none=True)
    notes = fields.Str(allow_none=True)


class GoalUpdateSchema(Schema):
    """Validate partial goal update."""

    text = TrimmedString(validate=validate.Length(min=1, max=100))
    is_completed = fields.Boolean(data_key="isCompleted")
    completed_date = fields.Date(data_key="completedDate", allow_none=True)
    notes = fields.String(validate=validate.Length(max=500), allow_none=True)

    @validates_schema
    def _validate_notes(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if "notes" in data and data.get("is_completed") is not True:
            raise ValidationError({"notes": ["Notes are only accepted with isCompleted=true"]})
