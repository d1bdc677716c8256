"""Custom marshmallow fields."""

from __future__ import annotations

from typing import Any

from marshmallow import fields


class TrimmedString(fields.String):
    """String with surrounding whitespace removed before validation."""

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> str:
        return super()._deserialize(value, attr, data, **kwargs).strip()
