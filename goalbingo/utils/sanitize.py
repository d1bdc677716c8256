"""Text sanitising applied to every user-supplied string before it is stored."""

from __future__ import annotations

from markupsafe import escape


def clean_text(value: str) -> str:
    """Trim surrounding whitespace and HTML-escape ``value``."""

    return str(escape(value.strip()))


def clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    return clean_text(value)
