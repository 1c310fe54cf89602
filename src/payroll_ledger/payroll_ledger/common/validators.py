from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value) -> str | None:
    """Trimmed text, or None for missing/blank input."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def collapse_whitespace(value) -> str:
    return " ".join(str(value or "").split())
