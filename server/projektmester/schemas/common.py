"""Validators shared by entity schemas."""

from datetime import date


def validate_iso_date(v: str | None) -> str:
    """Accept an empty value or a YYYY-MM-DD date, returned stripped."""
    v = (v or "").strip()
    if v:
        try:
            date.fromisoformat(v)
        except ValueError as e:
            raise ValueError(f"Invalid date '{v}', expected YYYY-MM-DD") from e
    return v


def none_to_empty(v):
    """Legacy records may carry null in text fields."""
    return "" if v is None else v
