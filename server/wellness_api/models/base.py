"""Shared model configuration and field helpers."""
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def validate_day(value: str) -> str:
    """Normalize a calendar-day string to YYYY-MM-DD.

    Accepts full ISO timestamps and keeps only the date part.
    """
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value)[:10]).isoformat()
    except ValueError:
        raise ValueError(f"'{value}' is not a valid ISO date")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FrozenCamelModel(CamelModel):
    """Immutable camelCase model for computed results."""

    model_config = ConfigDict(frozen=True)
