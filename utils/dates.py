"""Date helpers shared by the models and the request mapper."""

from __future__ import annotations

from datetime import datetime, timezone

DATE_FORMAT = "%Y-%m-%d"


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` string into a datetime at midnight.

    Raises ValueError for anything else, including full timestamps.
    """
    if not isinstance(value, str):
        raise ValueError("Dates must be provided as YYYY-MM-DD strings.")
    return datetime.strptime(value.strip(), DATE_FORMAT)


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


__all__ = ["DATE_FORMAT", "isoformat", "parse_date", "utcnow"]
