from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso(value: date | None) -> str | None:
    return value.strftime("%Y-%m-%d") if value else None


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def timestamp_token() -> str:
    """Millisecond epoch token used for generated ids."""
    return str(int(datetime.now().timestamp() * 1000))
