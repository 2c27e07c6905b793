"""Time utility helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from chainable.config import settings
from chainable.utils.errors import InvalidTimestampError


def reference_zone() -> ZoneInfo:
    """Return the process-wide zone that calendar days are measured in."""
    return ZoneInfo(settings.timezone)


def now_in_zone(zone: tzinfo | None = None) -> datetime:
    """Return current timezone-aware datetime in the reference zone."""
    return datetime.now(tz=UTC).astimezone(zone or reference_zone())


def today_in_zone(zone: tzinfo | None = None) -> date:
    """Return the current calendar day in the reference zone."""
    return now_in_zone(zone).date()


def parse_iso_datetime(value: str) -> datetime | date:
    """Parse an ISO-8601 date or datetime string, accepting a trailing ``Z``."""
    normalized = value.strip().replace("Z", "+00:00")
    # no time part: a calendar day, never shifted by zone conversion
    if "T" not in normalized and " " not in normalized:
        return date.fromisoformat(normalized)
    return datetime.fromisoformat(normalized)


def to_calendar_date(value: Any, zone: tzinfo | None = None, column: str | None = None) -> date:
    """Truncate a raw timestamp to its calendar day in ``zone``.

    Plain dates pass through untouched. Naive datetimes are read as UTC,
    the same way stored timestamps without an offset are treated elsewhere.
    Anything else raises ``InvalidTimestampError``.
    """
    if isinstance(value, str):
        try:
            value = parse_iso_datetime(value)
        except ValueError as exc:
            raise InvalidTimestampError(value, column) from exc

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(zone or reference_zone()).date()

    if isinstance(value, date):
        return value

    raise InvalidTimestampError(value, column)
