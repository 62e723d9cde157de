"""Timestamp rendering adapter.

Entries store UTC instants; users read them in one fixed, configured zone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


class ZonedTimestampFormatter:
    """Format UTC datetimes in a fixed time zone with a strftime pattern."""

    def __init__(self, time_zone: str, datetime_format: str) -> None:
        self._zone = ZoneInfo(time_zone)
        self._format = datetime_format

    def __call__(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(self._zone).strftime(self._format)
