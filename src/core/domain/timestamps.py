"""Timestamp format used in Timeular endpoint paths.

The API expects naive, millisecond-precision timestamps without a zone suffix,
e.g. `2024-03-01T09:30:00.000`.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone

SERVICE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def to_service_timestamp(value: date | datetime) -> str:
    """Format a date/datetime for `time-entries/{start}/{end}`.

    Rules:
    - naive datetimes are formatted as-is;
    - aware datetimes are converted to UTC, then the zone is dropped;
    - plain dates mean midnight of that day.
    """

    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    elif value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)

    millis = value.microsecond // 1000
    return f"{value.strftime(SERVICE_TIMESTAMP_FORMAT)}.{millis:03d}"


def parse_service_timestamp(raw: str) -> datetime:
    """Inverse of `to_service_timestamp` (milliseconds optional)."""

    return datetime.fromisoformat(raw)
