"""
Time formatting helpers.

The agent uses two UTC layouts:
- ISO-8601 with milliseconds ("2026-01-27T21:35:00.123Z") for timestamps
  reported to the service.
- ISO-8601 "dash" form ("2026-01-27T21-35-00.123Z") for run identifiers,
  which end up in file names and S3 keys and therefore avoid colons.
"""

from datetime import datetime, timezone


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _millis(dt: datetime) -> str:
    return f"{dt.microsecond // 1000:03d}"


def to_iso8601_utc(dt: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc_dt = ensure_utc(dt)
    return f"{utc_dt.strftime('%Y-%m-%dT%H:%M:%S')}.{_millis(utc_dt)}Z"


def to_iso_dash_utc(dt: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH-MM-SS.mmmZ`` (path-safe)."""
    utc_dt = ensure_utc(dt)
    return f"{utc_dt.strftime('%Y-%m-%dT%H-%M-%S')}.{_millis(utc_dt)}Z"


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime for canonical serialization.

    Same layout as to_iso8601_utc so canonical payloads and reported
    capture times agree.
    """
    return to_iso8601_utc(dt)
