"""
Date helpers for timestamps stored by the document database

Timestamps arrive as Firestore Timestamp objects, their JSON form
({"seconds": ..., "nanoseconds": ...} or {"_seconds": ...}), epoch seconds or
milliseconds, numeric strings, or ISO-8601 strings. as_date() turns all of
them into timezone-aware UTC datetimes.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

# Epoch numbers above these are milliseconds / seconds respectively
MILLISECONDS_THRESHOLD = 1e12
SECONDS_THRESHOLD = 1e9


def _from_epoch_number(value: float) -> datetime | None:
    if not math.isfinite(value):
        return None
    seconds = value if SECONDS_THRESHOLD < value <= MILLISECONDS_THRESHOLD else value / 1000
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_date(raw: Any) -> datetime | None:
    """
    Coerce a stored timestamp into a UTC datetime

    Args:
        raw: Timestamp in any of the supported shapes

    Returns:
        Aware UTC datetime, or None if the value is not a timestamp
    """
    if raw is None or raw == "" or isinstance(raw, bool):
        return None

    if isinstance(raw, datetime):
        return _to_utc(raw)

    # Firestore Timestamp objects (google-cloud-firestore / protobuf)
    for method in ("to_datetime", "ToDatetime"):
        converter = getattr(raw, method, None)
        if callable(converter):
            try:
                return _to_utc(converter())
            except (TypeError, ValueError):
                return None

    if isinstance(raw, Mapping):
        seconds = raw.get("seconds", raw.get("_seconds"))
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(float(seconds), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    if isinstance(raw, (int, float)):
        return _from_epoch_number(float(raw))

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return _from_epoch_number(float(text))
        except ValueError:
            pass
        try:
            return _to_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None

    return None


def days_since(raw: Any, now: datetime | None = None) -> int | None:
    """Whole days elapsed since a stored timestamp (None if unparseable)"""
    date = as_date(raw)
    if date is None:
        return None
    now = _to_utc(now) if now else datetime.now(timezone.utc)
    return math.floor((now - date).total_seconds() / 86400)
