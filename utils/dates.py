import datetime as dt
from typing import Any, Optional


def _now():
    return dt.datetime.now(dt.timezone.utc)


def parse_timestamp(value: Any) -> Optional[dt.datetime]:
    """Normalise API timestamps.

    Accepts Firestore-style ``{"_seconds": .., "_nanoseconds": ..}`` objects
    (also ``seconds``/``nanoseconds``), ISO-8601 strings, epoch numbers,
    dates and datetimes. Returns None when the value cannot be parsed.
    Naive results are treated as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value if value.tzinfo else value.replace(tzinfo=dt.timezone.utc)
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    if isinstance(value, dict):
        seconds = value.get("_seconds", value.get("seconds"))
        if seconds is None:
            return None
        nanos = value.get("_nanoseconds", value.get("nanoseconds", 0)) or 0
        return dt.datetime.fromtimestamp(seconds + nanos / 1e9, tz=dt.timezone.utc)
    if isinstance(value, (int, float)):
        # Millisecond epochs come from JavaScript clients
        if value > 1e11:
            value = value / 1000
        return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(raw)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=dt.timezone.utc)
    return None


def event_datetime(value: Any) -> dt.datetime:
    """Like parse_timestamp but falls back to now for missing values."""
    return parse_timestamp(value) or _now()


def format_date(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid Date"
    return parsed.strftime("%b %d, %Y")


def format_datetime(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid Date"
    return parsed.strftime("%b %d, %Y %I:%M %p")


def combine_date_time(date_value: dt.date, time_value: Optional[dt.time] = None) -> str:
    """Join the date and optional time inputs of the event form into ``YYYY-MM-DDTHH:MM``."""
    if time_value is None:
        return date_value.isoformat()
    return f"{date_value.isoformat()}T{time_value.strftime('%H:%M')}"


def format_countdown(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"
