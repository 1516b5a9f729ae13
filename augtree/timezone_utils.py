"""
Timezone utilities for datetime interval endpoints.

Datetime keys in one tree must be mutually comparable, so every endpoint
taken from a calendar is normalised to an aware UTC datetime before it is
inserted or used as a query point. Output is shown in the configured zone.
"""

from datetime import datetime, date
import pytz


# Default timezone - can be overridden by config
_local_tz = pytz.timezone("Europe/Amsterdam")


def set_timezone(timezone_name: str):
    """
    Set the zone used to interpret naive datetimes and plain dates.

    Raises:
        pytz.UnknownTimeZoneError: if the name is not in the tz database.
    """
    global _local_tz
    _local_tz = pytz.timezone(timezone_name)


def to_utc_datetime(value) -> datetime:
    """
    Normalise a date or datetime to an aware UTC datetime.

    Args:
        value: An aware datetime, a naive datetime (taken as local time),
            or a date (taken as local midnight).
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    if value.tzinfo is None:
        value = _local_tz.localize(value)
    return value.astimezone(pytz.UTC)


def format_local(dt: datetime, fmt: str = "%Y-%m-%d %H:%M") -> str:
    return dt.astimezone(_local_tz).strftime(fmt)


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)
