"""
Time Utilities

Exchange replies are normalized at receipt time: the timestamp on every
Ticker, Orderbook and OrderInfo is generated locally, in milliseconds since
the Unix epoch, rather than trusted from the exchange payload.

This module also provides the conversions needed to turn those integer
timestamps back into timezone-aware datetimes for display and logging.
"""

from datetime import datetime, timezone
from typing import Union


def to_utc_datetime(timestamp: Union[int, float]) -> datetime:
    """
    Convert a timestamp (seconds or milliseconds) to UTC datetime.

    Detection Logic:
        - If timestamp > 1e12 (1 trillion): Assumed to be milliseconds
        - Otherwise: Assumed to be seconds

    Args:
        timestamp: Unix timestamp in seconds or milliseconds

    Returns:
        datetime: Timezone-aware datetime object in UTC

    Raises:
        ValueError: If timestamp is negative or invalid

    Examples:
        >>> to_utc_datetime(1704110400000)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)

        >>> to_utc_datetime(1704110400)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    """
    if timestamp < 0:
        raise ValueError(f"Timestamp cannot be negative: {timestamp}")

    # Current time in seconds: ~1.7 billion, in milliseconds: ~1.7 trillion
    if timestamp > 1e12:
        timestamp = timestamp / 1000.0

    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OSError, OverflowError, ValueError) as e:
        raise ValueError(f"Invalid timestamp: {timestamp}. Error: {e}")


def datetime_to_timestamp(dt: datetime, milliseconds: bool = False) -> int:
    """
    Convert a datetime object to Unix timestamp.

    Args:
        dt: Datetime object (naive datetimes are assumed to be UTC)
        milliseconds: If True, return milliseconds; if False, return seconds

    Returns:
        int: Unix timestamp in seconds or milliseconds

    Examples:
        >>> dt = datetime(2024, 1, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)
        >>> datetime_to_timestamp(dt)
        1704110400

        >>> datetime_to_timestamp(dt, milliseconds=True)
        1704110400250
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    if milliseconds:
        return int(dt.timestamp() * 1000)

    return int(dt.timestamp())


def current_utc_timestamp(milliseconds: bool = False) -> int:
    """
    Get current UTC timestamp.

    Examples:
        >>> current_utc_timestamp()
        1704110400

        >>> current_utc_timestamp(milliseconds=True)
        1704110400123
    """
    return datetime_to_timestamp(datetime.now(timezone.utc), milliseconds)
