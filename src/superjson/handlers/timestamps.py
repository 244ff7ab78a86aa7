"""Handler for datetime values."""

from datetime import datetime, timedelta, timezone
from typing import Any, List, Union

from superjson.base.handler import BaseHandler

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


class DateHandler(BaseHandler):
    """Handler for datetime objects.

    Datetimes are encoded as milliseconds since the Unix epoch:
    ``#!Date[1700000000000]``. Sub-millisecond precision is kept in an
    optional second argument holding the remaining microseconds, so
    ``datetime`` values round-trip exactly.

    - Aware datetimes are converted to UTC and decode as aware UTC datetimes
    - Naive datetimes are read as UTC wall-clock time and carry a third
      ``false`` argument, so they decode as naive datetimes again

    Examples:
        >>> handler = DateHandler()
        >>> at = datetime(1970, 1, 1, 0, 5, 43, 434000, tzinfo=timezone.utc)
        >>> handler.serialize(at)
        [343434]
        >>> handler.serialize(datetime(1970, 1, 1, 0, 5, 43, 434000))
        [343434, 0, False]
        >>> handler.deserialize(343434)
        datetime.datetime(1970, 1, 1, 0, 5, 43, 434000, tzinfo=datetime.timezone.utc)
    """

    @property
    def name(self) -> str:
        """Return handler name."""
        return "Date"

    def can_handle(self, value: Any) -> bool:
        """Check if value is a datetime object."""
        return isinstance(value, datetime)

    def serialize(self, value: datetime) -> List[Union[int, bool]]:
        """Convert a datetime to epoch milliseconds.

        Args:
            value: Datetime to encode

        Returns:
            ``[millis]``, ``[millis, micros]`` when the datetime has
            sub-millisecond precision, or ``[millis, micros, False]`` for a
            naive datetime
        """
        aware = value.tzinfo is not None
        if not aware:
            value = value.replace(tzinfo=timezone.utc)

        elapsed = value - EPOCH
        millis = elapsed // _MILLISECOND
        micros = (elapsed - millis * _MILLISECOND) // timedelta(microseconds=1)

        if not aware:
            return [millis, micros, False]
        if micros:
            return [millis, micros]
        return [millis]

    def deserialize(self, millis: Any, micros: int = 0, aware: bool = True) -> datetime:
        """Rebuild a datetime from epoch milliseconds.

        Args:
            millis: Milliseconds since the Unix epoch (int or float)
            micros: Extra microseconds below millisecond precision
            aware: False to return a naive datetime holding UTC wall-clock time

        Returns:
            Aware UTC datetime, or naive datetime when ``aware`` is False

        Raises:
            TypeError: If the arguments have the wrong types
            OverflowError: If the timestamp is out of range
        """
        if isinstance(millis, bool) or not isinstance(millis, (int, float)):
            raise TypeError(f"Expected epoch milliseconds, got {type(millis).__name__}")
        if isinstance(micros, bool) or not isinstance(micros, int):
            raise TypeError(f"Expected microseconds, got {type(micros).__name__}")
        if not isinstance(aware, bool):
            raise TypeError(f"Expected awareness flag, got {type(aware).__name__}")

        value = EPOCH + timedelta(milliseconds=millis, microseconds=micros)
        if not aware:
            return value.replace(tzinfo=None)
        return value
