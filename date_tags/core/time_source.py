"""Wall-clock readings and date key derivation."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional

from date_tags.constants import TIMESTAMP_FORMAT
from date_tags.data_models import DateKey


class TimeSource:
    """Reads the local wall clock and renders timestamps in the header format.

    Args:
        clock: Callable returning the current local ``datetime``. Tests pass a
            fixed clock; production code uses :meth:`datetime.now`.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or datetime.now

    def now_instant(self) -> datetime:
        return self._clock()

    def now(self) -> str:
        """Return the current local time as ``YYYY-MM-DD HH:MM:SS``."""
        return format_timestamp(self.now_instant())

    def date_key(self, base: str, instant: Optional[datetime] = None) -> DateKey:
        """Derive the date key for ``instant`` (defaults to now)."""
        return build_date_key(base, instant if instant is not None else self.now_instant())


def format_timestamp(instant: datetime) -> str:
    return instant.strftime(TIMESTAMP_FORMAT)


def build_date_key(base: str, instant: date) -> DateKey:
    return DateKey(base=base, year=instant.year, month=instant.month, day=instant.day)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Turn a stored header value back into an instant.

    Accepts the fixed display format, ISO-8601 strings and the ``datetime`` /
    ``date`` objects YAML produces for unquoted timestamps.

    Returns:
        The parsed instant, or ``None`` when ``value`` is absent or cannot be
        parsed. Callers treat ``None`` as "creation date unknown".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
