"""A standard set of date periods units.

Units are ordered by their nominal duration so that fields can be related to
each other, e.g. `DAY_OF_MONTH` has a base unit of `DAYS` and a range unit of
`MONTHS`. Durations of units of a day or longer are estimates: a day may be
23 or 25 hours during a daylight savings transition and months vary in length.
"""

from __future__ import annotations

import datetime
import enum
import functools
from typing import TYPE_CHECKING, Any

from chronocore.exceptions import ArithmeticOverflowError

from .const import LONG_MAX_VALUE, NANOS_PER_SECOND, SECONDS_PER_DAY

if TYPE_CHECKING:
    from .accessor import Temporal

__all__ = [
    "ChronoUnit",
]

_SECONDS_PER_YEAR = 31556952  # 365.2425 days


@functools.total_ordering
class ChronoUnit(enum.Enum):
    """A unit of time, ordered by its nominal duration."""

    NANOS = ("Nanos", 1)
    MICROS = ("Micros", 1000)
    MILLIS = ("Millis", 1_000_000)
    SECONDS = ("Seconds", NANOS_PER_SECOND)
    MINUTES = ("Minutes", 60 * NANOS_PER_SECOND)
    HOURS = ("Hours", 3600 * NANOS_PER_SECOND)
    HALF_DAYS = ("HalfDays", 43200 * NANOS_PER_SECOND)
    DAYS = ("Days", SECONDS_PER_DAY * NANOS_PER_SECOND)
    WEEKS = ("Weeks", 7 * SECONDS_PER_DAY * NANOS_PER_SECOND)
    MONTHS = ("Months", _SECONDS_PER_YEAR // 12 * NANOS_PER_SECOND)
    YEARS = ("Years", _SECONDS_PER_YEAR * NANOS_PER_SECOND)
    DECADES = ("Decades", 10 * _SECONDS_PER_YEAR * NANOS_PER_SECOND)
    CENTURIES = ("Centuries", 100 * _SECONDS_PER_YEAR * NANOS_PER_SECOND)
    MILLENNIA = ("Millennia", 1000 * _SECONDS_PER_YEAR * NANOS_PER_SECOND)
    ERAS = ("Eras", 1_000_000_000 * _SECONDS_PER_YEAR * NANOS_PER_SECOND)
    FOREVER = ("Forever", LONG_MAX_VALUE * NANOS_PER_SECOND + 999_999_999)

    def __init__(self, display_name: str, duration_nanos: int) -> None:
        self._display_name = display_name
        self._duration_nanos = duration_nanos

    @property
    def display_name(self) -> str:
        """Return the name of the unit e.g. 'Days'."""
        return self._display_name

    @property
    def duration_nanos(self) -> int:
        """Return the nominal duration of the unit in nanoseconds."""
        return self._duration_nanos

    @property
    def duration(self) -> datetime.timedelta:
        """Return the nominal duration of the unit.

        Sub-microsecond durations are truncated to the resolution of a
        timedelta. Units longer than a timedelta can hold raise an
        ArithmeticOverflowError.
        """
        try:
            return datetime.timedelta(microseconds=self._duration_nanos // 1000)
        except OverflowError as err:
            raise ArithmeticOverflowError(
                f"Duration of {self} exceeds the range of a timedelta"
            ) from err

    def is_duration_estimated(self) -> bool:
        """Return True if the duration of the unit is an estimate."""
        return self >= ChronoUnit.DAYS

    def is_date_based(self) -> bool:
        """Return True if the unit is a date unit (days through eras)."""
        return ChronoUnit.DAYS <= self and self is not ChronoUnit.FOREVER

    def is_time_based(self) -> bool:
        """Return True if the unit is a time unit (shorter than a day)."""
        return self < ChronoUnit.DAYS

    def is_supported_by(self, temporal: Temporal) -> bool:
        """Return True if the temporal value can be added to with this unit."""
        return temporal.is_supported(self)

    def add_to(self, temporal: Temporal, amount: int) -> Temporal:
        """Return a copy of the temporal value with the amount of this unit added."""
        return temporal.plus(amount, self)

    def between(self, start: Temporal, end: Temporal) -> int:
        """Return the amount of this unit between two temporal values."""
        return start.until(end, self)

    def __lt__(self, other: Any) -> bool:
        """Compare units by their nominal duration."""
        if not isinstance(other, ChronoUnit):
            return NotImplemented
        return self._duration_nanos < other.duration_nanos

    def __str__(self) -> str:
        """Return the display name of the unit."""
        return self._display_name
