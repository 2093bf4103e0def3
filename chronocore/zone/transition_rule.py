"""A rule expressing how to create a transition each year.

Zones with daylight savings time change offset on a recurring date each year,
such as "the second Sunday in March at 02:00 local time". A rule captures this
so that transitions can be projected indefinitely into the future after the
last transition recorded in the historic data.

The date is built from a month, a day-of-month indicator and an optional day
of week:

- `day_of_month_indicator` of 1 to 31: the date is that day of the month, or
  with a day of week, the first matching weekday on or after that day.
- `day_of_month_indicator` of -1 to -28: count back from the end of the month
  (-1 is the last day), or with a day of week, the last matching weekday on
  or before that day.
"""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass

from dateutil.relativedelta import relativedelta, weekdays

from chronocore.exceptions import ArithmeticOverflowError
from chronocore.temporal import ChronoField

from .offset import ZoneOffset
from .transition import ZoneOffsetTransition

__all__ = [
    "TimeDefinition",
    "ZoneOffsetTransitionRule",
]

# Limit from POSIX TZ strings, which allow transition times of -167 to 167 hours
_MAX_TIME = datetime.timedelta(hours=167)


class TimeDefinition(str, enum.Enum):
    """Defines how the local time of a transition rule is interpreted."""

    UTC = "UTC"
    """The local date-time is in UTC."""

    WALL = "WALL"
    """The local date-time is in the wall offset in effect before the transition."""

    STANDARD = "STANDARD"
    """The local date-time is in the standard offset in effect before the transition."""

    def create_date_time(
        self,
        value: datetime.datetime,
        standard_offset: ZoneOffset,
        wall_offset: ZoneOffset,
    ) -> datetime.datetime:
        """Convert a local date-time in this definition to wall time."""
        if self is TimeDefinition.UTC:
            return value + wall_offset.as_timedelta()
        if self is TimeDefinition.STANDARD:
            return value + (wall_offset.as_timedelta() - standard_offset.as_timedelta())
        return value


@dataclass(frozen=True)
class ZoneOffsetTransitionRule:
    """A rule for creating a transition in any year."""

    month: int
    """The month of the transition, 1 to 12."""

    day_of_month_indicator: int
    """The day of month, or if negative the day counting back from the end of month."""

    day_of_week: int | None
    """The ISO day of week (1 is Monday, 7 is Sunday) to adjust to, or None."""

    time: datetime.timedelta
    """The time of day of the transition, which may exceed a day or be negative."""

    time_definition: TimeDefinition
    """How `time` is interpreted."""

    standard_offset: ZoneOffset
    """The standard offset in force at the transition."""

    offset_before: ZoneOffset
    """The offset before the transition."""

    offset_after: ZoneOffset
    """The offset after the transition."""

    def __post_init__(self) -> None:
        """Validate the rule."""
        ChronoField.MONTH_OF_YEAR.check_valid_value(self.month)
        if (
            self.day_of_month_indicator < -28
            or self.day_of_month_indicator > 31
            or self.day_of_month_indicator == 0
        ):
            raise ValueError(
                "Day of month indicator must be between -28 and 31 inclusive "
                f"excluding zero: {self.day_of_month_indicator}"
            )
        if self.day_of_week is not None:
            ChronoField.DAY_OF_WEEK.check_valid_value(self.day_of_week)
        if abs(self.time) > _MAX_TIME:
            raise ValueError(f"Transition time must be within 167 hours: {self.time}")
        if self.time.microseconds:
            raise ValueError(f"Transition time must be whole seconds: {self.time}")
        if self.offset_before == self.offset_after:
            raise ValueError(
                f"Offsets must not be equal: {self.offset_before} {self.offset_after}"
            )

    def transition_date(self, year: int) -> datetime.date:
        """Return the date of the transition in the specified year."""
        weekday = None
        if self.day_of_week is not None:
            weekday = weekdays[self.day_of_week - 1]
        start = datetime.date(year, self.month, 1)
        if self.day_of_month_indicator < 0:
            # day=31 is clamped to the last day of the month
            delta = relativedelta(day=31, days=self.day_of_month_indicator + 1)
            if weekday is not None:
                delta += relativedelta(weekday=weekday(-1))
        else:
            delta = relativedelta(day=self.day_of_month_indicator)
            if weekday is not None:
                delta += relativedelta(weekday=weekday(+1))
        return start + delta

    def create_transition(self, year: int) -> ZoneOffsetTransition:
        """Create the transition for the specified year."""
        local = datetime.datetime.combine(self.transition_date(year), datetime.time())
        try:
            local += self.time
            wall = self.time_definition.create_date_time(
                local, self.standard_offset, self.offset_before
            )
        except OverflowError as err:
            raise ArithmeticOverflowError(
                f"Transition for {self} in year {year} is outside the supported "
                "range of datetime"
            ) from err
        return ZoneOffsetTransition.of(wall, self.offset_before, self.offset_after)

    def __str__(self) -> str:
        """Return a description of the rule."""
        kind = "Gap" if self.offset_after > self.offset_before else "Overlap"
        return (
            f"TransitionRule[{kind} {self.offset_before} to {self.offset_after}, "
            f"month={self.month} day={self.day_of_month_indicator} "
            f"weekday={self.day_of_week} at {self.time} {self.time_definition.value}, "
            f"standard offset {self.standard_offset}]"
        )
