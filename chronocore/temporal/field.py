"""A standard set of date-time fields.

These fields provide field-based access to a date, time or date-time. Each
field has a base unit (what it counts), a range unit (what bounds it) and a
default range in the ISO-8601 calendar system:

```python
from chronocore.temporal.field import ChronoField

field = ChronoField.by_name("DayOfMonth")
assert field is ChronoField.DAY_OF_MONTH
print(field.range())  # 1 - 28/31
field.check_valid_value(30)
```

The range of a field may be narrower for a specific date, e.g. February has
at most 29 days. Use `range_refined_by` with a temporal value to get the
range for that value.
"""

from __future__ import annotations

import enum
import math
from typing import TYPE_CHECKING

from .const import LONG_MAX_VALUE, LONG_MIN_VALUE, YEAR_MAX_VALUE, YEAR_MIN_VALUE
from .unit import ChronoUnit
from .value_range import ValueRange

if TYPE_CHECKING:
    from .accessor import Temporal, TemporalAccessor

__all__ = [
    "ChronoField",
]


class ChronoField(enum.Enum):
    """A standard field of date-time."""

    NANO_OF_SECOND = (
        "NanoOfSecond",
        ChronoUnit.NANOS,
        ChronoUnit.SECONDS,
        ValueRange.of(0, 999_999_999),
    )
    NANO_OF_DAY = (
        "NanoOfDay",
        ChronoUnit.NANOS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 86400 * 1_000_000_000 - 1),
    )
    MICRO_OF_SECOND = (
        "MicroOfSecond",
        ChronoUnit.MICROS,
        ChronoUnit.SECONDS,
        ValueRange.of(0, 999_999),
    )
    MICRO_OF_DAY = (
        "MicroOfDay",
        ChronoUnit.MICROS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 86400 * 1_000_000 - 1),
    )
    MILLI_OF_SECOND = (
        "MilliOfSecond",
        ChronoUnit.MILLIS,
        ChronoUnit.SECONDS,
        ValueRange.of(0, 999),
    )
    MILLI_OF_DAY = (
        "MilliOfDay",
        ChronoUnit.MILLIS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 86400 * 1000 - 1),
    )
    SECOND_OF_MINUTE = (
        "SecondOfMinute",
        ChronoUnit.SECONDS,
        ChronoUnit.MINUTES,
        ValueRange.of(0, 59),
    )
    SECOND_OF_DAY = (
        "SecondOfDay",
        ChronoUnit.SECONDS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 86400 - 1),
    )
    MINUTE_OF_HOUR = (
        "MinuteOfHour",
        ChronoUnit.MINUTES,
        ChronoUnit.HOURS,
        ValueRange.of(0, 59),
    )
    MINUTE_OF_DAY = (
        "MinuteOfDay",
        ChronoUnit.MINUTES,
        ChronoUnit.DAYS,
        ValueRange.of(0, 24 * 60 - 1),
    )
    HOUR_OF_AMPM = (
        "HourOfAmPm",
        ChronoUnit.HOURS,
        ChronoUnit.HALF_DAYS,
        ValueRange.of(0, 11),
    )
    CLOCK_HOUR_OF_AMPM = (
        "ClockHourOfAmPm",
        ChronoUnit.HOURS,
        ChronoUnit.HALF_DAYS,
        ValueRange.of(1, 12),
    )
    HOUR_OF_DAY = (
        "HourOfDay",
        ChronoUnit.HOURS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 23),
    )
    CLOCK_HOUR_OF_DAY = (
        "ClockHourOfDay",
        ChronoUnit.HOURS,
        ChronoUnit.DAYS,
        ValueRange.of(1, 24),
    )
    AMPM_OF_DAY = (
        "AmPmOfDay",
        ChronoUnit.HALF_DAYS,
        ChronoUnit.DAYS,
        ValueRange.of(0, 1),
    )
    DAY_OF_WEEK = (
        "DayOfWeek",
        ChronoUnit.DAYS,
        ChronoUnit.WEEKS,
        ValueRange.of(1, 7),
    )
    ALIGNED_DAY_OF_WEEK_IN_MONTH = (
        "AlignedDayOfWeekInMonth",
        ChronoUnit.DAYS,
        ChronoUnit.WEEKS,
        ValueRange.of(1, 7),
    )
    ALIGNED_DAY_OF_WEEK_IN_YEAR = (
        "AlignedDayOfWeekInYear",
        ChronoUnit.DAYS,
        ChronoUnit.WEEKS,
        ValueRange.of(1, 7),
    )
    DAY_OF_MONTH = (
        "DayOfMonth",
        ChronoUnit.DAYS,
        ChronoUnit.MONTHS,
        ValueRange.of(1, 28, 31),
    )
    DAY_OF_YEAR = (
        "DayOfYear",
        ChronoUnit.DAYS,
        ChronoUnit.YEARS,
        ValueRange.of(1, 365, 366),
    )
    EPOCH_DAY = (
        "EpochDay",
        ChronoUnit.DAYS,
        ChronoUnit.FOREVER,
        ValueRange.of(
            math.floor(YEAR_MIN_VALUE * 365.25), math.floor(YEAR_MAX_VALUE * 365.25)
        ),
    )
    ALIGNED_WEEK_OF_MONTH = (
        "AlignedWeekOfMonth",
        ChronoUnit.WEEKS,
        ChronoUnit.MONTHS,
        ValueRange.of(1, 4, 5),
    )
    ALIGNED_WEEK_OF_YEAR = (
        "AlignedWeekOfYear",
        ChronoUnit.WEEKS,
        ChronoUnit.YEARS,
        ValueRange.of(1, 53),
    )
    MONTH_OF_YEAR = (
        "MonthOfYear",
        ChronoUnit.MONTHS,
        ChronoUnit.YEARS,
        ValueRange.of(1, 12),
    )
    PROLEPTIC_MONTH = (
        "ProlepticMonth",
        ChronoUnit.MONTHS,
        ChronoUnit.FOREVER,
        ValueRange.of(YEAR_MIN_VALUE * 12, YEAR_MAX_VALUE * 12 + 11),
    )
    YEAR_OF_ERA = (
        "YearOfEra",
        ChronoUnit.YEARS,
        ChronoUnit.FOREVER,
        ValueRange.of(1, YEAR_MAX_VALUE, YEAR_MAX_VALUE + 1),
    )
    YEAR = (
        "Year",
        ChronoUnit.YEARS,
        ChronoUnit.FOREVER,
        ValueRange.of(YEAR_MIN_VALUE, YEAR_MAX_VALUE),
    )
    ERA = (
        "Era",
        ChronoUnit.ERAS,
        ChronoUnit.FOREVER,
        ValueRange.of(0, 1),
    )
    INSTANT_SECONDS = (
        "InstantSeconds",
        ChronoUnit.SECONDS,
        ChronoUnit.FOREVER,
        ValueRange.of(LONG_MIN_VALUE, LONG_MAX_VALUE),
    )
    OFFSET_SECONDS = (
        "OffsetSeconds",
        ChronoUnit.SECONDS,
        ChronoUnit.FOREVER,
        ValueRange.of(-18 * 3600, 18 * 3600),
    )

    def __init__(
        self,
        display_name: str,
        base_unit: ChronoUnit,
        range_unit: ChronoUnit,
        value_range: ValueRange,
    ) -> None:
        self._display_name = display_name
        self._base_unit = base_unit
        self._range_unit = range_unit
        self._range = value_range

    @classmethod
    def by_name(cls, name: str) -> ChronoField | None:
        """Return the field with the display name e.g. 'DayOfMonth', or None."""
        return _FIELDS_BY_NAME.get(name)

    @property
    def display_name(self) -> str:
        """Return the name of the field e.g. 'DayOfMonth'."""
        return self._display_name

    @property
    def base_unit(self) -> ChronoUnit:
        """Return the unit that the field is measured in."""
        return self._base_unit

    @property
    def range_unit(self) -> ChronoUnit:
        """Return the range that the field is bound by."""
        return self._range_unit

    def range(self) -> ValueRange:
        """Return the range of valid values in the ISO-8601 calendar system."""
        return self._range

    def range_refined_by(self, temporal: TemporalAccessor) -> ValueRange:
        """Return the range of valid values using the temporal value for context.

        The temporal value, not the field, knows the calendar specific
        refinement e.g. the length of the month for `DAY_OF_MONTH`.
        """
        return temporal.range(self)

    def check_valid_value(self, value: int) -> int:
        """Return the value if within the range of the field, or raise an error."""
        return self._range.check_valid_value(value, self)

    def check_valid_int_value(self, value: int) -> int:
        """Return the value if within the range of the field and a 32-bit int."""
        return self._range.check_valid_int_value(value, self)

    def get_from(self, temporal: TemporalAccessor) -> int:
        """Return the value of this field from the temporal value."""
        return temporal.get_long(self)

    def adjust_into(self, temporal: Temporal, new_value: int) -> Temporal:
        """Return a copy of the temporal value with this field set."""
        return temporal.with_field(self, new_value)

    def is_supported_by(self, temporal: TemporalAccessor) -> bool:
        """Return True if the temporal value supports this field."""
        return temporal.is_supported(self)

    def is_date_based(self) -> bool:
        """Return True if this field represents a component of a date."""
        return self in _DATE_BASED_FIELDS

    def is_time_based(self) -> bool:
        """Return True if this field represents a component of a time."""
        return self in _TIME_BASED_FIELDS

    def __str__(self) -> str:
        """Return the display name of the field."""
        return self._display_name


_FIELDS_BY_NAME: dict[str, ChronoField] = {
    field.display_name: field for field in ChronoField
}

_DATE_BASED_FIELDS = frozenset(
    {
        ChronoField.DAY_OF_WEEK,
        ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH,
        ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR,
        ChronoField.DAY_OF_MONTH,
        ChronoField.DAY_OF_YEAR,
        ChronoField.EPOCH_DAY,
        ChronoField.ALIGNED_WEEK_OF_MONTH,
        ChronoField.ALIGNED_WEEK_OF_YEAR,
        ChronoField.MONTH_OF_YEAR,
        ChronoField.PROLEPTIC_MONTH,
        ChronoField.YEAR_OF_ERA,
        ChronoField.YEAR,
        ChronoField.ERA,
    }
)

_TIME_BASED_FIELDS = frozenset(
    {
        ChronoField.NANO_OF_SECOND,
        ChronoField.NANO_OF_DAY,
        ChronoField.MICRO_OF_SECOND,
        ChronoField.MICRO_OF_DAY,
        ChronoField.MILLI_OF_SECOND,
        ChronoField.MILLI_OF_DAY,
        ChronoField.SECOND_OF_MINUTE,
        ChronoField.SECOND_OF_DAY,
        ChronoField.MINUTE_OF_HOUR,
        ChronoField.MINUTE_OF_DAY,
        ChronoField.HOUR_OF_AMPM,
        ChronoField.CLOCK_HOUR_OF_AMPM,
        ChronoField.HOUR_OF_DAY,
        ChronoField.CLOCK_HOUR_OF_DAY,
        ChronoField.AMPM_OF_DAY,
    }
)
