"""Test fixtures."""

from __future__ import annotations

import calendar
import dataclasses
import datetime
from typing import Any

import pytest

from chronocore.exceptions import UnsupportedTemporalTypeError
from chronocore.temporal import ChronoField, ChronoUnit, DefaultTemporalAccessor, ValueRange
from chronocore.zone import (
    TimeDefinition,
    ZoneOffset,
    ZoneOffsetTransition,
    ZoneOffsetTransitionRule,
    ZoneRules,
)

EST = ZoneOffset.of_hours_minutes_seconds(-5)
EDT = ZoneOffset.of_hours_minutes_seconds(-4)

_EPOCH_ORDINAL = datetime.date(1970, 1, 1).toordinal()


@dataclasses.dataclass(frozen=True)
class FakeDate(DefaultTemporalAccessor):
    """A minimal date type used to exercise fields and units."""

    value: datetime.date

    SUPPORTED_FIELDS = (
        ChronoField.DAY_OF_WEEK,
        ChronoField.DAY_OF_MONTH,
        ChronoField.DAY_OF_YEAR,
        ChronoField.MONTH_OF_YEAR,
        ChronoField.YEAR,
        ChronoField.EPOCH_DAY,
    )

    def is_supported(self, field: Any) -> bool:
        if isinstance(field, ChronoField):
            return field in self.SUPPORTED_FIELDS
        if isinstance(field, ChronoUnit):
            return field in (ChronoUnit.DAYS, ChronoUnit.WEEKS)
        return field is not None and field.is_supported_by(self)

    def range(self, field: Any) -> ValueRange:
        if field is ChronoField.DAY_OF_MONTH:
            days = calendar.monthrange(self.value.year, self.value.month)[1]
            return ValueRange.of(1, days)
        if field is ChronoField.DAY_OF_YEAR:
            return ValueRange.of(1, 366 if calendar.isleap(self.value.year) else 365)
        return super().range(field)

    def get_long(self, field: Any) -> int:
        if field is ChronoField.DAY_OF_WEEK:
            return self.value.isoweekday()
        if field is ChronoField.DAY_OF_MONTH:
            return self.value.day
        if field is ChronoField.DAY_OF_YEAR:
            return self.value.timetuple().tm_yday
        if field is ChronoField.MONTH_OF_YEAR:
            return self.value.month
        if field is ChronoField.YEAR:
            return self.value.year
        if field is ChronoField.EPOCH_DAY:
            return self.value.toordinal() - _EPOCH_ORDINAL
        raise UnsupportedTemporalTypeError(f"Unsupported field: {field}")

    def with_field(self, field: Any, new_value: int) -> FakeDate:
        field.check_valid_value(new_value)
        if field is ChronoField.DAY_OF_MONTH:
            return FakeDate(self.value.replace(day=new_value))
        if field is ChronoField.MONTH_OF_YEAR:
            return FakeDate(self.value.replace(month=new_value))
        if field is ChronoField.YEAR:
            return FakeDate(self.value.replace(year=new_value))
        raise UnsupportedTemporalTypeError(f"Unsupported field: {field}")

    def plus(self, amount: int, unit: Any) -> FakeDate:
        if unit is ChronoUnit.DAYS:
            return FakeDate(self.value + datetime.timedelta(days=amount))
        if unit is ChronoUnit.WEEKS:
            return FakeDate(self.value + datetime.timedelta(weeks=amount))
        raise UnsupportedTemporalTypeError(f"Unsupported unit: {unit}")

    def until(self, end: FakeDate, unit: Any) -> int:
        days = (end.value - self.value).days
        if unit is ChronoUnit.DAYS:
            return days
        if unit is ChronoUnit.WEEKS:
            return int(days / 7)
        raise UnsupportedTemporalTypeError(f"Unsupported unit: {unit}")


@pytest.fixture
def fake_date() -> FakeDate:
    """Fixture for a date in a leap year."""
    return FakeDate(datetime.date(2024, 2, 10))


def _us_transition_rules() -> list[ZoneOffsetTransitionRule]:
    """Return the rules for daylight savings time in the US since 2007."""
    return [
        # Second Sunday in March
        ZoneOffsetTransitionRule(
            month=3,
            day_of_month_indicator=8,
            day_of_week=7,
            time=datetime.timedelta(hours=2),
            time_definition=TimeDefinition.WALL,
            standard_offset=EST,
            offset_before=EST,
            offset_after=EDT,
        ),
        # First Sunday in November
        ZoneOffsetTransitionRule(
            month=11,
            day_of_month_indicator=1,
            day_of_week=7,
            time=datetime.timedelta(hours=2),
            time_definition=TimeDefinition.WALL,
            standard_offset=EST,
            offset_before=EDT,
            offset_after=EST,
        ),
    ]


@pytest.fixture
def us_eastern_rules() -> ZoneRules:
    """Fixture for rules with a 2022 history followed by the recurring US rules."""
    return ZoneRules.of(
        EST,
        EST,
        [],
        [
            ZoneOffsetTransition.of(datetime.datetime(2022, 3, 13, 2, 0, 0), EST, EDT),
            ZoneOffsetTransition.of(datetime.datetime(2022, 11, 6, 2, 0, 0), EDT, EST),
        ],
        _us_transition_rules(),
    )


@pytest.fixture
def us_rules_only() -> ZoneRules:
    """Fixture for rules with no history that apply the US rules in all years."""
    return ZoneRules.of(EST, EST, [], [], _us_transition_rules())


@pytest.fixture
def us_transition_rules() -> list[ZoneOffsetTransitionRule]:
    """Fixture for the US daylight savings rules."""
    return _us_transition_rules()
