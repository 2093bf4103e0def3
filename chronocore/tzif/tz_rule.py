"""Library for parsing POSIX TZ rules found in the footer of TZif files.

TZ supports these two formats

No DST: std offset
  - std: Name of the timezone
  - offset: Time added to local time to get UTC
  Example: EST+5

DST: std offset dst [offset],start[/time],end[/time]
  - dst: Name of the Daylight savings time timezone
  - offset: Defaults to 1 hour ahead of STD offset if not specified
  - start & end: Time period when DST is in effect. The start/end have
    the following formats:
      Jn: A julian day between 1 and 365 (Feb 29th never counted)
      Mm.w.d:
          m: Month between 1 and 12
          d: Between 0 (Sunday) and 6 (Saturday)
          w: Between 1 and 5. Week 1 is first week d occurs
      The time field is in hh:mm:ss. The hour can be 167 to -167.

A parsed rule is converted to the recurring `ZoneOffsetTransitionRule`s used
to project transitions after the last transition in the file.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from chronocore.zone.offset import ZoneOffset
from chronocore.zone.transition_rule import TimeDefinition, ZoneOffsetTransitionRule

__all__ = [
    "Rule",
    "RuleDate",
    "RuleDay",
    "RuleOccurrence",
    "parse_tz_rule",
]

_ZERO = datetime.timedelta(seconds=0)
_DEFAULT_TIME_DELTA = datetime.timedelta(hours=2)
_ONE_HOUR = datetime.timedelta(hours=1)

# Julian days never count Feb 29th so are resolved against a non-leap year
_NON_LEAP_YEAR = 2001

# Week of month meaning the last occurrence in the month
_LAST_WEEK = 5


def _parse_time(values: dict[str, Any]) -> datetime.timedelta | None:
    """Convert an offset from [+/-]hh[:mm[:ss]] to a timedelta.

    The dict expects fields of hour, minutes, seconds from the regex match.
    """
    if (hour := values["hour"]) is None:
        return None
    sign = 1
    if hour.startswith("+"):
        hour = hour[1:]
    elif hour.startswith("-"):
        sign = -1
        hour = hour[1:]
    minutes = values.get("minutes") or "0"
    seconds = values.get("seconds") or "0"
    return datetime.timedelta(
        seconds=sign * (int(hour) * 60 * 60 + int(minutes) * 60 + int(seconds))
    )


@dataclass
class RuleDay:
    """A date referenced in a timezone rule for a julian day."""

    day_of_year: int
    """A day of the year between 1 and 365, leap days never supported."""

    time: datetime.timedelta
    """Offset of time in current local time when the rule goes into effect, default of 02:00:00."""

    def to_transition_rule(
        self,
        standard_offset: ZoneOffset,
        offset_before: ZoneOffset,
        offset_after: ZoneOffset,
    ) -> ZoneOffsetTransitionRule:
        """Return a rule creating a transition on this day each year."""
        if not 1 <= self.day_of_year <= 365:
            raise ValueError(
                f"Julian day must be between 1 and 365: {self.day_of_year}"
            )
        date = datetime.date(_NON_LEAP_YEAR, 1, 1) + datetime.timedelta(
            days=self.day_of_year - 1
        )
        return ZoneOffsetTransitionRule(
            month=date.month,
            day_of_month_indicator=date.day,
            day_of_week=None,
            time=self.time,
            time_definition=TimeDefinition.WALL,
            standard_offset=standard_offset,
            offset_before=offset_before,
            offset_after=offset_after,
        )


@dataclass
class RuleDate:
    """A date referenced in a timezone rule."""

    month: int
    """A month between 1 and 12."""

    day_of_week: int
    """A day of the week between 0 (Sunday) and 6 (Saturday)."""

    week_of_month: int
    """A week number of the month (1 to 5) based on the first occurrence of day_of_week."""

    time: datetime.timedelta
    """Offset of time in current local time when the rule goes into effect, default of 02:00:00."""

    @property
    def iso_day_of_week(self) -> int:
        """Return the ISO day of week, where 1 is Monday and 7 is Sunday."""
        return self.day_of_week or 7

    @property
    def day_of_month_indicator(self) -> int:
        """Return the first day of the month the week may start, or -1 for the last week."""
        if self.week_of_month == _LAST_WEEK:
            return -1
        return 1 + 7 * (self.week_of_month - 1)

    def to_transition_rule(
        self,
        standard_offset: ZoneOffset,
        offset_before: ZoneOffset,
        offset_after: ZoneOffset,
    ) -> ZoneOffsetTransitionRule:
        """Return a rule creating a transition on this date each year."""
        if not 1 <= self.week_of_month <= _LAST_WEEK:
            raise ValueError(
                f"Week of month must be between 1 and 5: {self.week_of_month}"
            )
        if not 0 <= self.day_of_week <= 6:
            raise ValueError(f"Day of week must be between 0 and 6: {self.day_of_week}")
        return ZoneOffsetTransitionRule(
            month=self.month,
            day_of_month_indicator=self.day_of_month_indicator,
            day_of_week=self.iso_day_of_week,
            time=self.time,
            time_definition=TimeDefinition.WALL,
            standard_offset=standard_offset,
            offset_before=offset_before,
            offset_after=offset_after,
        )


@dataclass
class RuleOccurrence:
    """A TimeZone rule occurrence."""

    name: str
    """The name of the timezone occurrence e.g. EST."""

    offset: datetime.timedelta
    """UTC offset for this timezone occurrence (not time added to local time)."""

    def __post_init__(self) -> None:
        """Convert the offset from time added to local time to get UTC to a UTC offset."""
        self.offset = _ZERO - self.offset

    @property
    def zone_offset(self) -> ZoneOffset:
        """Return the UTC offset as a ZoneOffset."""
        return ZoneOffset.of_timedelta(self.offset)


@dataclass
class Rule:
    """A rule for evaluating future timezone transitions."""

    std: RuleOccurrence
    """An occurrence of a timezone transition for standard time."""

    dst: Optional[RuleOccurrence] = None
    """An occurrence of a timezone transition for daylight savings time."""

    dst_start: Union[RuleDate, RuleDay, None] = None
    """Describes when dst goes into effect."""

    dst_end: Union[RuleDate, RuleDay, None] = None
    """Describes when dst ends (std starts)."""

    def transition_rules(self) -> list[ZoneOffsetTransitionRule]:
        """Return the recurring rules for the start and end of daylight savings time.

        A rule without daylight savings time, or without dates for it, has no
        recurring transitions.
        """
        if self.dst is None or self.dst_start is None or self.dst_end is None:
            return []
        std = self.std.zone_offset
        dst = self.dst.zone_offset
        if std == dst:
            return []
        return [
            self.dst_start.to_transition_rule(std, std, dst),
            self.dst_end.to_transition_rule(std, dst, std),
        ]


# Regexp for parsing the TZ string
_OFFSET_RE_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<name>(\<[+\-]?\d+\>|[a-zA-Z]+))"  # name
    r"((?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"  # offset
)
_START_END_RE_PATTERN = re.compile(
    # days in either julian (J prefix) or month.week.day (M prefix) format
    r",(J(?P<day_of_year>\d+)|M(?P<month>\d{1,2})\.(?P<week_of_month>\d)\.(?P<day_of_week>\d))"
    # time
    r"(\/(?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"
)


def _rule_occurrence_from_match(
    match: re.Match[str], default: datetime.timedelta = _ZERO
) -> RuleOccurrence:
    """Create a rule occurrence from a regex match, using the default if no offset."""
    offset = _parse_time(match.groupdict())
    return RuleOccurrence(
        name=match.group("name"), offset=default if offset is None else offset
    )


def _rule_date_from_match(match: re.Match[str]) -> Union[RuleDay, RuleDate]:
    """Create a rule date from a regex match."""
    if (time := _parse_time(match.groupdict())) is None:
        time = _DEFAULT_TIME_DELTA
    if match["day_of_year"] is not None:
        return RuleDay(
            day_of_year=int(match.group("day_of_year")),
            time=time,
        )
    return RuleDate(
        month=int(match.group("month")),
        week_of_month=int(match.group("week_of_month")),
        day_of_week=int(match.group("day_of_week")),
        time=time,
    )


def parse_tz_rule(tz_str: str) -> Rule:
    """Parse the TZ string into a Rule object."""
    buffer = tz_str
    if (std_match := _OFFSET_RE_PATTERN.match(buffer)) is None:
        raise ValueError(f"Unable to parse TZ string: {tz_str}")
    buffer = buffer[std_match.end() :]
    if (dst_match := _OFFSET_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_match.end() :]
    if (std_start := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[std_start.end() :]
    if (std_end := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[std_end.end() :]
    if (std_start is None) != (std_end is None):
        raise ValueError(
            f"Unable to parse TZ string, should have both or neither start and end dates: {tz_str}"
        )
    if buffer:
        raise ValueError(
            f"Unable to parse TZ string, unexpected trailing data: {tz_str}"
        )
    std = _rule_occurrence_from_match(std_match)
    dst = None
    if dst_match is not None:
        # An omitted dst offset is one hour ahead of standard time
        dst = _rule_occurrence_from_match(dst_match, default=-std.offset - _ONE_HOUR)
    return Rule(
        std=std,
        dst=dst,
        dst_start=_rule_date_from_match(std_start) if std_start else None,
        dst_end=_rule_date_from_match(std_end) if std_end else None,
    )
