"""Library for a fixed offset from UTC such as +02:00."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, ClassVar

from chronocore.exceptions import DateTimeRangeError, UnsupportedTemporalTypeError
from chronocore.temporal import ChronoField, ChronoUnit, DefaultTemporalAccessor
from chronocore.temporal.const import SECONDS_PER_HOUR, SECONDS_PER_MINUTE

__all__ = [
    "ZoneOffset",
]

_MAX_HOURS = 18


@dataclass(frozen=True, order=True)
class ZoneOffset(DefaultTemporalAccessor):
    """A time-zone offset from UTC in whole seconds, between -18:00 and +18:00."""

    total_seconds: int
    """Number of seconds added to UTC to determine local time."""

    UTC: ClassVar[ZoneOffset]
    MIN: ClassVar[ZoneOffset]
    MAX: ClassVar[ZoneOffset]

    def __post_init__(self) -> None:
        """Validate the offset is within the supported range."""
        if not isinstance(self.total_seconds, int) or isinstance(
            self.total_seconds, bool
        ):
            raise TypeError(
                f"Offset seconds must be an int, got {self.total_seconds!r}"
            )
        ChronoField.OFFSET_SECONDS.check_valid_int_value(self.total_seconds)

    @classmethod
    def of_total_seconds(cls, total_seconds: int) -> ZoneOffset:
        """Create an offset from a number of seconds."""
        return cls(total_seconds)

    @classmethod
    def of_hours_minutes_seconds(
        cls, hours: int, minutes: int = 0, seconds: int = 0
    ) -> ZoneOffset:
        """Create an offset from hours, minutes and seconds which share a sign."""
        if not -_MAX_HOURS <= hours <= _MAX_HOURS:
            raise DateTimeRangeError(
                f"Zone offset hours not in valid range: value {hours} is not in "
                "the range -18 to 18",
                value=hours,
            )
        if hours > 0 and (minutes < 0 or seconds < 0):
            raise DateTimeRangeError(
                "Zone offset minutes and seconds must be positive because hours "
                "is positive"
            )
        if hours < 0 and (minutes > 0 or seconds > 0):
            raise DateTimeRangeError(
                "Zone offset minutes and seconds must be negative because hours "
                "is negative"
            )
        if (minutes > 0 and seconds < 0) or (minutes < 0 and seconds > 0):
            raise DateTimeRangeError(
                "Zone offset minutes and seconds must have the same sign"
            )
        if abs(minutes) > 59:
            raise DateTimeRangeError(
                f"Zone offset minutes not in valid range: abs(value) {abs(minutes)} "
                "is not in the range 0 to 59",
                value=minutes,
            )
        if abs(seconds) > 59:
            raise DateTimeRangeError(
                f"Zone offset seconds not in valid range: abs(value) {abs(seconds)} "
                "is not in the range 0 to 59",
                value=seconds,
            )
        if abs(hours) == _MAX_HOURS and (minutes or seconds):
            raise DateTimeRangeError(
                "Zone offset not in valid range: -18:00 to +18:00"
            )
        return cls(hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds)

    @classmethod
    def of_timedelta(cls, value: datetime.timedelta) -> ZoneOffset:
        """Create an offset from a timedelta of whole seconds."""
        if value.microseconds:
            raise ValueError(f"Zone offset must be whole seconds: {value}")
        return cls(value.days * 86400 + value.seconds)

    def as_timedelta(self) -> datetime.timedelta:
        """Return the offset as a timedelta."""
        return datetime.timedelta(seconds=self.total_seconds)

    @property
    def id(self) -> str:
        """Return the normalized offset id e.g. 'Z', '+02:00' or '-04:56:02'."""
        if self.total_seconds == 0:
            return "Z"
        sign = "-" if self.total_seconds < 0 else "+"
        absolute = abs(self.total_seconds)
        hours, remainder = divmod(absolute, SECONDS_PER_HOUR)
        minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
        result = f"{sign}{hours:02}:{minutes:02}"
        if seconds:
            result += f":{seconds:02}"
        return result

    def is_supported(self, field: Any) -> bool:
        """Return True only for the offset seconds field."""
        if isinstance(field, ChronoField):
            return field is ChronoField.OFFSET_SECONDS
        if isinstance(field, ChronoUnit):
            return False
        return field is not None and bool(field.is_supported_by(self))

    def get_long(self, field: Any) -> int:
        """Return the value of the field from this offset."""
        if field is ChronoField.OFFSET_SECONDS:
            return self.total_seconds
        if isinstance(field, ChronoField):
            raise UnsupportedTemporalTypeError(f"Unsupported field: {field}")
        return field.get_from(self)

    def __str__(self) -> str:
        """Return the offset id."""
        return self.id

    def __repr__(self) -> str:
        """Return a debug representation of the offset."""
        return f"ZoneOffset({self.id})"


ZoneOffset.UTC = ZoneOffset(0)
ZoneOffset.MIN = ZoneOffset(-_MAX_HOURS * SECONDS_PER_HOUR)
ZoneOffset.MAX = ZoneOffset(_MAX_HOURS * SECONDS_PER_HOUR)
