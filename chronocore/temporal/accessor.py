"""Contracts between fields, units and the date/time values they operate on.

Fields and units never know about concrete date/time types. Instead a field
calls back into the value it was handed, e.g. `ChronoField.get_from(value)`
calls `value.get_long(field)`, and the value answers for the fields it
supports. A date/time type implements these protocols once and every field
and unit works with it.

The protocols here are structural (`typing.Protocol`), so implementations do
not need to inherit from them. `DefaultTemporalAccessor` provides the
default behavior for `range` and `get` that most implementations share.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, Self, Union

from chronocore.exceptions import UnsupportedTemporalTypeError

from .field import ChronoField

if TYPE_CHECKING:
    from .value_range import ValueRange

__all__ = [
    "TemporalAccessor",
    "Temporal",
    "TemporalField",
    "TemporalUnit",
    "DefaultTemporalAccessor",
]


class TemporalField(Protocol):
    """A field of date-time, such as month-of-year or hour-of-minute."""

    @property
    def display_name(self) -> str:
        """Return the name of the field."""

    @property
    def base_unit(self) -> TemporalUnit:
        """Return the unit that the field is measured in."""

    @property
    def range_unit(self) -> TemporalUnit:
        """Return the range that the field is bound by."""

    def range(self) -> ValueRange:
        """Return the range of valid values for the field."""

    def range_refined_by(self, temporal: TemporalAccessor) -> ValueRange:
        """Return the range of valid values using the temporal value for context."""

    def get_from(self, temporal: TemporalAccessor) -> int:
        """Return the value of this field from the temporal value."""

    def adjust_into(self, temporal: Temporal, new_value: int) -> Temporal:
        """Return a copy of the temporal value with this field set."""

    def is_supported_by(self, temporal: TemporalAccessor) -> bool:
        """Return True if the temporal value supports this field."""

    def is_date_based(self) -> bool:
        """Return True if this field represents a component of a date."""

    def is_time_based(self) -> bool:
        """Return True if this field represents a component of a time."""


class TemporalUnit(Protocol):
    """A unit of date-time, such as days or hours."""

    @property
    def display_name(self) -> str:
        """Return the name of the unit."""

    def is_duration_estimated(self) -> bool:
        """Return True if the duration of the unit is an estimate."""

    def is_date_based(self) -> bool:
        """Return True if the unit is a date unit."""

    def is_time_based(self) -> bool:
        """Return True if the unit is a time unit."""

    def is_supported_by(self, temporal: Temporal) -> bool:
        """Return True if the temporal value supports this unit."""

    def add_to(self, temporal: Temporal, amount: int) -> Temporal:
        """Return a copy of the temporal value with the amount added."""

    def between(self, start: Temporal, end: Temporal) -> int:
        """Return the amount of this unit between two temporal values."""


FieldOrUnit = Union[TemporalField, TemporalUnit]


class TemporalAccessor(Protocol):
    """Read-only access to the fields of a date/time value."""

    def is_supported(self, field: FieldOrUnit) -> bool:
        """Return True if the field (or unit) is supported by this value."""

    def range(self, field: TemporalField) -> ValueRange:
        """Return the range of valid values for the field, refined by this value.

        Raises UnsupportedTemporalTypeError if the field is not supported.
        """

    def get_long(self, field: TemporalField) -> int:
        """Return the value of the field.

        Raises UnsupportedTemporalTypeError if the field is not supported.
        """


class Temporal(TemporalAccessor, Protocol):
    """A date/time value that can be adjusted by fields and units."""

    def with_field(self, field: TemporalField, new_value: int) -> Self:
        """Return a copy of this value with the field set to a new value."""

    def plus(self, amount: int, unit: TemporalUnit) -> Self:
        """Return a copy of this value with the amount of the unit added."""

    def until(self, end: Self, unit: TemporalUnit) -> int:
        """Return the amount of the unit between this value and the end value."""


class DefaultTemporalAccessor(ABC):
    """Default implementations of `range` and `get` for temporal values."""

    @abstractmethod
    def is_supported(self, field: Any) -> bool:
        """Return True if the field (or unit) is supported by this value."""

    @abstractmethod
    def get_long(self, field: Any) -> int:
        """Return the value of the field."""

    def range(self, field: TemporalField) -> ValueRange:
        """Return the static range for a supported field.

        Fields outside the standard set are asked to refine the range.
        """
        if isinstance(field, ChronoField):
            if self.is_supported(field):
                return field.range()
            raise UnsupportedTemporalTypeError(f"Unsupported field: {field}")
        return field.range_refined_by(self)

    def get(self, field: TemporalField) -> int:
        """Return the value of the field as a validated 32-bit int."""
        valid_range = self.range(field)
        if not valid_range.is_int_value:
            raise UnsupportedTemporalTypeError(
                f"Invalid field {field} for get() method, use get_long() instead"
            )
        return valid_range.check_valid_int_value(self.get_long(field), field)
