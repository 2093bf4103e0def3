"""Exceptions for chronocore library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .temporal.value_range import ValueRange
    from .zone.transition import ZoneOffsetTransition


class DateTimeError(Exception):
    """Base exception for all chronocore errors."""


class DateTimeRangeError(DateTimeError, ValueError):
    """Exception raised when a value is outside the valid range of a field.

    The 'field' attribute names the field being validated (if known), the
    'value' attribute holds the rejected value and 'valid_range' is the
    range it was checked against.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Any = None,
        value: int | None = None,
        valid_range: ValueRange | None = None,
    ) -> None:
        """Initialize the DateTimeRangeError with a message."""
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        self.valid_range = valid_range


class InvalidIntValueError(DateTimeRangeError):
    """Exception raised when a value can not be represented as a 32-bit int."""


class UnsupportedTemporalTypeError(DateTimeError):
    """Exception raised when a field or unit is not supported by a temporal value.

    This is distinct from a range violation: the value may be fine, but the
    temporal type has no meaning for the field at all (e.g. asking a zone
    offset for its day of month).
    """


class ArithmeticOverflowError(DateTimeError, ArithmeticError):
    """Exception raised when a calculation exceeds the representable bounds."""


class ZoneRulesError(DateTimeError):
    """Exception raised when working with zone rules or their providers."""


class ZoneNotFoundError(ZoneRulesError):
    """Exception raised when no provider has rules for a zone id."""


class ZoneRulesConflictError(ZoneRulesError):
    """Exception raised when a provider registers an id owned by another provider."""


class OffsetResolutionError(DateTimeError):
    """Exception raised when a local date-time has no single valid offset.

    The 'transition' attribute holds the transition responsible, so that
    callers may apply their own resolution policy and retry.
    """

    def __init__(self, message: str, *, transition: ZoneOffsetTransition) -> None:
        """Initialize the OffsetResolutionError with a message."""
        super().__init__(message)
        self.message = message
        self.transition = transition


class SkippedTimeError(OffsetResolutionError):
    """Exception raised for a local date-time inside a gap."""


class RepeatedTimeError(OffsetResolutionError):
    """Exception raised for a local date-time inside an overlap."""
