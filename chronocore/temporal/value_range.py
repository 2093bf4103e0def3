"""Library for the range of valid values of a date-time field.

Most fields have a fixed range, e.g. hour of day is always 0 to 23. Some
fields have a range that depends on the rest of the date, e.g. day of
month is 1 to 28, 29, 30 or 31 depending on the month and year. A
`ValueRange` captures both cases with four bounds:

```
minimum <= largest_minimum <= smallest_maximum <= maximum
```

Validation always happens against the outer bounds (`minimum` and `maximum`).
A temporal value that knows its context can return a refined, fixed range
instead (see `ChronoField.range_refined_by`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chronocore.exceptions import DateTimeRangeError, InvalidIntValueError

from .const import INT_MAX_VALUE, INT_MIN_VALUE

__all__ = [
    "ValueRange",
]


@dataclass(frozen=True)
class ValueRange:
    """The range of valid values for a date-time field."""

    minimum: int
    """The smallest possible minimum value."""

    largest_minimum: int
    """The largest possible minimum value."""

    smallest_maximum: int
    """The smallest possible maximum value."""

    maximum: int
    """The largest possible maximum value."""

    def __post_init__(self) -> None:
        """Verify the ordering of the bounds."""
        if self.minimum > self.largest_minimum:
            raise ValueError(
                "Smallest minimum value must be less than largest minimum value: "
                f"{self.minimum} > {self.largest_minimum}"
            )
        if self.smallest_maximum > self.maximum:
            raise ValueError(
                "Smallest maximum value must be less than largest maximum value: "
                f"{self.smallest_maximum} > {self.maximum}"
            )
        if self.largest_minimum > self.smallest_maximum:
            raise ValueError(
                "Minimum value must be less than maximum value: "
                f"{self.largest_minimum} > {self.smallest_maximum}"
            )

    @classmethod
    def of(cls, *bounds: int) -> ValueRange:
        """Create a range from two, three or four bounds.

        - `of(min, max)`: a fixed range
        - `of(min, max_smallest, max_largest)`: a fixed minimum and variable maximum
        - `of(min_smallest, min_largest, max_smallest, max_largest)`: fully variable
        """
        if len(bounds) == 2:
            (minimum, maximum) = bounds
            return cls(minimum, minimum, maximum, maximum)
        if len(bounds) == 3:
            (minimum, smallest_maximum, maximum) = bounds
            return cls(minimum, minimum, smallest_maximum, maximum)
        if len(bounds) == 4:
            return cls(*bounds)
        raise TypeError(f"ValueRange.of expects 2 to 4 bounds, got {len(bounds)}")

    @property
    def is_fixed(self) -> bool:
        """Return True if the minimum and maximum values are fixed."""
        return (
            self.minimum == self.largest_minimum
            and self.smallest_maximum == self.maximum
        )

    @property
    def is_int_value(self) -> bool:
        """Return True if all values in the range fit in a 32-bit int."""
        return self.minimum >= INT_MIN_VALUE and self.maximum <= INT_MAX_VALUE

    def is_valid_value(self, value: int) -> bool:
        """Return True if the value is within the outer bounds of the range."""
        return self.minimum <= value <= self.maximum

    def is_valid_int_value(self, value: int) -> bool:
        """Return True if the value is valid and fits in a 32-bit int."""
        return INT_MIN_VALUE <= value <= INT_MAX_VALUE and self.is_valid_value(value)

    def check_valid_value(self, value: int, field: Any = None) -> int:
        """Return the value unchanged if valid, or raise DateTimeRangeError."""
        if not self.is_valid_value(value):
            raise DateTimeRangeError(
                self._invalid_message(field, value),
                field=field,
                value=value,
                valid_range=self,
            )
        return value

    def check_valid_int_value(self, value: int, field: Any = None) -> int:
        """Return the value unchanged if valid and an int, or raise an error.

        A value that can't be represented as a 32-bit int is reported with
        `InvalidIntValueError`, distinct from an ordinary range violation.
        """
        if not INT_MIN_VALUE <= value <= INT_MAX_VALUE:
            raise InvalidIntValueError(
                f"Invalid int value for {field or 'value'}: {value}",
                field=field,
                value=value,
                valid_range=self,
            )
        return self.check_valid_value(value, field)

    def _invalid_message(self, field: Any, value: int) -> str:
        if field is not None:
            return f"Invalid value for {field} (valid values {self}): {value}"
        return f"Invalid value (valid values {self}): {value}"

    def __str__(self) -> str:
        """Return the range as a string e.g. '1 - 28/31'."""
        parts = [str(self.minimum)]
        if self.minimum != self.largest_minimum:
            parts.append(f"/{self.largest_minimum}")
        parts.append(f" - {self.smallest_maximum}")
        if self.smallest_maximum != self.maximum:
            parts.append(f"/{self.maximum}")
        return "".join(parts)
