"""Library for date-time units, fields and their valid ranges."""

from .accessor import (
    DefaultTemporalAccessor,
    Temporal,
    TemporalAccessor,
    TemporalField,
    TemporalUnit,
)
from .field import ChronoField
from .unit import ChronoUnit
from .value_range import ValueRange

__all__ = [
    "ChronoField",
    "ChronoUnit",
    "DefaultTemporalAccessor",
    "Temporal",
    "TemporalAccessor",
    "TemporalField",
    "TemporalUnit",
    "ValueRange",
]
