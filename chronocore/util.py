"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime

from .exceptions import ArithmeticOverflowError

__all__ = [
    "epoch_second",
    "instant_of_epoch_second",
    "local_epoch_second",
    "local_date_time_of_epoch_second",
    "require_instant",
    "require_local",
]

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.UTC)
LOCAL_EPOCH = datetime.datetime(1970, 1, 1)
_ONE_SECOND = datetime.timedelta(seconds=1)


def require_instant(value: datetime.datetime) -> datetime.datetime:
    """Verify the value is an instant, i.e. a timezone aware datetime."""
    if not isinstance(value, datetime.datetime) or value.utcoffset() is None:
        raise ValueError(f"Expected a timezone aware datetime instant: {value!r}")
    return value


def require_local(value: datetime.datetime) -> datetime.datetime:
    """Verify the value is a local date-time, i.e. a naive datetime."""
    if not isinstance(value, datetime.datetime) or value.tzinfo is not None:
        raise ValueError(f"Expected a local (naive) datetime: {value!r}")
    return value


def epoch_second(instant: datetime.datetime) -> int:
    """Return the seconds since the epoch of an instant, rounded down."""
    return (require_instant(instant) - EPOCH) // _ONE_SECOND


def local_epoch_second(local: datetime.datetime) -> int:
    """Return the seconds since the local epoch of a local date-time, rounded down."""
    return (require_local(local) - LOCAL_EPOCH) // _ONE_SECOND


def instant_of_epoch_second(seconds: int) -> datetime.datetime:
    """Return the UTC instant for the seconds since the epoch."""
    try:
        return EPOCH + datetime.timedelta(seconds=seconds)
    except OverflowError as err:
        raise ArithmeticOverflowError(
            f"Epoch second {seconds} is outside the supported range of datetime"
        ) from err


def local_date_time_of_epoch_second(seconds: int, offset_seconds: int) -> datetime.datetime:
    """Return the local date-time for an epoch second observed at a UTC offset."""
    try:
        return LOCAL_EPOCH + datetime.timedelta(seconds=seconds + offset_seconds)
    except OverflowError as err:
        raise ArithmeticOverflowError(
            f"Epoch second {seconds} is outside the supported range of datetime"
        ) from err
