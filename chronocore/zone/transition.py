"""A transition between two offsets caused by a discontinuity in the local time-line.

A transition is a change in the offset of a zone at a specific instant. The
local time-line either jumps forward, creating a gap of local times that never
happen, or jumps backward, creating an overlap of local times that happen
twice:

- Gap: the offset after is larger than the offset before, typically the
  start of daylight savings time e.g. 02:00 to 03:00.
- Overlap: the offset after is smaller than the offset before, typically
  the end of daylight savings time e.g. 02:00 back to 01:00.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from chronocore.util import (
    instant_of_epoch_second,
    local_date_time_of_epoch_second,
    local_epoch_second,
)

from .offset import ZoneOffset

__all__ = [
    "ZoneOffsetTransition",
]


@dataclass(frozen=True, order=True)
class ZoneOffsetTransition:
    """A transition between two offsets, ordered by the instant of the transition."""

    epoch_second: int
    """The instant of the transition as seconds since the epoch."""

    offset_before: ZoneOffset
    """The offset in effect before the transition."""

    offset_after: ZoneOffset
    """The offset in effect from the transition onwards."""

    def __post_init__(self) -> None:
        """Verify the transition changes the offset."""
        if self.offset_before == self.offset_after:
            raise ValueError(
                f"Offsets must not be equal: {self.offset_before} {self.offset_after}"
            )

    @classmethod
    def of(
        cls,
        transition: datetime.datetime,
        offset_before: ZoneOffset,
        offset_after: ZoneOffset,
    ) -> ZoneOffsetTransition:
        """Create a transition from the local date-time at which it occurs.

        The local transition is expressed in the offset before the transition.
        """
        if transition.microsecond:
            raise ValueError(
                f"Transition must be a whole number of seconds: {transition}"
            )
        return cls(
            local_epoch_second(transition) - offset_before.total_seconds,
            offset_before,
            offset_after,
        )

    @property
    def instant(self) -> datetime.datetime:
        """Return the instant of the transition as a UTC datetime."""
        return instant_of_epoch_second(self.epoch_second)

    @property
    def date_time_before(self) -> datetime.datetime:
        """Return the local date-time of the transition using the offset before.

        For a gap this is the start of the gap, and for an overlap this is the
        end of the overlap.
        """
        return local_date_time_of_epoch_second(
            self.epoch_second, self.offset_before.total_seconds
        )

    @property
    def date_time_after(self) -> datetime.datetime:
        """Return the local date-time of the transition using the offset after.

        For a gap this is the end of the gap, and for an overlap this is the
        start of the overlap.
        """
        return local_date_time_of_epoch_second(
            self.epoch_second, self.offset_after.total_seconds
        )

    @property
    def duration(self) -> datetime.timedelta:
        """Return the length of the gap or overlap."""
        return datetime.timedelta(
            seconds=abs(
                self.offset_after.total_seconds - self.offset_before.total_seconds
            )
        )

    @property
    def is_gap(self) -> bool:
        """Return True if local time jumps forward, skipping local date-times."""
        return self.offset_after > self.offset_before

    @property
    def is_overlap(self) -> bool:
        """Return True if local time jumps backward, repeating local date-times."""
        return self.offset_after < self.offset_before

    def valid_offsets(self) -> list[ZoneOffset]:
        """Return the offsets valid for a local date-time within the transition.

        A gap has no valid offsets. An overlap has two valid offsets, the
        offset after followed by the offset before.
        """
        if self.is_gap:
            return []
        return [self.offset_after, self.offset_before]

    def is_valid_offset(self, offset: ZoneOffset) -> bool:
        """Return True if the offset is valid for a local date-time in the transition."""
        if self.is_gap:
            return False
        return offset in (self.offset_before, self.offset_after)

    def __str__(self) -> str:
        """Return the transition e.g. 'Transition[Gap at 2022-03-13T02:00:00-05:00 to -04:00]'."""
        kind = "Gap" if self.is_gap else "Overlap"
        return (
            f"Transition[{kind} at {self.date_time_before.isoformat()}"
            f"{self.offset_before} to {self.offset_after}]"
        )
