"""Zone rules loaded from serialized data.

Zone definitions may be supplied as plain data (e.g. parsed from json or yaml)
and validated with pydantic before being converted into `ZoneRules`. Offsets
are either an int number of seconds or a string such as `-05:00`:

```python
from chronocore.zone.data import DataZoneRulesProvider

provider = DataZoneRulesProvider(
    {
        "Example/Fixed": {"base_standard_offset": "+05:30"},
    }
)
rules = provider.provide_rules("Example/Fixed")
```
"""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from chronocore.exceptions import ZoneNotFoundError, ZoneRulesError

from .offset import ZoneOffset
from .provider import ZoneRulesProvider
from .rules import ZoneRules
from .transition import ZoneOffsetTransition
from .transition_rule import TimeDefinition, ZoneOffsetTransitionRule

__all__ = [
    "OffsetTransitionData",
    "TransitionRuleData",
    "ZoneRulesData",
    "DataZoneRulesProvider",
]

_LOGGER = logging.getLogger(__name__)

_OFFSET_RE = re.compile(
    r"^(?P<sign>[+-])(?P<hours>\d{2})(?::(?P<minutes>\d{2})(?::(?P<seconds>\d{2}))?)?$"
)


def _parse_offset(value: Any) -> Any:
    """Convert an offset string like '+05:30' to a number of seconds."""
    if isinstance(value, ZoneOffset):
        return value.total_seconds
    if not isinstance(value, str):
        return value
    if value == "Z":
        return 0
    if (match := _OFFSET_RE.match(value)) is None:
        raise ValueError(f"Expected offset in the form +HH:MM[:SS]: {value}")
    offset = ZoneOffset.of_hours_minutes_seconds(
        int(match["hours"]),
        int(match["minutes"] or 0),
        int(match["seconds"] or 0),
    )
    return -offset.total_seconds if match["sign"] == "-" else offset.total_seconds


OffsetSeconds = Annotated[
    int, BeforeValidator(_parse_offset), Field(ge=-18 * 3600, le=18 * 3600)
]
"""An offset in seconds, parsed from an int or an offset string."""


class OffsetTransitionData(BaseModel):
    """A serialized transition between two offsets."""

    local: datetime.datetime
    """The local date-time of the transition expressed in the offset before."""

    offset_before: OffsetSeconds

    offset_after: OffsetSeconds

    @field_validator("local")
    @classmethod
    def _local_date_time(cls, value: datetime.datetime) -> datetime.datetime:
        """Verify the transition is a local date-time."""
        if value.tzinfo is not None:
            raise ValueError(f"Transition must be a local date-time: {value}")
        return value

    def to_transition(self) -> ZoneOffsetTransition:
        """Return the transition for this data."""
        return ZoneOffsetTransition.of(
            self.local,
            ZoneOffset(self.offset_before),
            ZoneOffset(self.offset_after),
        )


class TransitionRuleData(BaseModel):
    """A serialized rule for creating a transition each year."""

    month: int = Field(ge=1, le=12)

    day_of_month_indicator: int = Field(ge=-28, le=31)

    day_of_week: int | None = Field(default=None, ge=1, le=7)

    time: datetime.timedelta = datetime.timedelta(hours=2)
    """Time of day of the transition, as seconds or a duration like '02:00:00'."""

    time_definition: TimeDefinition = TimeDefinition.WALL

    standard_offset: OffsetSeconds

    offset_before: OffsetSeconds

    offset_after: OffsetSeconds

    def to_transition_rule(self) -> ZoneOffsetTransitionRule:
        """Return the transition rule for this data."""
        return ZoneOffsetTransitionRule(
            month=self.month,
            day_of_month_indicator=self.day_of_month_indicator,
            day_of_week=self.day_of_week,
            time=self.time,
            time_definition=self.time_definition,
            standard_offset=ZoneOffset(self.standard_offset),
            offset_before=ZoneOffset(self.offset_before),
            offset_after=ZoneOffset(self.offset_after),
        )


class ZoneRulesData(BaseModel):
    """A serialized definition of the rules for a zone."""

    base_standard_offset: OffsetSeconds
    """The standard offset before the first transition."""

    base_wall_offset: OffsetSeconds | None = None
    """The wall offset before the first transition, defaults to the standard offset."""

    standard_transitions: list[OffsetTransitionData] = Field(default_factory=list)

    transitions: list[OffsetTransitionData] = Field(default_factory=list)

    last_rules: list[TransitionRuleData] = Field(default_factory=list)

    last_rules_start: datetime.datetime | None = None
    """The instant after which the last rules apply, defaults to the last transition."""

    @field_validator("last_rules_start")
    @classmethod
    def _rules_start_instant(
        cls, value: datetime.datetime | None
    ) -> datetime.datetime | None:
        """Verify the rules start is an instant."""
        if value is not None and value.utcoffset() is None:
            raise ValueError(f"Rules start must include a UTC offset: {value}")
        return value

    def to_zone_rules(self) -> ZoneRules:
        """Return the rules for this definition.

        A definition with no transitions or rules becomes fixed offset rules.
        """
        standard = ZoneOffset(self.base_standard_offset)
        wall = (
            ZoneOffset(self.base_wall_offset)
            if self.base_wall_offset is not None
            else standard
        )
        if (
            standard == wall
            and not self.standard_transitions
            and not self.transitions
            and not self.last_rules
        ):
            return ZoneRules.of_offset(standard)
        return ZoneRules.of(
            standard,
            wall,
            [trans.to_transition() for trans in self.standard_transitions],
            [trans.to_transition() for trans in self.transitions],
            [rule.to_transition_rule() for rule in self.last_rules],
            self.last_rules_start,
        )


_ZONES_ADAPTER = TypeAdapter(dict[str, ZoneRulesData])


class DataZoneRulesProvider(ZoneRulesProvider):
    """A provider of zone rules from serialized zone definitions."""

    def __init__(self, zones: Mapping[str, Any]) -> None:
        """Initialize DataZoneRulesProvider from a mapping of zone id to definition."""
        try:
            self._zones = _ZONES_ADAPTER.validate_python(dict(zones))
        except ValidationError as err:
            raise ZoneRulesError(f"Invalid zone rules data: {err}") from err

    @classmethod
    def from_json(cls, content: str | bytes) -> DataZoneRulesProvider:
        """Create a provider from a json object of zone id to definition."""
        try:
            zones = _ZONES_ADAPTER.validate_json(content)
        except ValidationError as err:
            raise ZoneRulesError(f"Invalid zone rules data: {err}") from err
        return cls(zones)

    def provide_zone_ids(self) -> Iterable[str]:
        """Return the zone ids defined in the data."""
        return self._zones.keys()

    def provide_rules(self, zone_id: str) -> ZoneRules:
        """Return the rules for the zone id."""
        if (data := self._zones.get(zone_id)) is None:
            raise ZoneNotFoundError(f"Unknown time-zone ID: {zone_id}")
        _LOGGER.debug("Building zone rules for %s", zone_id)
        try:
            return data.to_zone_rules()
        except ValueError as err:
            raise ZoneRulesError(f"Invalid zone rules for {zone_id}: {err}") from err

    def __repr__(self) -> str:
        return f"DataZoneRulesProvider({len(self._zones)} zones)"
