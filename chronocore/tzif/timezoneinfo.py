"""Library for loading zone rules from IANA time-zone data.

This package follows the same approach as zoneinfo for locating timezone
data, preferring the tzdata python package then falling back to the files in
the system TZPATH. The TZif records are converted into `ZoneRules`:

```python
from chronocore.tzif import timezoneinfo
from chronocore.zone import provider

provider.register_provider(timezoneinfo.TzdataZoneRulesProvider())
rules = provider.get_rules("Europe/Warsaw")
```

The provider is never registered implicitly, and never downloads data.
"""

from __future__ import annotations

import datetime
import logging
import os
import zoneinfo
from collections.abc import Iterable
from functools import cache
from importlib import resources

from chronocore.exceptions import ZoneRulesError
from chronocore.util import epoch_second, instant_of_epoch_second
from chronocore.zone.offset import ZoneOffset
from chronocore.zone.provider import ZoneRulesProvider
from chronocore.zone.rules import ZoneRules
from chronocore.zone.transition import ZoneOffsetTransition

from .model import TimezoneInfo
from .tzif import read_tzif

__all__ = [
    "TimezoneInfoError",
    "TzdataZoneRulesProvider",
    "available_timezones",
    "read",
    "read_zone_rules",
    "to_zone_rules",
]

_LOGGER = logging.getLogger(__name__)

# Transitions outside this range can not be expressed as local date-times and
# instead determine the offsets in effect at the start of the history.
_MIN_TRANSITION = epoch_second(datetime.datetime(1, 1, 2, tzinfo=datetime.UTC))
_MAX_TRANSITION = epoch_second(datetime.datetime(9999, 12, 30, tzinfo=datetime.UTC))


class TimezoneInfoError(ZoneRulesError):
    """Raised on error working with timezone information."""


@cache
def _read_system_timezones() -> set[str]:
    """Read and cache the set of system and tzdata timezones."""
    return zoneinfo.available_timezones()


@cache
def _find_tzfile(key: str) -> str | None:
    """Retrieve the path to a TZif file from a key."""
    for search_path in zoneinfo.TZPATH:
        filepath = os.path.join(search_path, key)
        if os.path.isfile(filepath):
            return filepath

    return None


@cache
def _read_tzdata_timezones() -> set[str]:
    """Returns the set of valid timezones from tzdata only."""
    try:
        with resources.files("tzdata").joinpath("zones").open(
            "r", encoding="utf-8"
        ) as zones_file:
            return {line.strip() for line in zones_file.readlines() if line.strip()}
    except ModuleNotFoundError:
        return set()


def _iana_key_to_resource(key: str) -> tuple[str, str]:
    """Returns the package and resource file for the specified timezone."""
    if "/" not in key:
        return "tzdata.zoneinfo", key
    package_loc, resource = key.rsplit("/", 1)
    package = "tzdata.zoneinfo." + package_loc.replace("/", ".")
    return package, resource


def available_timezones() -> frozenset[str]:
    """Return the keys of all timezones in tzdata and the system TZPATH."""
    return frozenset(_read_tzdata_timezones() | _read_system_timezones())


def read(key: str) -> TimezoneInfo:
    """Read the TZif file from the tzdata package and return timezone records."""
    _LOGGER.debug("Reading timezone: %s", key)
    return _read_cache(key)


@cache
def _read_cache(key: str) -> TimezoneInfo:
    if key not in _read_system_timezones() and key not in _read_tzdata_timezones():
        raise TimezoneInfoError(f"Unable to find timezone in system timezones: {key}")

    # Prefer tzdata package
    (package, resource) = _iana_key_to_resource(key)
    try:
        with resources.files(package).joinpath(resource).open("rb") as tzdata_file:
            return read_tzif(tzdata_file.read())
    except ModuleNotFoundError:
        _LOGGER.debug("No tzdata package for %s, trying system TZPATH", key)
    except ValueError as err:
        raise TimezoneInfoError(f"Unable to load tzdata module: {key}") from err
    except FileNotFoundError as err:
        raise TimezoneInfoError(f"Unable to load tzdata module: {key}") from err

    # Fallback to zoneinfo file on local disk
    tzfile = _find_tzfile(key)
    if tzfile is not None:
        with open(tzfile, "rb") as tzfile_file:
            try:
                return read_tzif(tzfile_file.read())
            except ValueError as err:
                raise TimezoneInfoError(f"Unable to load tzdata file: {key}") from err

    raise TimezoneInfoError(f"Unable to find timezone data for {key}")


def to_zone_rules(timezoneinfo: TimezoneInfo) -> ZoneRules:
    """Convert the TZif records into zone rules.

    Each transition to a standard (non-DST) local time type may change the
    standard offset, and each change in UTC offset is a wall offset
    transition. The TZ footer rule supplies the transitions after the last
    one in the file.
    """
    if (initial := timezoneinfo.initial_time_type) is None:
        raise ValueError("TimezoneInfo has no local time types")
    wall = ZoneOffset(initial.utoff)
    standard = wall
    if initial.dst:
        standard_types = [t for t in timezoneinfo.local_time_types if not t.dst]
        if standard_types:
            standard = ZoneOffset(standard_types[0].utoff)
    base_wall, base_standard = wall, standard

    standard_transitions: list[ZoneOffsetTransition] = []
    transitions: list[ZoneOffsetTransition] = []
    last_rules_start: datetime.datetime | None = None
    for transition in timezoneinfo.transitions:
        new_wall = ZoneOffset(transition.utoff)
        new_standard = standard if transition.dst else new_wall
        if transition.transition_time < _MIN_TRANSITION:
            base_wall, base_standard = new_wall, new_standard
            wall, standard = new_wall, new_standard
            continue
        if transition.transition_time > _MAX_TRANSITION:
            break
        # The footer only applies after the last transition in the file, even
        # one that keeps the same offset
        last_rules_start = instant_of_epoch_second(transition.transition_time)
        if new_standard != standard:
            standard_transitions.append(
                ZoneOffsetTransition(transition.transition_time, standard, new_standard)
            )
            standard = new_standard
        if new_wall != wall:
            transitions.append(
                ZoneOffsetTransition(transition.transition_time, wall, new_wall)
            )
            wall = new_wall

    last_rules = timezoneinfo.rule.transition_rules() if timezoneinfo.rule else []
    if (
        base_standard == base_wall
        and not standard_transitions
        and not transitions
        and not last_rules
    ):
        return ZoneRules.of_offset(base_wall)
    return ZoneRules.of(
        base_standard,
        base_wall,
        standard_transitions,
        transitions,
        last_rules,
        last_rules_start,
    )


def read_zone_rules(key: str) -> ZoneRules:
    """Read the TZif data for the key and return the zone rules."""
    timezoneinfo = read(key)
    try:
        return to_zone_rules(timezoneinfo)
    except ValueError as err:
        raise TimezoneInfoError(f"Unable to create zone rules: {key}") from err


class TzdataZoneRulesProvider(ZoneRulesProvider):
    """A provider of zone rules from the tzdata package or system TZPATH."""

    def __init__(self, zone_ids: Iterable[str] | None = None) -> None:
        """Initialize TzdataZoneRulesProvider.

        The provider supplies all available timezones unless a subset of
        `zone_ids` is specified.
        """
        available = available_timezones()
        if zone_ids is None:
            self._zone_ids = available
        else:
            self._zone_ids = frozenset(zone_ids)
            if missing := sorted(self._zone_ids - available):
                raise TimezoneInfoError(
                    f"Unable to find timezone in system timezones: {missing[0]}"
                )

    def provide_zone_ids(self) -> Iterable[str]:
        """Return the zone ids supplied by this provider."""
        return self._zone_ids

    def provide_rules(self, zone_id: str) -> ZoneRules:
        """Return the zone rules read from the TZif data."""
        if zone_id not in self._zone_ids:
            raise TimezoneInfoError(f"Timezone not supplied by provider: {zone_id}")
        return read_zone_rules(zone_id)

    def provide_refresh(self) -> bool:
        """Discard the cached TZif records so they are read again on next use."""
        _read_cache.cache_clear()
        _find_tzfile.cache_clear()
        return True

    def __repr__(self) -> str:
        return f"TzdataZoneRulesProvider({len(self._zone_ids)} zones)"
