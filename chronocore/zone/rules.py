"""The rules defining how the zone offset varies for a single time-zone.

Rules are either a single fixed offset, or a history of transitions plus a set
of recurring rules used to project transitions into the future. Offsets may be
looked up for an instant, which always has exactly one offset, or for a local
date-time, which has one offset (normal), none (a gap) or two (an overlap).

A local date-time lookup with `offset_info` returns either the offset or the
transition responsible for the ambiguity, leaving the resolution to the
caller. The `offset_at_local` method resolves ambiguity using a `Disambiguate`
policy, by default raising an error.
"""

from __future__ import annotations

import datetime
import logging
from abc import ABC, abstractmethod
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Sequence
from typing import Union

from chronocore.config import Disambiguate, get_disambiguation
from chronocore.exceptions import RepeatedTimeError, SkippedTimeError
from chronocore.temporal.const import SECONDS_PER_DAY
from chronocore.util import (
    epoch_second,
    instant_of_epoch_second,
    local_date_time_of_epoch_second,
    require_instant,
    require_local,
)

from .offset import ZoneOffset
from .transition import ZoneOffsetTransition
from .transition_rule import ZoneOffsetTransitionRule

__all__ = [
    "ZoneRules",
    "FixedZoneRules",
    "StandardZoneRules",
    "OffsetInfo",
]

_LOGGER = logging.getLogger(__name__)

OffsetInfo = Union[ZoneOffset, ZoneOffsetTransition]

# Projected transitions are cached for years up to this value
_LAST_CACHED_YEAR = 2100

# Bound on the number of recurring rules in a zone
_MAX_LAST_RULES = 16

_EPOCH_ORDINAL = datetime.date(1970, 1, 1).toordinal()
_MAX_ORDINAL = datetime.date.max.toordinal()


def _find_year(epoch_seconds: int, offset: ZoneOffset) -> int:
    """Return the local year of an epoch second, clamped to the datetime range."""
    ordinal = (epoch_seconds + offset.total_seconds) // SECONDS_PER_DAY
    ordinal += _EPOCH_ORDINAL
    return datetime.date.fromordinal(min(max(ordinal, 1), _MAX_ORDINAL)).year


class ZoneRules(ABC):
    """The rules defining how the zone offset varies for a single time-zone."""

    @staticmethod
    def of_offset(offset: ZoneOffset) -> ZoneRules:
        """Return rules for a zone that always has the same offset."""
        return FixedZoneRules(offset)

    @staticmethod
    def of(
        base_standard_offset: ZoneOffset,
        base_wall_offset: ZoneOffset,
        standard_transitions: Iterable[ZoneOffsetTransition],
        transitions: Iterable[ZoneOffsetTransition],
        last_rules: Iterable[ZoneOffsetTransitionRule],
        last_rules_start: datetime.datetime | None = None,
    ) -> ZoneRules:
        """Return rules from a history of transitions and recurring rules.

        The `standard_transitions` record changes to the standard offset and
        the `transitions` record changes to the wall offset. Each must be in
        increasing order and contiguous, where the offset after one transition
        is the offset before the next, starting from the base offsets. The
        `last_rules` project transitions after `last_rules_start`, which
        defaults to the last transition. The start may be later than the last
        transition when the history ends with a change that keeps the offset.
        """
        return StandardZoneRules(
            base_standard_offset,
            base_wall_offset,
            standard_transitions,
            transitions,
            last_rules,
            last_rules_start,
        )

    @property
    @abstractmethod
    def is_fixed_offset(self) -> bool:
        """Return True if the offset never changes."""

    @property
    @abstractmethod
    def transitions(self) -> tuple[ZoneOffsetTransition, ...]:
        """Return the historic transitions in increasing order."""

    @property
    @abstractmethod
    def transition_rules(self) -> tuple[ZoneOffsetTransitionRule, ...]:
        """Return the rules used to project transitions after the history."""

    @abstractmethod
    def offset_at_instant(self, instant: datetime.datetime) -> ZoneOffset:
        """Return the offset in effect at the instant."""

    @abstractmethod
    def offset_info(self, local: datetime.datetime) -> OffsetInfo:
        """Return the offset for a local date-time, or the transition that makes it ambiguous.

        A `ZoneOffset` is returned when exactly one offset is valid. A
        `ZoneOffsetTransition` is returned when the local date-time is in a gap
        or an overlap.
        """

    @abstractmethod
    def standard_offset(self, instant: datetime.datetime) -> ZoneOffset:
        """Return the standard offset, excluding daylight savings, at the instant."""

    @abstractmethod
    def next_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        """Return the first transition strictly after the instant, or None."""

    @abstractmethod
    def previous_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        """Return the last transition strictly before the instant, or None."""

    def offset(
        self,
        value: datetime.datetime,
        disambiguate: Disambiguate | str | None = None,
    ) -> ZoneOffset:
        """Return the offset for an instant (aware) or local date-time (naive)."""
        if value.tzinfo is not None and value.utcoffset() is not None:
            return self.offset_at_instant(value)
        return self.offset_at_local(value, disambiguate)

    def offset_at_local(
        self,
        local: datetime.datetime,
        disambiguate: Disambiguate | str | None = None,
    ) -> ZoneOffset:
        """Return the offset for a local date-time, resolving gaps and overlaps.

        When no policy is given the context default from `use_disambiguation`
        applies.
        """
        info = self.offset_info(local)
        if isinstance(info, ZoneOffset):
            return info
        policy = (
            Disambiguate(disambiguate) if disambiguate is not None else get_disambiguation()
        )
        _LOGGER.debug("Resolving %s within %s using %s", local, info, policy)
        if policy is Disambiguate.RAISE:
            if info.is_gap:
                raise SkippedTimeError(
                    f"Local date-time {local.isoformat()} does not exist: {info}",
                    transition=info,
                )
            raise RepeatedTimeError(
                f"Local date-time {local.isoformat()} is ambiguous: {info}",
                transition=info,
            )
        if policy is Disambiguate.COMPATIBLE:
            return info.offset_before
        earlier = info.offset_after if info.is_gap else info.offset_before
        later = info.offset_before if info.is_gap else info.offset_after
        return earlier if policy is Disambiguate.EARLIER else later

    def valid_offsets(self, local: datetime.datetime) -> list[ZoneOffset]:
        """Return the valid offsets for a local date-time.

        The list is empty for a gap, has two entries for an overlap and
        otherwise has the single valid offset.
        """
        info = self.offset_info(local)
        if isinstance(info, ZoneOffsetTransition):
            return info.valid_offsets()
        return [info]

    def is_valid_offset(self, local: datetime.datetime, offset: ZoneOffset) -> bool:
        """Return True if the offset is valid for the local date-time."""
        return offset in self.valid_offsets(local)

    def transition(self, local: datetime.datetime) -> ZoneOffsetTransition | None:
        """Return the transition if the local date-time is in a gap or overlap."""
        info = self.offset_info(local)
        if isinstance(info, ZoneOffsetTransition):
            return info
        return None

    def daylight_savings(self, instant: datetime.datetime) -> datetime.timedelta:
        """Return the amount of daylight savings in effect at the instant."""
        return (
            self.offset_at_instant(instant).as_timedelta()
            - self.standard_offset(instant).as_timedelta()
        )

    def is_daylight_savings(self, instant: datetime.datetime) -> bool:
        """Return True if daylight savings is in effect at the instant."""
        return self.standard_offset(instant) != self.offset_at_instant(instant)


class FixedZoneRules(ZoneRules):
    """Rules for a zone with a single offset and no transitions."""

    def __init__(self, offset: ZoneOffset) -> None:
        """Initialize FixedZoneRules."""
        self._offset = offset

    @property
    def is_fixed_offset(self) -> bool:
        """Return True as the offset never changes."""
        return True

    @property
    def transitions(self) -> tuple[ZoneOffsetTransition, ...]:
        """Return no transitions."""
        return ()

    @property
    def transition_rules(self) -> tuple[ZoneOffsetTransitionRule, ...]:
        """Return no transition rules."""
        return ()

    def offset_at_instant(self, instant: datetime.datetime) -> ZoneOffset:
        require_instant(instant)
        return self._offset

    def offset_info(self, local: datetime.datetime) -> OffsetInfo:
        require_local(local)
        return self._offset

    def standard_offset(self, instant: datetime.datetime) -> ZoneOffset:
        require_instant(instant)
        return self._offset

    def next_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        require_instant(instant)
        return None

    def previous_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        require_instant(instant)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedZoneRules):
            return NotImplemented
        return self._offset == other._offset

    def __hash__(self) -> int:
        return hash(self._offset)

    def __repr__(self) -> str:
        return f"FixedZoneRules({self._offset})"


class StandardZoneRules(ZoneRules):
    """Rules built from a transition history and recurring rules."""

    def __init__(
        self,
        base_standard_offset: ZoneOffset,
        base_wall_offset: ZoneOffset,
        standard_transitions: Iterable[ZoneOffsetTransition],
        transitions: Iterable[ZoneOffsetTransition],
        last_rules: Iterable[ZoneOffsetTransitionRule],
        last_rules_start: datetime.datetime | None = None,
    ) -> None:
        """Initialize StandardZoneRules."""
        standard = tuple(standard_transitions)
        savings = tuple(transitions)
        rules = tuple(last_rules)
        _check_history(base_standard_offset, standard, "standard")
        _check_history(base_wall_offset, savings, "wall")
        if len(rules) > _MAX_LAST_RULES:
            raise ValueError(
                f"Too many transition rules ({len(rules)}), at most {_MAX_LAST_RULES}"
            )

        self._standard_transitions = [trans.epoch_second for trans in standard]
        self._standard_offsets = [base_standard_offset] + [
            trans.offset_after for trans in standard
        ]
        self._transitions = savings
        self._savings_instant_transitions = [trans.epoch_second for trans in savings]
        self._wall_offsets = [base_wall_offset] + [
            trans.offset_after for trans in savings
        ]
        # Each transition contributes the pair of local date-times bounding
        # its gap or overlap, in increasing order.
        self._savings_local_transitions: list[datetime.datetime] = []
        for trans in savings:
            if trans.is_gap:
                self._savings_local_transitions.append(trans.date_time_before)
                self._savings_local_transitions.append(trans.date_time_after)
            else:
                self._savings_local_transitions.append(trans.date_time_after)
                self._savings_local_transitions.append(trans.date_time_before)
        self._last_rules = rules
        self._last_rules_cache: dict[int, tuple[ZoneOffsetTransition, ...]] = {}

        # The recurring rules only apply strictly after this epoch second
        self._last_rules_start: int | None = None
        if last_rules_start is not None:
            self._last_rules_start = epoch_second(require_instant(last_rules_start))
        elif savings:
            self._last_rules_start = savings[-1].epoch_second
        if (
            self._last_rules_start is not None
            and savings
            and self._last_rules_start < savings[-1].epoch_second
        ):
            raise ValueError(
                f"Rules start {last_rules_start} must not be before the last "
                f"transition {savings[-1]}"
            )
        self._last_rules_year = datetime.MINYEAR
        self._last_rules_local: datetime.datetime | None = None
        if self._last_rules_start is not None:
            self._last_rules_year = _find_year(
                self._last_rules_start, self._wall_offsets[-1]
            )
            self._last_rules_local = local_date_time_of_epoch_second(
                self._last_rules_start, self._wall_offsets[-1].total_seconds
            )
            if self._savings_local_transitions:
                self._last_rules_local = max(
                    self._last_rules_local, self._savings_local_transitions[-1]
                )

    @property
    def is_fixed_offset(self) -> bool:
        """Return True if the rules have no transitions of any kind."""
        return (
            self._standard_offsets[0] == self._wall_offsets[0]
            and not self._standard_transitions
            and not self._savings_instant_transitions
            and not self._last_rules
        )

    @property
    def transitions(self) -> tuple[ZoneOffsetTransition, ...]:
        """Return the historic transitions in increasing order."""
        return self._transitions

    @property
    def transition_rules(self) -> tuple[ZoneOffsetTransitionRule, ...]:
        """Return the rules used to project transitions after the history."""
        return self._last_rules

    @property
    def last_rules_start(self) -> datetime.datetime | None:
        """Return the instant after which the recurring rules apply."""
        if self._last_rules_start is None:
            return None
        return instant_of_epoch_second(self._last_rules_start)

    def _uses_last_rules(self, epoch: int) -> bool:
        return bool(self._last_rules) and (
            self._last_rules_start is None or epoch > self._last_rules_start
        )

    def _find_transition_array(self, year: int) -> tuple[ZoneOffsetTransition, ...]:
        """Return the transitions projected by the recurring rules for a year.

        In the year the rules start, only the transitions after the start that
        continue from the offset already in effect are projected.
        """
        if (cached := self._last_rules_cache.get(year)) is not None:
            return cached
        result: tuple[ZoneOffsetTransition, ...] = ()
        if year >= self._last_rules_year:
            result = tuple(
                sorted(rule.create_transition(year) for rule in self._last_rules)
            )
        if year == self._last_rules_year and self._last_rules_start is not None:
            result = _continue_history(
                result, self._last_rules_start, self._wall_offsets[-1]
            )
        if year < _LAST_CACHED_YEAR:
            result = self._last_rules_cache.setdefault(year, result)
        return result

    def offset_at_instant(self, instant: datetime.datetime) -> ZoneOffset:
        epoch = epoch_second(instant)
        if self._uses_last_rules(epoch):
            year = _find_year(epoch, self._wall_offsets[-1])
            offset = self._wall_offsets[-1]
            for trans in self._find_transition_array(year):
                if epoch < trans.epoch_second:
                    return trans.offset_before
                offset = trans.offset_after
            return offset
        index = bisect_right(self._savings_instant_transitions, epoch)
        return self._wall_offsets[index]

    def offset_info(self, local: datetime.datetime) -> OffsetInfo:
        require_local(local)
        if self._last_rules and (
            self._last_rules_local is None or local > self._last_rules_local
        ):
            info: OffsetInfo = self._wall_offsets[-1]
            for trans in self._find_transition_array(local.year):
                info = _find_offset_info(local, trans)
                if isinstance(info, ZoneOffsetTransition) or info == trans.offset_before:
                    return info
            return info

        # Index of the last local transition at or before the local date-time
        index = bisect_right(self._savings_local_transitions, local) - 1
        if index < 0:
            return self._wall_offsets[0]
        if index % 2 == 0:
            return self._transitions[index // 2]
        return self._wall_offsets[index // 2 + 1]

    def standard_offset(self, instant: datetime.datetime) -> ZoneOffset:
        epoch = epoch_second(instant)
        index = bisect_right(self._standard_transitions, epoch)
        return self._standard_offsets[index]

    def next_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        epoch = epoch_second(instant)
        history = self._savings_instant_transitions
        index = bisect_right(history, epoch)
        if index < len(history):
            return self._transitions[index]
        if not self._last_rules:
            return None
        year = max(_find_year(epoch, self._wall_offsets[-1]), self._last_rules_year)
        for candidate_year in (year, year + 1):
            if candidate_year > datetime.MAXYEAR:
                break
            for trans in self._find_transition_array(candidate_year):
                if epoch < trans.epoch_second:
                    return trans
        return None

    def previous_transition(
        self, instant: datetime.datetime
    ) -> ZoneOffsetTransition | None:
        epoch = epoch_second(require_instant(instant))
        if instant.microsecond:
            epoch += 1
        if self._uses_last_rules(epoch):
            year = _find_year(epoch, self._wall_offsets[-1])
            for candidate_year in (year, year - 1):
                if candidate_year < self._last_rules_year:
                    break
                for trans in reversed(self._find_transition_array(candidate_year)):
                    if trans.epoch_second < epoch:
                        return trans
        index = bisect_left(self._savings_instant_transitions, epoch)
        if index == 0:
            return None
        return self._transitions[index - 1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StandardZoneRules):
            return NotImplemented
        return (
            self._standard_transitions == other._standard_transitions
            and self._standard_offsets == other._standard_offsets
            and self._transitions == other._transitions
            and self._wall_offsets == other._wall_offsets
            and self._last_rules == other._last_rules
            and self._last_rules_start == other._last_rules_start
        )

    def __hash__(self) -> int:
        return hash((self._transitions, self._last_rules))

    def __repr__(self) -> str:
        return f"StandardZoneRules(current_standard_offset={self._standard_offsets[-1]})"


def _check_history(
    base_offset: ZoneOffset, transitions: Sequence[ZoneOffsetTransition], kind: str
) -> None:
    """Verify transitions are increasing and each starts where the last ended."""
    previous_offset = base_offset
    previous_epoch: int | None = None
    for trans in transitions:
        if previous_epoch is not None and trans.epoch_second <= previous_epoch:
            raise ValueError(
                f"The {kind} transitions must be in strictly increasing order: {trans}"
            )
        if trans.offset_before != previous_offset:
            raise ValueError(
                f"The {kind} transition {trans} does not start from the previous "
                f"offset {previous_offset}"
            )
        previous_epoch = trans.epoch_second
        previous_offset = trans.offset_after


def _find_offset_info(
    local: datetime.datetime, trans: ZoneOffsetTransition
) -> OffsetInfo:
    """Return the offset or transition for a local date-time near a transition."""
    local_transition = trans.date_time_before
    if trans.is_gap:
        if local < local_transition:
            return trans.offset_before
        if local < trans.date_time_after:
            return trans
        return trans.offset_after
    if local >= local_transition:
        return trans.offset_after
    if local < trans.date_time_after:
        return trans.offset_before
    return trans


def _continue_history(
    projected: Sequence[ZoneOffsetTransition],
    start: int,
    offset: ZoneOffset,
) -> tuple[ZoneOffsetTransition, ...]:
    """Return the projected transitions after the start that follow on from the offset.

    A projected transition at or before the start is already part of the
    history, as is one that does not begin from the offset in effect.
    """
    result = []
    for trans in projected:
        if trans.epoch_second <= start or trans.offset_before != offset:
            continue
        result.append(trans)
        offset = trans.offset_after
    return tuple(result)
