"""Tests for zone rules."""

import datetime

import pytest

from chronocore.config import Disambiguate, use_disambiguation
from chronocore.exceptions import (
    OffsetResolutionError,
    RepeatedTimeError,
    SkippedTimeError,
)
from chronocore.zone import (
    FixedZoneRules,
    StandardZoneRules,
    TimeDefinition,
    ZoneOffset,
    ZoneOffsetTransition,
    ZoneOffsetTransitionRule,
    ZoneRules,
)

EST = ZoneOffset.of_hours_minutes_seconds(-5)
EDT = ZoneOffset.of_hours_minutes_seconds(-4)
CST = ZoneOffset.of_hours_minutes_seconds(-6)
UTC = datetime.UTC
GMT = ZoneOffset.UTC
BST = ZoneOffset.of_hours_minutes_seconds(1)
CEST = ZoneOffset.of_hours_minutes_seconds(2)
AST = ZoneOffset.of_hours_minutes_seconds(-4)
ADT = ZoneOffset.of_hours_minutes_seconds(-3)

SPRING_2022 = ZoneOffsetTransition.of(datetime.datetime(2022, 3, 13, 2, 0, 0), EST, EDT)
FALL_2022 = ZoneOffsetTransition.of(datetime.datetime(2022, 11, 6, 2, 0, 0), EDT, EST)


@pytest.mark.parametrize(
    "instant,expected",
    [
        (datetime.datetime(2021, 7, 1, tzinfo=UTC), EST),
        (datetime.datetime(2022, 1, 1, tzinfo=UTC), EST),
        (datetime.datetime(2022, 3, 13, 6, 59, 59, tzinfo=UTC), EST),
        (datetime.datetime(2022, 3, 13, 7, 0, 0, tzinfo=UTC), EDT),
        (datetime.datetime(2022, 7, 1, tzinfo=UTC), EDT),
        (datetime.datetime(2022, 11, 6, 5, 59, 59, tzinfo=UTC), EDT),
        (datetime.datetime(2022, 11, 6, 6, 0, 0, tzinfo=UTC), EST),
        (datetime.datetime(2030, 1, 15, tzinfo=UTC), EST),
        (datetime.datetime(2030, 7, 1, tzinfo=UTC), EDT),
        (datetime.datetime(2030, 12, 15, tzinfo=UTC), EST),
        (datetime.datetime(2200, 7, 1, tzinfo=UTC), EDT),
    ],
)
def test_offset_at_instant(
    us_eastern_rules: ZoneRules, instant: datetime.datetime, expected: ZoneOffset
) -> None:
    """Test the offset for an instant in the history and projected by rules."""
    assert us_eastern_rules.offset_at_instant(instant) == expected
    assert us_eastern_rules.offset(instant) == expected


def test_offset_at_instant_other_zone(us_eastern_rules: ZoneRules) -> None:
    """Test the instant may be expressed in any offset."""
    tzinfo = datetime.timezone(datetime.timedelta(hours=2))
    instant = datetime.datetime(2022, 3, 13, 9, 0, 0, tzinfo=tzinfo)
    assert us_eastern_rules.offset_at_instant(instant) == EDT


def test_offset_at_instant_requires_aware(us_eastern_rules: ZoneRules) -> None:
    """Test a local date-time is not accepted as an instant."""
    with pytest.raises(ValueError, match="Expected a timezone aware datetime"):
        us_eastern_rules.offset_at_instant(datetime.datetime(2022, 1, 1))


@pytest.mark.parametrize(
    "local,expected",
    [
        (datetime.datetime(2022, 1, 1), EST),
        (datetime.datetime(2022, 3, 13, 1, 59, 59), EST),
        (datetime.datetime(2022, 3, 13, 3, 0, 0), EDT),
        (datetime.datetime(2022, 7, 1), EDT),
        (datetime.datetime(2022, 11, 6, 0, 59, 59), EDT),
        (datetime.datetime(2022, 11, 6, 2, 0, 0), EST),
        (datetime.datetime(2022, 12, 1), EST),
        (datetime.datetime(2030, 7, 1), EDT),
        (datetime.datetime(2030, 12, 1), EST),
    ],
)
def test_offset_info_normal(
    us_eastern_rules: ZoneRules, local: datetime.datetime, expected: ZoneOffset
) -> None:
    """Test local date-times with a single valid offset."""
    assert us_eastern_rules.offset_info(local) == expected
    assert us_eastern_rules.offset(local) == expected
    assert us_eastern_rules.valid_offsets(local) == [expected]
    assert us_eastern_rules.is_valid_offset(local, expected)
    assert us_eastern_rules.transition(local) is None


@pytest.mark.parametrize(
    "local",
    [
        datetime.datetime(2022, 3, 13, 2, 0, 0),
        datetime.datetime(2022, 3, 13, 2, 30, 0),
        datetime.datetime(2022, 3, 13, 2, 59, 59),
    ],
)
def test_offset_info_gap(us_eastern_rules: ZoneRules, local: datetime.datetime) -> None:
    """Test local date-times inside the spring gap."""
    info = us_eastern_rules.offset_info(local)
    assert info == SPRING_2022
    assert us_eastern_rules.transition(local) == SPRING_2022
    assert us_eastern_rules.valid_offsets(local) == []
    assert not us_eastern_rules.is_valid_offset(local, EST)
    assert not us_eastern_rules.is_valid_offset(local, EDT)


@pytest.mark.parametrize(
    "local",
    [
        datetime.datetime(2022, 11, 6, 1, 0, 0),
        datetime.datetime(2022, 11, 6, 1, 30, 0),
        datetime.datetime(2022, 11, 6, 1, 59, 59),
    ],
)
def test_offset_info_overlap(
    us_eastern_rules: ZoneRules, local: datetime.datetime
) -> None:
    """Test local date-times inside the fall overlap."""
    assert us_eastern_rules.offset_info(local) == FALL_2022
    assert us_eastern_rules.transition(local) == FALL_2022
    assert us_eastern_rules.valid_offsets(local) == [EST, EDT]
    assert us_eastern_rules.is_valid_offset(local, EST)
    assert us_eastern_rules.is_valid_offset(local, EDT)
    assert not us_eastern_rules.is_valid_offset(local, CST)


def test_offset_info_projected(us_eastern_rules: ZoneRules) -> None:
    """Test gaps and overlaps after the history come from the rules."""
    gap = us_eastern_rules.transition(datetime.datetime(2030, 3, 10, 2, 30, 0))
    assert gap is not None
    assert gap.is_gap
    assert gap.instant == datetime.datetime(2030, 3, 10, 7, 0, 0, tzinfo=UTC)

    overlap = us_eastern_rules.transition(datetime.datetime(2030, 11, 3, 1, 30, 0))
    assert overlap is not None
    assert overlap.is_overlap
    assert overlap.instant == datetime.datetime(2030, 11, 3, 6, 0, 0, tzinfo=UTC)

    assert us_eastern_rules.valid_offsets(datetime.datetime(2030, 11, 3, 1, 30, 0)) == [
        EST,
        EDT,
    ]


def test_offset_info_requires_local(us_eastern_rules: ZoneRules) -> None:
    """Test an instant is not accepted as a local date-time."""
    with pytest.raises(ValueError, match="Expected a local"):
        us_eastern_rules.offset_info(datetime.datetime(2022, 1, 1, tzinfo=UTC))


def test_skipped_time_raises(us_eastern_rules: ZoneRules) -> None:
    """Test a local date-time in a gap raises by default."""
    local = datetime.datetime(2022, 3, 13, 2, 30, 0)
    with pytest.raises(SkippedTimeError, match="does not exist") as exc_info:
        us_eastern_rules.offset(local)
    assert exc_info.value.transition == SPRING_2022
    assert str(exc_info.value) == (
        "Local date-time 2022-03-13T02:30:00 does not exist: "
        "Transition[Gap at 2022-03-13T02:00:00-05:00 to -04:00]"
    )


def test_repeated_time_raises(us_eastern_rules: ZoneRules) -> None:
    """Test a local date-time in an overlap raises by default."""
    local = datetime.datetime(2022, 11, 6, 1, 30, 0)
    with pytest.raises(RepeatedTimeError, match="is ambiguous") as exc_info:
        us_eastern_rules.offset_at_local(local)
    assert exc_info.value.transition == FALL_2022
    assert isinstance(exc_info.value, OffsetResolutionError)


@pytest.mark.parametrize(
    "policy,gap_offset,overlap_offset",
    [
        (Disambiguate.EARLIER, EDT, EDT),
        (Disambiguate.LATER, EST, EST),
        (Disambiguate.COMPATIBLE, EST, EDT),
        ("earlier", EDT, EDT),
        ("compatible", EST, EDT),
    ],
)
def test_disambiguate(
    us_eastern_rules: ZoneRules,
    policy: Disambiguate | str,
    gap_offset: ZoneOffset,
    overlap_offset: ZoneOffset,
) -> None:
    """Test resolving gaps and overlaps with an explicit policy."""
    gap = datetime.datetime(2022, 3, 13, 2, 30, 0)
    overlap = datetime.datetime(2022, 11, 6, 1, 30, 0)
    assert us_eastern_rules.offset(gap, policy) == gap_offset
    assert us_eastern_rules.offset_at_local(overlap, policy) == overlap_offset


def test_disambiguate_earlier_is_earlier_instant(us_eastern_rules: ZoneRules) -> None:
    """Test the earlier and later policies order the resulting instants."""
    for local in (
        datetime.datetime(2022, 3, 13, 2, 30, 0),
        datetime.datetime(2022, 11, 6, 1, 30, 0),
    ):
        earlier = us_eastern_rules.offset(local, Disambiguate.EARLIER)
        later = us_eastern_rules.offset(local, Disambiguate.LATER)
        assert local.replace(tzinfo=datetime.timezone(earlier.as_timedelta())) < local.replace(
            tzinfo=datetime.timezone(later.as_timedelta())
        )


def test_use_disambiguation(us_eastern_rules: ZoneRules) -> None:
    """Test setting the default policy for a block of code."""
    gap = datetime.datetime(2022, 3, 13, 2, 30, 0)
    with use_disambiguation(Disambiguate.LATER):
        assert us_eastern_rules.offset(gap) == EST
        assert us_eastern_rules.offset(gap, Disambiguate.EARLIER) == EDT
        with use_disambiguation("earlier"):
            assert us_eastern_rules.offset(gap) == EDT
        assert us_eastern_rules.offset(gap) == EST
    with pytest.raises(SkippedTimeError):
        us_eastern_rules.offset(gap)


def test_invalid_policy(us_eastern_rules: ZoneRules) -> None:
    """Test an unknown policy name is rejected."""
    with pytest.raises(ValueError, match="not a valid Disambiguate"):
        us_eastern_rules.offset(datetime.datetime(2022, 3, 13, 2, 30, 0), "invalid")


@pytest.mark.parametrize(
    "instant,expected",
    [
        (datetime.datetime(2021, 1, 1, tzinfo=UTC), SPRING_2022),
        (datetime.datetime(2022, 1, 1, tzinfo=UTC), SPRING_2022),
        (datetime.datetime(2022, 3, 13, 7, 0, 0, tzinfo=UTC), FALL_2022),
        (
            datetime.datetime(2022, 12, 1, tzinfo=UTC),
            ZoneOffsetTransition.of(datetime.datetime(2023, 3, 12, 2, 0, 0), EST, EDT),
        ),
        (
            datetime.datetime(2022, 11, 6, 6, 0, 0, tzinfo=UTC),
            ZoneOffsetTransition.of(datetime.datetime(2023, 3, 12, 2, 0, 0), EST, EDT),
        ),
        (
            datetime.datetime(2030, 7, 1, tzinfo=UTC),
            ZoneOffsetTransition.of(datetime.datetime(2030, 11, 3, 2, 0, 0), EDT, EST),
        ),
    ],
)
def test_next_transition(
    us_eastern_rules: ZoneRules,
    instant: datetime.datetime,
    expected: ZoneOffsetTransition,
) -> None:
    """Test finding the next transition strictly after an instant."""
    assert us_eastern_rules.next_transition(instant) == expected


@pytest.mark.parametrize(
    "instant,expected",
    [
        (datetime.datetime(2022, 1, 1, tzinfo=UTC), None),
        (datetime.datetime(2022, 3, 13, 7, 0, 0, tzinfo=UTC), None),
        (datetime.datetime(2022, 3, 13, 7, 0, 0, 500000, tzinfo=UTC), SPRING_2022),
        (datetime.datetime(2022, 3, 13, 7, 0, 1, tzinfo=UTC), SPRING_2022),
        (datetime.datetime(2022, 11, 6, 6, 0, 0, tzinfo=UTC), SPRING_2022),
        (datetime.datetime(2023, 1, 1, tzinfo=UTC), FALL_2022),
        (
            datetime.datetime(2023, 3, 12, 7, 0, 1, tzinfo=UTC),
            ZoneOffsetTransition.of(datetime.datetime(2023, 3, 12, 2, 0, 0), EST, EDT),
        ),
        (
            datetime.datetime(2030, 1, 15, tzinfo=UTC),
            ZoneOffsetTransition.of(datetime.datetime(2029, 11, 4, 2, 0, 0), EDT, EST),
        ),
    ],
)
def test_previous_transition(
    us_eastern_rules: ZoneRules,
    instant: datetime.datetime,
    expected: ZoneOffsetTransition | None,
) -> None:
    """Test finding the previous transition strictly before an instant."""
    assert us_eastern_rules.previous_transition(instant) == expected


def test_rules_only(us_rules_only: ZoneRules) -> None:
    """Test rules with no history project transitions in every year."""
    instant = datetime.datetime(2022, 1, 1, tzinfo=UTC)
    assert us_rules_only.offset_at_instant(instant) == EST
    assert us_rules_only.previous_transition(instant) == ZoneOffsetTransition.of(
        datetime.datetime(2021, 11, 7, 2, 0, 0), EDT, EST
    )
    assert us_rules_only.next_transition(instant) == SPRING_2022
    assert us_rules_only.transition(datetime.datetime(2022, 3, 13, 2, 30, 0)) == SPRING_2022
    assert us_rules_only.offset_info(datetime.datetime(2022, 7, 1)) == EDT
    assert us_rules_only.transitions == ()
    assert len(us_rules_only.transition_rules) == 2


def test_rules_only_datetime_bounds(us_rules_only: ZoneRules) -> None:
    """Test searching for transitions stops at the bounds of datetime."""
    start = datetime.datetime(1, 1, 1, tzinfo=UTC)
    end = datetime.datetime(9999, 12, 31, 12, 0, 0, tzinfo=UTC)
    assert us_rules_only.previous_transition(start) is None
    assert us_rules_only.next_transition(end) is None
    assert us_rules_only.offset_at_instant(start) == EST
    assert us_rules_only.offset_at_instant(end) == EST


def test_daylight_savings(us_eastern_rules: ZoneRules) -> None:
    """Test the amount of daylight savings in effect."""
    winter = datetime.datetime(2022, 1, 1, tzinfo=UTC)
    summer = datetime.datetime(2022, 7, 1, tzinfo=UTC)
    future_summer = datetime.datetime(2030, 7, 1, tzinfo=UTC)
    assert us_eastern_rules.standard_offset(winter) == EST
    assert us_eastern_rules.standard_offset(summer) == EST
    assert us_eastern_rules.daylight_savings(winter) == datetime.timedelta(0)
    assert us_eastern_rules.daylight_savings(summer) == datetime.timedelta(hours=1)
    assert us_eastern_rules.daylight_savings(future_summer) == datetime.timedelta(hours=1)
    assert not us_eastern_rules.is_daylight_savings(winter)
    assert us_eastern_rules.is_daylight_savings(summer)


def test_standard_offset_changes() -> None:
    """Test a zone where the standard offset itself changes."""
    change = ZoneOffsetTransition.of(datetime.datetime(2000, 1, 1), EST, CST)
    rules = ZoneRules.of(EST, EST, [change], [change], [])
    before = datetime.datetime(1999, 7, 1, tzinfo=UTC)
    after = datetime.datetime(2000, 7, 1, tzinfo=UTC)
    assert rules.standard_offset(before) == EST
    assert rules.standard_offset(after) == CST
    assert rules.offset_at_instant(after) == CST
    assert not rules.is_daylight_savings(after)
    assert not rules.is_fixed_offset
    assert rules.transitions == (change,)
    assert rules.next_transition(before) == change
    assert rules.next_transition(after) is None
    assert rules.offset_info(datetime.datetime(1999, 12, 31, 23, 30, 0)) == change


def test_history_properties(us_eastern_rules: ZoneRules) -> None:
    """Test the history and rules of the zone."""
    assert not us_eastern_rules.is_fixed_offset
    assert us_eastern_rules.transitions == (SPRING_2022, FALL_2022)
    assert [rule.month for rule in us_eastern_rules.transition_rules] == [3, 11]
    assert isinstance(us_eastern_rules, StandardZoneRules)


def test_equality(
    us_eastern_rules: ZoneRules,
    us_rules_only: ZoneRules,
    us_transition_rules: list[ZoneOffsetTransitionRule],
) -> None:
    """Test rules built from the same data are equal."""
    same = ZoneRules.of(EST, EST, [], [SPRING_2022, FALL_2022], us_transition_rules)
    assert us_eastern_rules == same
    assert hash(us_eastern_rules) == hash(same)
    assert us_eastern_rules != us_rules_only
    assert us_eastern_rules != ZoneRules.of_offset(EST)


def test_transitions_out_of_order() -> None:
    """Test the history must be in increasing order."""
    with pytest.raises(ValueError, match="strictly increasing order"):
        ZoneRules.of(
            EST,
            EST,
            [],
            [
                SPRING_2022,
                FALL_2022,
                ZoneOffsetTransition.of(datetime.datetime(2021, 3, 14, 2, 0, 0), EST, EDT),
            ],
            [],
        )


def test_transitions_not_contiguous() -> None:
    """Test each transition must start from the previous offset."""
    with pytest.raises(ValueError, match="does not start from the previous offset"):
        ZoneRules.of(CST, CST, [], [SPRING_2022], [])
    with pytest.raises(ValueError, match="The standard transition"):
        ZoneRules.of(EST, EST, [FALL_2022], [], [])


def test_too_many_rules(us_transition_rules: list[ZoneOffsetTransitionRule]) -> None:
    """Test the number of recurring rules is bounded."""
    with pytest.raises(ValueError, match="Too many transition rules"):
        ZoneRules.of(EST, EST, [], [], us_transition_rules * 9)


def test_utc_time_rules() -> None:
    """Test projecting with rules expressed in UTC."""
    cet = ZoneOffset.of_hours_minutes_seconds(1)
    cest = ZoneOffset.of_hours_minutes_seconds(2)
    last_rules = [
        ZoneOffsetTransitionRule(
            month=3,
            day_of_month_indicator=-1,
            day_of_week=7,
            time=datetime.timedelta(hours=1),
            time_definition=TimeDefinition.UTC,
            standard_offset=cet,
            offset_before=cet,
            offset_after=cest,
        ),
        ZoneOffsetTransitionRule(
            month=10,
            day_of_month_indicator=-1,
            day_of_week=7,
            time=datetime.timedelta(hours=1),
            time_definition=TimeDefinition.UTC,
            standard_offset=cet,
            offset_before=cest,
            offset_after=cet,
        ),
    ]
    rules = ZoneRules.of(cet, cet, [], [], last_rules)
    before = datetime.datetime(2024, 3, 31, 0, 59, 59, tzinfo=UTC)
    assert rules.offset_at_instant(before) == cet
    after = datetime.datetime(2024, 3, 31, 1, 0, 0, tzinfo=UTC)
    assert rules.offset_at_instant(after) == cest
    assert rules.valid_offsets(datetime.datetime(2024, 10, 27, 2, 30, 0)) == [cet, cest]
    assert rules.valid_offsets(datetime.datetime(2024, 3, 31, 2, 30, 0)) == []


def eu_rules(
    standard: ZoneOffset, daylight: ZoneOffset
) -> list[ZoneOffsetTransitionRule]:
    """Return rules for the last Sundays of March and October at 01:00 UTC."""
    return [
        ZoneOffsetTransitionRule(
            month=month,
            day_of_month_indicator=-1,
            day_of_week=7,
            time=datetime.timedelta(hours=1),
            time_definition=TimeDefinition.UTC,
            standard_offset=standard,
            offset_before=before,
            offset_after=after,
        )
        for (month, before, after) in (
            (3, standard, daylight),
            (10, daylight, standard),
        )
    ]


@pytest.fixture(name="london_rules")
def london_rules_fixture() -> ZoneRules:
    """Fixture for UK rules with a 1995 history and EU rules from 1996."""
    return ZoneRules.of(
        GMT,
        GMT,
        [],
        [
            ZoneOffsetTransition.of(datetime.datetime(1995, 3, 26, 1), GMT, BST),
            ZoneOffsetTransition.of(datetime.datetime(1995, 10, 22, 2), BST, GMT),
        ],
        eu_rules(GMT, BST),
        datetime.datetime(1996, 1, 1, tzinfo=UTC),
    )


def test_rules_start_after_history(london_rules: ZoneRules) -> None:
    """Test the recurring rules do not apply before the rules start."""
    assert london_rules.last_rules_start == datetime.datetime(1996, 1, 1, tzinfo=UTC)

    # The recurring rules would end summer time on 1995-10-29
    assert london_rules.offset(datetime.datetime(1995, 10, 25, 12, tzinfo=UTC)) == GMT
    assert london_rules.offset_info(datetime.datetime(1995, 10, 29, 1, 30)) == GMT
    assert london_rules.offset(datetime.datetime(1996, 7, 1, tzinfo=UTC)) == BST

    trans = london_rules.next_transition(datetime.datetime(1995, 10, 25, tzinfo=UTC))
    assert trans
    assert trans.instant == datetime.datetime(1996, 3, 31, 1, tzinfo=UTC)
    assert trans.offset_before == GMT
    assert trans.offset_after == BST

    previous = london_rules.previous_transition(
        datetime.datetime(1996, 1, 15, tzinfo=UTC)
    )
    assert previous == london_rules.transitions[-1]
    assert london_rules.previous_transition(trans.instant) == previous


def test_rules_start_without_history() -> None:
    """Test a zone whose recurring rules start after a change that kept the offset."""
    rules = ZoneRules.of(
        GMT,
        GMT,
        [],
        [],
        eu_rules(GMT, CEST),
        datetime.datetime(2005, 2, 12, tzinfo=UTC),
    )
    assert rules.offset(datetime.datetime(1990, 7, 1, tzinfo=UTC)) == GMT
    assert rules.offset_info(datetime.datetime(1990, 7, 1, 12)) == GMT
    assert rules.offset(datetime.datetime(2005, 7, 1, tzinfo=UTC)) == CEST
    assert rules.offset_info(datetime.datetime(2005, 7, 1, 12)) == CEST

    trans = rules.next_transition(datetime.datetime(1990, 7, 1, tzinfo=UTC))
    assert trans
    assert trans.instant == datetime.datetime(2005, 3, 27, 1, tzinfo=UTC)
    assert rules.previous_transition(datetime.datetime(2005, 3, 1, tzinfo=UTC)) is None
    assert rules.previous_transition(datetime.datetime(2005, 7, 1, tzinfo=UTC)) == trans


def test_projected_transitions_continue_history(
    us_transition_rules: list[ZoneOffsetTransitionRule],
) -> None:
    """Test projected transitions in the last year of history follow on from it.

    The history ends with a spring transition at 00:01 so the recurring spring
    transition at 02:00 the same day must not be projected again.
    """
    last_rules = [
        ZoneOffsetTransitionRule(
            month=rule.month,
            day_of_month_indicator=rule.day_of_month_indicator,
            day_of_week=rule.day_of_week,
            time=rule.time,
            time_definition=rule.time_definition,
            standard_offset=AST,
            offset_before=AST if rule.offset_before == EST else ADT,
            offset_after=AST if rule.offset_after == EST else ADT,
        )
        for rule in us_transition_rules
    ]
    spring = ZoneOffsetTransition.of(datetime.datetime(2011, 3, 13, 0, 1), AST, ADT)
    rules = ZoneRules.of(AST, AST, [], [spring], last_rules)

    assert rules.offset(datetime.datetime(2011, 3, 13, 5, tzinfo=UTC)) == ADT
    assert rules.offset_info(datetime.datetime(2011, 3, 13, 2, 30)) == ADT
    assert rules.valid_offsets(datetime.datetime(2011, 3, 13, 2, 30)) == [ADT]
    assert rules.next_transition(spring.instant) == ZoneOffsetTransition.of(
        datetime.datetime(2011, 11, 6, 2), ADT, AST
    )

    start = datetime.datetime(2010, 1, 1, tzinfo=UTC)
    end = datetime.datetime(2015, 1, 1, tzinfo=UTC)
    offset = rules.offset_at_instant(start)
    found = []
    trans = rules.next_transition(start)
    while trans is not None and trans.instant < end:
        if found:
            assert found[-1].instant < trans.instant
        assert trans.offset_before == offset, f"For {trans}"
        assert rules.previous_transition(
            trans.instant + datetime.timedelta(seconds=1)
        ) == trans
        found.append(trans)
        offset = trans.offset_after
        trans = rules.next_transition(trans.instant)
    assert found[0] == spring
    assert len(found) == 8


def test_rules_start_defaults_to_last_transition(
    us_eastern_rules: StandardZoneRules, us_rules_only: StandardZoneRules
) -> None:
    """Test the default start of the recurring rules."""
    assert us_eastern_rules.last_rules_start == FALL_2022.instant
    assert us_rules_only.last_rules_start is None


def test_rules_start_equality(
    us_eastern_rules: ZoneRules,
    us_transition_rules: list[ZoneOffsetTransitionRule],
) -> None:
    """Test rules differing only by the start of the recurring rules."""
    history = [SPRING_2022, FALL_2022]
    assert (
        ZoneRules.of(EST, EST, [], history, us_transition_rules, FALL_2022.instant)
        == us_eastern_rules
    )
    assert (
        ZoneRules.of(
            EST,
            EST,
            [],
            history,
            us_transition_rules,
            datetime.datetime(2023, 1, 1, tzinfo=UTC),
        )
        != us_eastern_rules
    )


@pytest.mark.parametrize(
    "last_rules_start,match",
    [
        (datetime.datetime(2022, 7, 1, tzinfo=UTC), "must not be before"),
        (datetime.datetime(2023, 1, 1), "aware"),
    ],
)
def test_invalid_rules_start(
    us_transition_rules: list[ZoneOffsetTransitionRule],
    last_rules_start: datetime.datetime,
    match: str,
) -> None:
    """Test the recurring rules can not start before the history ends."""
    with pytest.raises(ValueError, match=match):
        ZoneRules.of(
            EST,
            EST,
            [],
            [SPRING_2022, FALL_2022],
            us_transition_rules,
            last_rules_start,
        )


class TestFixedZoneRules:
    """Tests for rules with a single offset."""

    @pytest.fixture
    def rules(self) -> ZoneRules:
        """Fixture for fixed offset rules."""
        return ZoneRules.of_offset(EST)

    def test_offsets(self, rules: ZoneRules) -> None:
        """Test the offset is the same for any date-time."""
        instant = datetime.datetime(2022, 7, 1, tzinfo=UTC)
        local = datetime.datetime(2022, 3, 13, 2, 30, 0)
        assert rules.is_fixed_offset
        assert rules.offset_at_instant(instant) == EST
        assert rules.offset(instant) == EST
        assert rules.offset(local) == EST
        assert rules.offset_info(local) == EST
        assert rules.valid_offsets(local) == [EST]
        assert rules.is_valid_offset(local, EST)
        assert not rules.is_valid_offset(local, EDT)
        assert rules.transition(local) is None
        assert rules.standard_offset(instant) == EST
        assert rules.daylight_savings(instant) == datetime.timedelta(0)
        assert not rules.is_daylight_savings(instant)

    def test_no_transitions(self, rules: ZoneRules) -> None:
        """Test there are no transitions."""
        instant = datetime.datetime(2022, 7, 1, tzinfo=UTC)
        assert rules.transitions == ()
        assert rules.transition_rules == ()
        assert rules.next_transition(instant) is None
        assert rules.previous_transition(instant) is None

    def test_requires_instant(self, rules: ZoneRules) -> None:
        """Test local and instant arguments are checked."""
        with pytest.raises(ValueError, match="Expected a timezone aware"):
            rules.offset_at_instant(datetime.datetime(2022, 7, 1))
        with pytest.raises(ValueError, match="Expected a local"):
            rules.offset_info(datetime.datetime(2022, 7, 1, tzinfo=UTC))

    def test_equality(self, rules: ZoneRules) -> None:
        """Test fixed rules are equal when the offset is equal."""
        assert rules == FixedZoneRules(EST)
        assert rules != FixedZoneRules(EDT)
        assert hash(rules) == hash(FixedZoneRules(EST))
        assert repr(rules) == "FixedZoneRules(-05:00)"

    def test_standard_rules_without_transitions(self) -> None:
        """Test standard rules with no transitions are a fixed offset."""
        rules = ZoneRules.of(EST, EST, [], [], [])
        assert rules.is_fixed_offset
        assert rules.offset(datetime.datetime(2022, 3, 13, 2, 30, 0)) == EST
