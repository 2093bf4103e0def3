"""Library for zone offsets and the rules for how they change over time."""

from .offset import ZoneOffset
from .provider import ZoneRulesProvider, ZoneRulesRegistry
from .rules import FixedZoneRules, OffsetInfo, StandardZoneRules, ZoneRules
from .transition import ZoneOffsetTransition
from .transition_rule import TimeDefinition, ZoneOffsetTransitionRule

__all__ = [
    "FixedZoneRules",
    "OffsetInfo",
    "StandardZoneRules",
    "TimeDefinition",
    "ZoneOffset",
    "ZoneOffsetTransition",
    "ZoneOffsetTransitionRule",
    "ZoneRules",
    "ZoneRulesProvider",
    "ZoneRulesRegistry",
]
