"""Registry of providers supplying zone rules by zone id.

A provider supplies the rules for a set of zone ids. Providers are registered
with a registry, after which rules may be looked up by id:

```python
from chronocore.zone import provider

provider.register_provider(my_provider)
rules = provider.get_rules("America/New_York")
```

Each zone id is owned by the first provider that registers it, and a second
provider supplying the same id is rejected. Rules are loaded from the provider
on first use and cached.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

from chronocore.exceptions import ZoneNotFoundError, ZoneRulesConflictError

from .rules import ZoneRules

__all__ = [
    "ZoneRulesProvider",
    "ZoneRulesRegistry",
    "register_provider",
    "get_rules",
    "get_available_zone_ids",
    "refresh",
]

_LOGGER = logging.getLogger(__name__)


class ZoneRulesProvider(ABC):
    """A source of zone rules for a fixed set of zone ids."""

    @abstractmethod
    def provide_zone_ids(self) -> Iterable[str]:
        """Return the zone ids supplied by this provider."""

    @abstractmethod
    def provide_rules(self, zone_id: str) -> ZoneRules:
        """Return the rules for a zone id supplied by this provider."""

    def provide_refresh(self) -> bool:
        """Reload the underlying data, returning True if the rules may have changed."""
        return False


class ZoneRulesRegistry:
    """A mapping of zone id to the provider that owns it and its cached rules."""

    def __init__(self) -> None:
        """Initialize ZoneRulesRegistry."""
        self._lock = threading.Lock()
        self._providers: list[ZoneRulesProvider] = []
        self._zone_providers: dict[str, ZoneRulesProvider] = {}
        self._rules: dict[str, ZoneRules] = {}

    def register_provider(self, provider: ZoneRulesProvider) -> None:
        """Register a provider and all zone ids it supplies.

        The registration is rejected with ZoneRulesConflictError, and no ids
        are added, if any id is already owned by another provider.
        Registering the same provider again has no effect.
        """
        zone_ids = frozenset(provider.provide_zone_ids())
        with self._lock:
            if any(existing is provider for existing in self._providers):
                _LOGGER.debug("Provider %s is already registered", provider)
                return
            conflicts = sorted(
                zone_id for zone_id in zone_ids if zone_id in self._zone_providers
            )
            if conflicts:
                raise ZoneRulesConflictError(
                    "Unable to register zone as one already registered with that "
                    f"ID: {conflicts[0]}"
                )
            self._providers.append(provider)
            # Copy on write so snapshots taken earlier are unaffected
            zone_providers = dict(self._zone_providers)
            zone_providers.update({zone_id: provider for zone_id in zone_ids})
            self._zone_providers = zone_providers
        _LOGGER.debug("Registered %s with %d zone ids", provider, len(zone_ids))

    def get_available_zone_ids(self) -> frozenset[str]:
        """Return a snapshot of the currently registered zone ids."""
        return frozenset(self._zone_providers)

    def get_rules(self, zone_id: str) -> ZoneRules:
        """Return the rules for the zone id, loading them on first use."""
        if (rules := self._rules.get(zone_id)) is not None:
            return rules
        with self._lock:
            if (rules := self._rules.get(zone_id)) is not None:
                return rules
            if (provider := self._zone_providers.get(zone_id)) is None:
                raise ZoneNotFoundError(f"Unknown time-zone ID: {zone_id}")
            _LOGGER.debug("Loading rules for %s from %s", zone_id, provider)
            rules = provider.provide_rules(zone_id)
            self._rules[zone_id] = rules
        return rules

    def refresh(self) -> bool:
        """Refresh all providers, returning True if any rules may have changed.

        Cached rules are discarded and replaced on next use. Rules already
        returned to callers are unaffected.
        """
        changed = False
        with self._lock:
            for provider in self._providers:
                changed |= provider.provide_refresh()
            if changed:
                _LOGGER.debug("Discarding %d cached zone rules", len(self._rules))
                self._rules = {}
        return changed


_DEFAULT_REGISTRY = ZoneRulesRegistry()


def register_provider(provider: ZoneRulesProvider) -> None:
    """Register a provider with the process wide registry."""
    _DEFAULT_REGISTRY.register_provider(provider)


def get_rules(zone_id: str) -> ZoneRules:
    """Return the rules for a zone id from the process wide registry."""
    return _DEFAULT_REGISTRY.get_rules(zone_id)


def get_available_zone_ids() -> frozenset[str]:
    """Return a snapshot of the zone ids in the process wide registry."""
    return _DEFAULT_REGISTRY.get_available_zone_ids()


def refresh() -> bool:
    """Refresh the providers of the process wide registry."""
    return _DEFAULT_REGISTRY.refresh()
