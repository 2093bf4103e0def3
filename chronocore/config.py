"""Context scoped settings for resolving local date-times.

A local date-time inside a daylight savings gap never happens, and one inside
an overlap happens twice. Zone rules never pick an answer silently: the
caller passes a `Disambiguate` policy, or sets a default for a block of code:

```python
from chronocore.config import Disambiguate, use_disambiguation

with use_disambiguation(Disambiguate.COMPATIBLE):
    offset = rules.offset(local_date_time)
```

Without either, ambiguous local date-times raise an error.
"""

from __future__ import annotations

import contextlib
import contextvars
import enum
from collections.abc import Generator

__all__ = [
    "Disambiguate",
    "use_disambiguation",
    "get_disambiguation",
]


class Disambiguate(str, enum.Enum):
    """Policy for choosing an offset for a local date-time in a gap or overlap."""

    RAISE = "raise"
    """Raise SkippedTimeError or RepeatedTimeError."""

    EARLIER = "earlier"
    """Choose the offset that gives the earlier instant."""

    LATER = "later"
    """Choose the offset that gives the later instant."""

    COMPATIBLE = "compatible"
    """Use the offset before the transition.

    In a gap this moves the local time forward by the length of the gap, and
    in an overlap this picks the earlier of the two instants.
    """


_disambiguation = contextvars.ContextVar("disambiguation", default=Disambiguate.RAISE)


@contextlib.contextmanager
def use_disambiguation(policy: Disambiguate | str) -> Generator[None]:
    """Context manager to set the default disambiguation policy."""
    token = _disambiguation.set(Disambiguate(policy))
    try:
        yield
    finally:
        _disambiguation.reset(token)


def get_disambiguation() -> Disambiguate:
    """Return the default disambiguation policy for the current context."""
    return _disambiguation.get()
