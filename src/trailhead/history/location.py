"""Location value type.

A Location is never mutated in place — every navigation produces a new
value. The coordinator relies on this: a location that is the *same
object* as the current one is a duplicate notification.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


def _new_key() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True, slots=True)
class Location:
    """A snapshot of the current position in history."""

    pathname: str = "/"
    search: str = ""
    hash: str = ""
    state: Any = None
    key: str = field(default_factory=_new_key)

    @classmethod
    def from_uri(cls, uri: str, state: Any = None) -> Location:
        """Build a Location from ``/path?query#hash``.

        ``search`` keeps its leading ``?`` and ``hash`` its leading ``#``.
        """
        rest, sep, fragment = uri.partition("#")
        pathname, qsep, query = rest.partition("?")
        return cls(
            pathname=pathname or "/",
            search=qsep + query,
            hash=sep + fragment,
            state=state,
        )

    @property
    def href(self) -> str:
        return self.pathname + self.search + self.hash
