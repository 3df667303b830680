"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


def _no_handler(**_: Any) -> None:
    return None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created when a route mapping is compiled for a basepath. ``path`` is
    absolute and slash-normalized; ``handler`` is invoked with the
    resolved parameters when the route wins.
    """

    path: str
    handler: Callable[..., Any] = _no_handler
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match.

    ``uri`` is the concrete pathname the route matched, used as the
    base for relative links inside the matched subtree.
    """

    route: Route
    params: dict[str, str] = field(default_factory=dict)
    uri: str = ""


ROOT_MATCH = RouteMatch(route=Route(path=""), params={}, uri="")
"""The enclosing match outside of any router — empty path, empty uri."""
