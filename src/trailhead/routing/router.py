"""Full-tree routing over the active history.

A Router owns a ``{pattern: handler}`` mapping. On ``render()`` it picks
the best route for the current location, binds the match as the
enclosing match, and calls the handler. Routers rendered *inside* a
handler resolve their patterns under the enclosing route, so nesting
needs no extra wiring::

    def users(uri):
        return Router({
            ".": user_list,
            ":id": user_detail,
        }).render()

    app = Router({"/": home, "/users/*": users}, default=not_found)

    with provide_history(HistoryCoordinator(store)):
        page = app.render()
"""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from trailhead.config import RouterConfig
from trailhead.context import bind_match, current_match, get_history
from trailhead.history.coordinator import HistoryCoordinator
from trailhead.history.location import Location
from trailhead.routing.invoke import build_context, invoke
from trailhead.routing.matcher import base_path, create_routes, match, pick
from trailhead.routing.route import ROOT_MATCH, Route, RouteMatch

logger = logging.getLogger("trailhead.routing")

type Handler = Callable[..., Any]
type Navigate = Callable[..., Any]


class Router:
    """Route mapping bound to the active history.

    Route objects are compiled once per basepath and cached; the mapping
    itself is copied at construction and never mutated afterwards.
    """

    __slots__ = ("_compiled", "_config", "_default", "_history", "_lock", "_mapping")

    def __init__(
        self,
        routes: Mapping[str, Handler],
        default: Callable[[], Any] | None = None,
        *,
        history: HistoryCoordinator | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self._mapping: dict[str, Handler] = dict(routes)
        self._default = default
        self._history = history
        self._config = config or (history.config if history is not None else RouterConfig())
        self._compiled: dict[str, list[Route]] = {}
        self._lock = threading.Lock()
        # Compile eagerly for the top level so bad patterns fail at startup
        self.routes_for(base_path(self._config.basepath))

    @property
    def history(self) -> HistoryCoordinator:
        return self._history if self._history is not None else get_history()

    @property
    def mapping(self) -> dict[str, Handler]:
        return dict(self._mapping)

    def routes_for(self, basepath: str) -> list[Route]:
        """Return the Route list for *basepath*, compiling it on first use."""
        with self._lock:
            routes = self._compiled.get(basepath)
            if routes is None:
                routes = create_routes(self._mapping, basepath)
                self._compiled[basepath] = routes
            return routes

    def _basepath(self, enclosing: RouteMatch) -> str:
        if enclosing is ROOT_MATCH:
            return base_path(self._config.basepath)
        return base_path(enclosing.route.path)

    def match(self, pathname: str | None = None) -> RouteMatch | None:
        """Match *pathname* (default: the current location) without rendering."""
        if pathname is None:
            pathname = self.history.location.pathname
        routes = self.routes_for(self._basepath(current_match()))
        return pick(routes, pathname)

    def render(self) -> Any:
        """Render the best route for the current location.

        Falls back to ``default()`` and then to ``config.not_found``
        when nothing matches.
        """
        history = self.history
        location = history.location
        routes = self.routes_for(self._basepath(current_match()))
        found = pick(routes, location.pathname)

        if found is None:
            logger.debug("No route matches %s", location.pathname)
            if self._default is not None:
                fallback = self._default()
                if fallback:
                    return fallback
            return self._config.not_found

        available = build_context(
            found.params,
            uri=found.uri,
            location=location,
            navigate=history.navigate,
            match=found,
        )
        with bind_match(found):
            return invoke(found.route.handler, available)

    __call__ = render


def use_location(history: HistoryCoordinator | None = None) -> tuple[Location, Navigate]:
    """Return the current ``(location, navigate)`` pair."""
    history = history if history is not None else get_history()
    return history.location, history.navigate


@dataclass(frozen=True, slots=True)
class MatchState:
    """Result of ``use_match()`` — the match (if any) plus ``navigate``."""

    navigate: Navigate
    match: RouteMatch | None

    @property
    def params(self) -> dict[str, str]:
        return self.match.params if self.match is not None else {}

    @property
    def uri(self) -> str | None:
        return self.match.uri if self.match is not None else None


def use_match(pattern: str, history: HistoryCoordinator | None = None) -> MatchState:
    """Match a single *pattern* against the current location."""
    location, navigate = use_location(history)
    return MatchState(navigate=navigate, match=match(pattern, location.pathname))
