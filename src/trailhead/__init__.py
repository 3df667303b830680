"""Trailhead — a client-side path router.

Matches locations against ranked route patterns, resolves relative
links, and coordinates navigation over a single history subscription.

Basic usage::

    from trailhead import HistoryCoordinator, Router, provide_history
    from trailhead.testing import MemoryLocationStore

    def user(id, navigate):
        return f"user {id}"

    app = Router({"/": lambda: "home", "/users/:id": user})
    history = HistoryCoordinator(MemoryLocationStore("/users/42"))

    with provide_history(history):
        app.render()  # "user 42"

Redirects::

    from trailhead import RedirectBoundary, redirect_to

    with RedirectBoundary(history):
        redirect_to("/login")  # becomes history.navigate("/login", replace=True)
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "ClickEvent",
    "ConfigurationError",
    "HistoryCoordinator",
    "IdleScheduler",
    "Link",
    "LinkNav",
    "LinkState",
    "Location",
    "LocationStore",
    "NavigationCancelled",
    "NavigationError",
    "NavigationHandle",
    "RedirectBoundary",
    "RedirectRequest",
    "Route",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "Segment",
    "SegmentKind",
    "TrailheadError",
    "UpstreamFailure",
    "current_match",
    "get_history",
    "is_redirect",
    "link_state",
    "match",
    "pick",
    "provide_history",
    "rank",
    "redirect_to",
    "resolve",
    "segmentize",
    "should_navigate",
    "use_location",
    "use_match",
]

# Public name -> defining module. Keeps ``import trailhead`` cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "ClickEvent": "trailhead.links",
    "ConfigurationError": "trailhead.errors",
    "HistoryCoordinator": "trailhead.history.coordinator",
    "IdleScheduler": "trailhead.history.scheduler",
    "Link": "trailhead.links",
    "LinkNav": "trailhead.links",
    "LinkState": "trailhead.links",
    "Location": "trailhead.history.location",
    "LocationStore": "trailhead.history.store",
    "NavigationCancelled": "trailhead.errors",
    "NavigationError": "trailhead.errors",
    "NavigationHandle": "trailhead.history.handle",
    "RedirectBoundary": "trailhead.redirect",
    "RedirectRequest": "trailhead.redirect",
    "Route": "trailhead.routing.route",
    "RouteMatch": "trailhead.routing.route",
    "Router": "trailhead.routing.router",
    "RouterConfig": "trailhead.config",
    "Segment": "trailhead.routing.segments",
    "SegmentKind": "trailhead.routing.segments",
    "TrailheadError": "trailhead.errors",
    "UpstreamFailure": "trailhead.errors",
    "current_match": "trailhead.context",
    "get_history": "trailhead.context",
    "is_redirect": "trailhead.redirect",
    "link_state": "trailhead.links",
    "match": "trailhead.routing.matcher",
    "pick": "trailhead.routing.matcher",
    "provide_history": "trailhead.context",
    "rank": "trailhead.routing.segments",
    "redirect_to": "trailhead.redirect",
    "resolve": "trailhead.routing.resolve",
    "segmentize": "trailhead.routing.segments",
    "should_navigate": "trailhead.links",
    "use_location": "trailhead.routing.router",
    "use_match": "trailhead.routing.router",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trailhead`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
