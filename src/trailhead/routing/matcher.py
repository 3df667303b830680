"""Ranked route matching.

Every registered pattern is aligned against the pathname token by token.
Among the patterns that align, the winner is chosen by:

1. highest specificity score (see ``trailhead.routing.segments.rank``)
2. more segments (the more specific pattern)
3. registration order (first registered wins)

Matching never raises. An unmatched pathname, or a pattern that could
never align, yields ``None``.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from trailhead.errors import ConfigurationError
from trailhead.routing.route import Route, RouteMatch
from trailhead.routing.segments import (
    SPLAT_KEY,
    Segment,
    SegmentKind,
    rank,
    segmentize_path,
    split_path,
    validate_pattern,
)

logger = logging.getLogger("trailhead.routing")

# The key in a route mapping that means "the current base, exactly"
CURRENT_BASE = "."


def _align(segments: Sequence[Segment], tokens: Sequence[str]) -> dict[str, str] | None:
    """Positionally align pattern segments with pathname tokens.

    Returns the captured params, or ``None`` if the pattern does not fit.
    """
    params: dict[str, str] = {}
    last = len(segments) - 1

    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.ROOT:
            return params if not tokens else None

        if segment.kind is SegmentKind.SPLAT:
            if index != last:
                return None
            rest = "/".join(tokens[index:])
            params[SPLAT_KEY] = rest
            if segment.value:
                params[segment.value] = rest
            return params

        if index >= len(tokens):
            return None

        token = tokens[index]
        if segment.kind is SegmentKind.DYNAMIC:
            params[segment.value] = token
        elif segment.value != token:
            return None

    if len(tokens) > len(segments):
        return None
    return params


def _matched_uri(tokens: Sequence[str]) -> str:
    return "/" + "/".join(tokens)


def pick(routes: Sequence[Route], pathname: str) -> RouteMatch | None:
    """Return the best-ranked match for *pathname*, or ``None``.

    Usage::

        routes = [Route("/users/:id", show), Route("/users/new", create)]
        match = pick(routes, "/users/new")
        assert match.route.path == "/users/new"
    """
    tokens = segmentize_path(pathname)
    best: tuple[tuple[int, int, int], Route, dict[str, str]] | None = None

    for index, route in enumerate(routes):
        try:
            segments = validate_pattern(route.path)
        except ConfigurationError:
            logger.debug("Skipping invalid route pattern %r", route.path)
            continue

        params = _align(segments, tokens)
        if params is None:
            continue

        key = (rank(segments), len(segments), -index)
        if best is None or key > best[0]:
            best = (key, route, params)

    if best is None:
        return None

    _, route, params = best
    return RouteMatch(route=route, params=params, uri=_matched_uri(tokens))


def match(pattern: str, pathname: str) -> RouteMatch | None:
    """Match a single pattern against *pathname*."""
    return pick([Route(path=pattern)], pathname)


def base_path(pattern: str) -> str:
    """Return the basepath that routes nested under *pattern* resolve against.

    A trailing splat is dropped: routes nested under ``/files/*`` live
    under ``/files``.
    """
    tokens = split_path(pattern)
    if tokens and tokens[-1].endswith("*"):
        tokens.pop()
    return "/" + "/".join(tokens)


def join_paths(basepath: str, path: str) -> str:
    """Join *path* under *basepath*, producing a normalized absolute pattern."""
    return "/" + "/".join([*split_path(basepath), *split_path(path)])


def create_routes(
    config: Mapping[str, Callable[..., Any]],
    basepath: str = "/",
) -> list[Route]:
    """Compile a ``{pattern: handler}`` mapping into Route objects.

    Patterns are joined under *basepath*; the ``"."`` key maps to the
    basepath itself. Mapping order is registration order.

    Raises ``ConfigurationError`` for an invalid pattern.
    """
    routes: list[Route] = []
    for path, handler in config.items():
        full_path = join_paths(basepath, "") if path == CURRENT_BASE else join_paths(basepath, path)
        validate_pattern(full_path)
        routes.append(
            Route(
                path=full_path,
                handler=handler,
                name=getattr(handler, "__name__", None),
            )
        )
    return routes
