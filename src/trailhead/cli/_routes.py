"""``trailhead routes`` and ``trailhead match``.

``routes`` prints the compiled patterns from most to least specific;
``match`` prints the winning pattern and its params for one pathname.
"""

import argparse
import sys

from trailhead.cli._resolve import resolve_routes
from trailhead.errors import ConfigurationError
from trailhead.routing.matcher import create_routes, pick
from trailhead.routing.route import Route
from trailhead.routing.segments import rank, segmentize


def _load(args: argparse.Namespace) -> list[Route]:
    try:
        mapping = resolve_routes(args.routes)
        return create_routes(mapping, args.basepath)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _handler_name(route: Route) -> str:
    return route.name or str(route.handler)


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATTERN, SCORE, and handler, best first."""
    routes = _load(args)
    if not routes:
        print("No routes registered.")
        return

    # Same order pick() prefers: score, then depth, then registration
    scored: list[tuple[tuple[int, int, int], Route, int]] = []
    for index, route in enumerate(routes):
        segments = segmentize(route.path)
        score = rank(segments)
        scored.append(((-score, -len(segments), index), route, score))
    scored.sort(key=lambda item: item[0])
    rows = [(route.path, str(score), _handler_name(route)) for _, route, score in scored]

    max_path = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_score = max(max(len(r[1]) for r in rows), 5)  # "SCORE" header

    fmt = f"{{:<{max_path}}}  {{:>{max_score}}}  {{}}"
    print(fmt.format("PATTERN", "SCORE", "HANDLER"))
    sep_len = max_path + max_score + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for path, score, handler_name in rows:
        print(fmt.format(path, score, handler_name))


def run_match(args: argparse.Namespace) -> None:
    """Print the route that wins for ``args.path``; exit 1 when none does."""
    routes = _load(args)
    found = pick(routes, args.path)
    if found is None:
        print(f"No route matches {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"pattern: {found.route.path}")
    print(f"handler: {_handler_name(found.route)}")
    print(f"uri:     {found.uri}")
    for name, value in found.params.items():
        print(f"param:   {name} = {value!r}")
