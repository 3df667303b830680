"""Trailhead CLI — inspect how a route table ranks and matches.

Entry point registered as ``trailhead`` in ``pyproject.toml``::

    [project.scripts]
    trailhead = "trailhead.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trailhead`` command."""
    parser = argparse.ArgumentParser(
        prog="trailhead",
        description="Trailhead — a client-side path router.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trailhead routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes by specificity")
    routes_parser.add_argument(
        "routes",
        help="Import string (e.g. myapp:ROUTES)",
    )
    routes_parser.add_argument(
        "--basepath",
        default="/",
        help="Basepath the patterns are compiled under",
    )

    # -- trailhead match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route wins for a path")
    match_parser.add_argument(
        "routes",
        help="Import string (e.g. myapp:ROUTES)",
    )
    match_parser.add_argument("path", help="Pathname to match (e.g. /users/42)")
    match_parser.add_argument(
        "--basepath",
        default="/",
        help="Basepath the patterns are compiled under",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from trailhead.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from trailhead.cli._routes import run_match

        run_match(args)
