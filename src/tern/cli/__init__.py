"""Tern CLI — route table inspection.

Entry point registered as ``tern`` in ``pyproject.toml``::

    [project.scripts]
    tern = "tern.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tern`` command."""
    parser = argparse.ArgumentParser(
        prog="tern",
        description="Tern — inspect route tables and dispatch order.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Level for the 'tern' logger (default: the router's config)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tern routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List patterns in dispatch order")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )

    # -- tern match -------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which routes match a path")
    match_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )
    match_parser.add_argument("path", help="Request path to match (e.g. /users/42)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")

    if args.command == "routes":
        from tern.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from tern.cli._match import run_match

        run_match(args)
