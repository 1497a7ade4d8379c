"""Waypost CLI — route table inspection.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="Waypost — method and path routing with CORS enforcement.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )
    routes_parser.add_argument(
        "--method",
        default=None,
        help="Only list routes for this HTTP method",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
