"""``waypost routes`` — list registered routes in lookup order.

Lookup is first-match-wins, so the listing order within a method is the
order in which candidates are tried.
"""

import argparse
import sys

from waypost.cli._resolve import resolve_router
from waypost.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table for ``args.router``."""
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if args.method:
        wanted = args.method.upper()
        routes = [entry for entry in routes if entry.method == wanted]

    if not routes:
        print("No routes registered.")
        return

    rows = [(entry.method, entry.path, entry.handler_name) for entry in routes]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
