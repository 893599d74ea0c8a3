"""``gower routes``: print the route table in match order."""

import argparse
import sys

from gower.cli._resolve import resolve_app
from gower.errors import ConfigurationError


def list_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
        routes = app.routes
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    width = max(len(route.method) for route in routes)
    for route in routes:
        name = getattr(route.handler, "__qualname__", repr(route.handler))
        print(f"{route.method:<{width}}  {route.source}  -> {name}")
