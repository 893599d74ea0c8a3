"""Gower CLI: run an app with command-line server flags.

Entry point registered as ``gower`` in ``pyproject.toml``::

    [project.scripts]
    gower = "gower.cli:main"
"""

import argparse
import sys

from gower.config import add_server_arguments


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``gower`` command."""
    parser = argparse.ArgumentParser(
        prog="gower",
        description="Gower: a minimal regex-routed HTTP server.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- gower run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    add_server_arguments(run_parser)

    # -- gower routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes in match order")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from gower.cli._run import run_app

        run_app(args)
    elif args.command == "routes":
        from gower.cli._routes import list_routes

        list_routes(args)
