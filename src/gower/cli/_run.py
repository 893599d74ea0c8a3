"""``gower run``: apply command-line flags to an app and serve it."""

import argparse
import logging
import sys

from gower.cli._resolve import resolve_app
from gower.config import apply_args
from gower.errors import ConfigurationError


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, layer the flags over its config, then serve.

    Configuration errors (bad import string, invalid route pattern)
    print a message and exit with status 1.
    """
    try:
        app = resolve_app(args.app)
        app.configure(apply_args(app.config, args))
    except (ConfigurationError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(
        level=logging.DEBUG if app.config.debug else logging.INFO,
        format="%(asctime)s %(message)s",
    )

    from gower.server.runner import run_server

    run_server(app, app_path=args.app)
