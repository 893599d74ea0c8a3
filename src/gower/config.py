"""Server configuration.

ServerConfig is a frozen dataclass, built once at startup, read-only
afterwards. Command-line flags are layered on top with ``parse_args``;
only flags that were actually given override the base config.
"""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have defaults matching the command-line flags::

        config = ServerConfig(port=3000, debug=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1

    # Files
    static_dir: str | Path | None = "www/static"  # None disables static serving
    static_url: str = "/static"
    template_dir: str | Path = "www/templates"

    # Behaviour
    csrf: bool = False  # Accepted for compatibility, nothing reads it yet
    colored_log: bool = True
    debug: bool = False

    # Routing: keep scanning past a pattern match whose method differs
    method_fallthrough: bool = False

    @property
    def address(self) -> str:
        """``host:port`` as the listener binds it."""
        return f"{self.host}:{self.port}"

    @classmethod
    def from_argv(cls, argv: Sequence[str] | None = None) -> ServerConfig:
        """Build a config from command-line flags (``sys.argv`` by default)."""
        return parse_args(argv)


def add_server_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the server flags on *parser*.

    Every flag defaults to ``None`` so callers can tell "not given" apart
    from an explicit value.
    """
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Port number for server")
    parser.add_argument("--static-dir", default=None, help="Static directory")
    parser.add_argument("--template-dir", default=None, help="Templates directory")
    parser.add_argument(
        "--enable-csrf",
        dest="csrf",
        action="store_true",
        default=None,
        help="Enable cross site request forgery protection",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debugging (template reload, verbose logging)",
    )
    parser.add_argument(
        "--no-color",
        dest="colored_log",
        action="store_false",
        default=None,
        help="Disable ANSI colors in the request log",
    )
    parser.add_argument(
        "--method-fallthrough",
        action="store_true",
        default=None,
        help="Keep scanning routes when a pattern matches with another method",
    )


def apply_args(config: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    """Return *config* with every flag present in *args* applied."""
    overrides = {
        name: getattr(args, name)
        for name in (
            "host",
            "port",
            "static_dir",
            "template_dir",
            "csrf",
            "debug",
            "colored_log",
            "method_fallthrough",
        )
        if getattr(args, name, None) is not None
    }
    if not overrides:
        return config
    return replace(config, **overrides)


def parse_args(
    argv: Sequence[str] | None = None,
    base: ServerConfig | None = None,
) -> ServerConfig:
    """Parse server flags into a ``ServerConfig``.

    Unknown flags are an error, exactly as with ``argparse``.
    """
    parser = argparse.ArgumentParser(description="Gower HTTP server")
    add_server_arguments(parser)
    args = parser.parse_args(argv)
    return apply_args(base or ServerConfig(), args)
