"""Start a pounce ASGI server for a gower App.

Debug mode runs a single worker with reload; otherwise the configured
worker count is used without reload.
"""

from __future__ import annotations

import logging
import os
import platform
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gower.app import App

logger = logging.getLogger("gower.server")


def runtime_info(app: App) -> list[tuple[str, str]]:
    """Rows for the startup banner."""
    return [
        ("PID", str(os.getpid())),
        ("Host", app.config.address),
        ("CPUs", str(os.cpu_count() or 1)),
        ("Arch", platform.machine()),
        ("OS", platform.system()),
        ("Python", platform.python_version()),
        ("Routes", str(len(app.routes))),
    ]


def log_banner(app: App) -> None:
    lines = ["", "Runtime", ""]
    lines.extend(f"* {name:<13}: {value}" for name, value in runtime_info(app))
    lines.extend(["", "Serving", ""])
    logger.info("\n".join(lines))


def run_server(app: App, *, app_path: str | None = None) -> None:
    """Bind the listener and serve until interrupted.

    Args:
        app: A gower App (frozen by the caller).
        app_path: Optional ``"module:attribute"`` import string so
            pounce can reimport the app on reload.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = app.config
    log_banner(app)

    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        workers=1 if config.debug else config.workers,
        reload=config.debug,
        debug=config.debug,
        access_log=False,
    )
    Server(server_config, app, app_path=app_path).run()
