"""Request log lines.

Format: ``<method> <path> <remote-addr> <duration>``. With colors on,
the method is bold green for successful requests and bold red
otherwise, like the terminal output of the dev server.
"""

import logging

logger = logging.getLogger("gower.access")

GREEN = "\033[1;32m{}\033[0m"
RED = "\033[1;31m{}\033[0m"


def format_duration(seconds: float) -> str:
    """Human-readable duration: ``850µs``, ``12.3ms``, ``1.42s``."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.0f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.1f}ms"
    return f"{seconds:.2f}s"


def format_line(
    method: str,
    path: str,
    remote_addr: str,
    duration: float,
    *,
    success: bool,
    colored: bool,
) -> str:
    if colored:
        method = (GREEN if success else RED).format(method)
    return f"{method} {path} {remote_addr} {format_duration(duration)}"


def log_request(
    method: str,
    path: str,
    remote_addr: str,
    duration: float,
    *,
    success: bool,
    colored: bool,
) -> None:
    """Emit one access-log line at INFO."""
    logger.info(
        "%s",
        format_line(method, path, remote_addr, duration, success=success, colored=colored),
    )
