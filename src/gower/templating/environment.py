"""Kida environment setup.

The renderer reads template files itself (it owns caching), so the
environment carries no loader: it only holds compile options plus the
filters and globals the app registered.
"""

from collections.abc import Callable
from typing import Any

from kida import Environment


def create_environment(
    filters: dict[str, Callable[..., Any]],
    globals_: dict[str, Any],
    *,
    autoescape: bool = True,
) -> Environment:
    """Create the kida Environment used by every template render.

    Called once while the app freezes; the environment is not modified
    afterwards.
    """
    env = Environment(autoescape=autoescape, auto_reload=False)

    if filters:
        env.update_filters(filters)

    for name, value in globals_.items():
        env.add_global(name, value)

    return env
