"""Ordered regex router.

Linear scan in registration order. By default the first route whose
pattern matches the path decides the outcome: its method either matches
(dispatch) or it doesn't (405), even if a later route would match both.
``method_fallthrough=True`` keeps scanning for a route matching both.
"""

import re

from gower._internal.types import Handler
from gower.errors import ConfigurationError, MethodNotAllowed, NotFound
from gower.routing.route import Route, RouteMatch

METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})


def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile a route pattern anchored at both ends.

    Raises ``ConfigurationError`` for an invalid expression.
    """
    try:
        return re.compile(rf"^(?:{source})\Z")
    except re.error as exc:
        msg = f"Invalid route pattern {source!r}: {exc}"
        raise ConfigurationError(msg) from exc


def _to_match(route: Route, found: re.Match[str]) -> RouteMatch:
    matches = (found.group(0), *(group or "" for group in found.groups()))
    named = {name: value or "" for name, value in found.groupdict().items()}
    return RouteMatch(route=route, matches=matches, named=named)


class Router:
    """Route table with first-match-wins lookup.

    Usage::

        router = Router()
        router.add(r"/say-hi/([a-zA-Z]+)", "GET", say_hi)
        router.compile()
        match = router.match("GET", "/say-hi/Bob")
        match.groups  # ("Bob",)
    """

    __slots__ = ("_compiled", "_method_fallthrough", "_routes")

    def __init__(self, *, method_fallthrough: bool = False) -> None:
        self._routes: list[Route] = []
        self._compiled = False
        self._method_fallthrough = method_fallthrough

    def add(self, source: str, method: str, handler: Handler) -> Route:
        """Compile and append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        method = method.upper()
        if method not in METHODS:
            msg = f"Unsupported HTTP method {method!r} for route {source!r}"
            raise ConfigurationError(msg)

        route = Route(source=source, pattern=compile_pattern(source), method=method, handler=handler)
        self._routes.append(route)
        return route

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in match-priority order."""
        return tuple(self._routes)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        Raises ``NotFound`` if no pattern matches the path.
        Raises ``MethodNotAllowed`` if a pattern matches but the method
        doesn't (see the module docstring for which routes count).
        """
        method = method.upper()
        allowed: set[str] = set()

        for route in self._routes:
            found = route.match(path)
            if found is None:
                continue
            if route.method == method:
                return _to_match(route, found)
            allowed.add(route.method)
            if not self._method_fallthrough:
                break

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound()
