"""Gower exception hierarchy.

Shared across Router, App, dispatcher and templating so every module
raises and catches the same types. Per-request errors are caught at the
dispatch boundary; ``ConfigurationError`` is meant to abort startup.
"""

from dataclasses import dataclass


class GowerError(Exception):
    """Base for all gower-specific errors."""


class ConfigurationError(GowerError):
    """Raised when the app is wired up incorrectly.

    Bad route patterns, unresolvable app import strings. Never caught by
    the dispatcher.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(GowerError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. The dispatcher turns it into a
    plain-text response carrying ``status`` and ``headers``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route pattern matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: a route pattern matched but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "Method Not Allowed") -> None:
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", ", ".join(sorted(allowed))),),
        )


class TemplateRenderError(GowerError):
    """A template could not be loaded, compiled or executed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class SerializationError(GowerError):
    """A value handed to ``Context.write_json`` is not JSON-serializable."""
