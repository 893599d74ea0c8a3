"""Per-request handler context.

A ``Context`` bundles the inbound request, the substrings captured by
the route pattern, the owning app, and a response buffer the handler
writes into. It is created by the dispatcher for one request and
dropped once the response is sent.
"""

from __future__ import annotations

import json as json_module
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gower.errors import SerializationError
from gower.http.request import Request
from gower.http.response import Response

if TYPE_CHECKING:
    from gower.app import App
    from gower.config import ServerConfig
    from gower.stats import Stat

TEXT = "text/plain; charset=utf-8"
HTML = "text/html; charset=utf-8"
JSON = "application/json; charset=utf-8"


def _fprint(data: tuple[Any, ...]) -> str:
    """Concatenate operands, spacing only between two non-strings."""
    parts: list[str] = []
    prev_is_str = True
    for index, item in enumerate(data):
        is_str = isinstance(item, str)
        if index and not is_str and not prev_is_str:
            parts.append(" ")
        parts.append(str(item))
        prev_is_str = is_str
    return "".join(parts)


class Context:
    """Request, route matches and response buffer for one handler call.

    ``matches[0]`` is the full path; ``matches[1:]`` (also ``params``)
    are the capture groups::

        @app.get(r"/say-hi/([a-zA-Z]+)")
        def say_hi(ctx):
            ctx.write("Hi ", ctx.matches[1])
    """

    __slots__ = ("_chunks", "_headers", "app", "content_type", "matches", "named", "request", "status")

    def __init__(
        self,
        app: App,
        request: Request,
        matches: tuple[str, ...] = (),
        named: dict[str, str] | None = None,
    ) -> None:
        self.app = app
        self.request = request
        self.matches = matches
        self.named = named or {}
        self.status = 200
        self.content_type = TEXT
        self._headers: list[tuple[str, str]] = []
        self._chunks: list[bytes] = []

    # -- Accessors --

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    @property
    def params(self) -> tuple[str, ...]:
        """Capture groups only, without the full match."""
        return self.matches[1:]

    @property
    def config(self) -> ServerConfig:
        return self.app.config

    @property
    def stats(self) -> Stat:
        return self.app.stats

    # -- Response buffer --

    def set_status(self, status: int) -> None:
        self.status = status

    def set_header(self, name: str, value: str) -> None:
        """Set a response header, replacing earlier values of *name*."""
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]
        self._headers.append((name, value))

    def write(self, *data: Any) -> None:
        """Write plain text."""
        self.content_type = TEXT
        self._chunks.append(_fprint(data).encode("utf-8"))

    def write_template(self, filename: str, data: dict[str, Any] | None = None) -> None:
        """Render ``template_dir/filename`` with *data* and write it as HTML.

        Raises ``TemplateRenderError``; the dispatcher answers 500.
        """
        self.content_type = HTML
        path = Path(self.app.config.template_dir) / filename
        self._chunks.append(self.app.renderer.render(path, data))

    def write_json(self, data: Any) -> None:
        """Serialize *data* and write it as JSON.

        Raises ``SerializationError`` when *data* isn't serializable.
        """
        self.content_type = JSON
        try:
            out = json_module.dumps(data, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            msg = f"Cannot serialize {type(data).__name__} to JSON: {exc}"
            raise SerializationError(msg) from exc
        self._chunks.append(out.encode("utf-8"))

    @property
    def written(self) -> bool:
        return bool(self._chunks)

    def to_response(self) -> Response:
        """Freeze the buffer into a ``Response``."""
        return Response(
            body=b"".join(self._chunks),
            status=self.status,
            content_type=self.content_type,
            headers=tuple(self._headers),
        )
