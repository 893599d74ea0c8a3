"""Static file serving.

Requests under the configured URL prefix are answered straight from a
directory, with the prefix stripped. They bypass routing, the access
log and request stats.
"""

import mimetypes
from pathlib import Path

from gower.http.request import Request
from gower.http.response import Response


class StaticFiles:
    """Serve files from *directory* for paths under *prefix*.

    Security: resolves symlinks and verifies the final path is inside
    the directory, so ``..`` segments cannot escape it.

    Usage::

        static = StaticFiles("www/static", prefix="/static")
        if static.handles(request):
            response = static.serve(request)
    """

    __slots__ = ("_cache_control", "_directory", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._prefix = "/" + prefix.strip("/") + "/"
        self._cache_control = cache_control

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def directory(self) -> Path:
        return self._directory

    def handles(self, request: Request) -> bool:
        """True for GET/HEAD requests under the prefix."""
        return request.method in ("GET", "HEAD") and request.path.startswith(self._prefix)

    def serve(self, request: Request) -> Response:
        """Answer *request* with the file, 403 on traversal, 404 if missing."""
        relative = request.path[len(self._prefix) :]
        if "\x00" in relative:
            return Response(body="Forbidden", status=403)
        try:
            file_path = (self._directory / relative).resolve()
        except OSError:
            return Response(body="Not Found", status=404)

        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403)

        if file_path.is_dir():
            file_path = file_path / "index.html"

        try:
            body = file_path.read_bytes()
        except OSError:
            # Missing, a directory without index.html, or unreadable
            return Response(body="Not Found", status=404)

        content_type, _ = mimetypes.guess_type(str(file_path))
        return Response(
            body=body,
            content_type=content_type or "application/octet-stream",
        ).with_header("Cache-Control", self._cache_control)
