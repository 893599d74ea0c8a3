"""Request dispatcher: the only place per-request failures are caught.

Matches the request against the route table, runs the handler with a
fresh ``Context``, and maps every outcome to a response:

- ``NotFound`` / ``MethodNotAllowed`` / any ``HTTPError`` → its status
- any other exception → 500 with a generic body, logged with traceback
- otherwise → whatever the handler wrote (or returned)

Every dispatched request produces exactly one access-log line and one
``Stat.increment`` call, whatever path it took.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from gower._internal.asgi import Receive, Scope, Send
from gower._internal.invoke import invoke
from gower.context import Context
from gower.errors import HTTPError
from gower.http.request import Request
from gower.http.response import Response
from gower.server.access_log import log_request
from gower.server.sender import send_response

if TYPE_CHECKING:
    from gower.app import App

logger = logging.getLogger("gower.server")

SERVER_ERROR_BODY = "Server Error"


async def handle_request(scope: Scope, receive: Receive, send: Send, *, app: App) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    head = request.method == "HEAD"

    static = app.static_files
    if static is not None and static.handles(request):
        await send_response(static.serve(request), send, head=head)
        return

    started = time.perf_counter()
    status = 500
    label = request.method
    try:
        try:
            response = await dispatch(request, app)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            response = error_response(exc)
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            label = f"{request.method} ({exc})"
            response = Response(body=SERVER_ERROR_BODY, status=500)
        status = response.status
        await send_response(response, send, head=head)
    finally:
        duration = time.perf_counter() - started
        log_request(
            label,
            request.path,
            request.remote_addr,
            duration,
            success=status < 400,
            colored=app.config.colored_log,
        )
        app.stats.increment(status, duration)


async def dispatch(request: Request, app: App) -> Response:
    """Route *request*, call the handler and collect its response.

    Raises whatever the router or handler raises.
    """
    match = app.router.match(request.method, request.path)
    ctx = Context(app, request, match.matches, match.named)
    result = await invoke(match.route.handler, ctx)
    return _to_response(ctx, result)


def _to_response(ctx: Context, result: Any) -> Response:
    """Prefer an explicitly returned value, else the context buffer."""
    if isinstance(result, Response):
        return result
    if result is None:
        return ctx.to_response()
    if isinstance(result, (dict, list)):
        ctx.write_json(result)
    else:
        ctx.write(result)
    return ctx.to_response()


def error_response(exc: HTTPError) -> Response:
    """Plain-text response for an ``HTTPError``."""
    response = Response(body=exc.detail or str(exc.status), status=exc.status)
    return response.with_headers(dict(exc.headers))
