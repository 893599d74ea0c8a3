"""Gower application class.

Mutable during setup (route registration, template filters). Frozen on
the first request or when ``run()`` is called: the route table is
compiled and the template environment, renderer and static file server
are created once.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from gower._internal.asgi import Receive, Scope, Send
from gower._internal.types import Handler
from gower.config import ServerConfig
from gower.routing.route import Route
from gower.routing.router import Router, compile_pattern
from gower.server.handler import handle_request
from gower.server.static import StaticFiles
from gower.stats import Stat
from gower.templating.environment import create_environment
from gower.templating.renderer import TemplateRenderer


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    pattern: str
    method: str
    handler: Handler


class App:
    """The gower application.

    Owns everything a request needs: config, route table, stats, template
    renderer. Nothing is kept at module level, so several apps can live
    in one process (and in one test session).

    Usage::

        app = App(ServerConfig.from_argv())

        @app.get(r"/say-hi/([a-zA-Z]+)")
        def say_hi(ctx):
            ctx.write("Hi ", ctx.matches[1])

        app.run()

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_renderer",
        "_router",
        "_static_files",
        "_template_filters",
        "_template_globals",
        "config",
        "stats",
    )

    def __init__(self, config: ServerConfig | None = None, *, stats: Stat | None = None) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self.stats: Stat = stats or Stat()
        self._pending_routes: list[_PendingRoute] = []
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._template_globals: dict[str, Any] = {}
        self._frozen = False
        self._freeze_lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._renderer: TemplateRenderer | None = None
        self._static_files: StaticFiles | None = None

    # -- Route registration --

    def register(self, pattern: str, method: str, handler: Handler) -> None:
        """Register *handler* for *method* requests whose path matches *pattern*.

        *pattern* is a regular expression matched against the whole
        path. It is compiled here so a bad pattern fails at startup with
        ``ConfigurationError``. Routes match in registration order.
        """
        self._check_not_frozen()
        compile_pattern(pattern)
        self._pending_routes.append(_PendingRoute(pattern, method.upper(), handler))

    def route(self, pattern: str, method: str = "GET") -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.register(pattern, method, func)
            return func

        return decorator

    def get(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, "GET")

    def post(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, "POST")

    def put(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, "PUT")

    def delete(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route(pattern, "DELETE")

    # -- Template extension --

    def template_filter(self, name: str | None = None) -> Callable[..., Any]:
        """Register a kida template filter via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_filters[name or func.__name__] = func
            return func

        return decorator

    def template_global(self, name: str | None = None) -> Callable[..., Any]:
        """Register a kida template global via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_globals[name or func.__name__] = func
            return func

        return decorator

    # -- Startup --

    def configure(self, config: ServerConfig) -> None:
        """Replace the config and freeze the app with it.

        Used by ``gower run`` to layer command-line flags over the app's
        own config. Raises ``RuntimeError`` if the app already froze and
        ``ConfigurationError`` if the route table fails to compile.
        """
        with self._freeze_lock:
            self._check_not_frozen()
            self.config = config
            self._freeze()

    # -- Compiled state --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Compiled routes in match-priority order."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    @property
    def renderer(self) -> TemplateRenderer:
        self._ensure_frozen()
        assert self._renderer is not None
        return self._renderer

    @property
    def static_files(self) -> StaticFiles | None:
        self._ensure_frozen()
        return self._static_files

    # -- Running --

    def run(self, *, app_path: str | None = None) -> None:
        """Compile the app and serve it with pounce until interrupted."""
        from gower.server.runner import run_server

        self._ensure_frozen()
        run_server(self, app_path=app_path)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, app=self)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so configuration errors surface before serving."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router(method_fallthrough=self.config.method_fallthrough)
        for pending in self._pending_routes:
            router.add(pending.pattern, pending.method, pending.handler)
        router.compile()
        self._router = router

        env = create_environment(self._template_filters, self._template_globals)
        self._renderer = TemplateRenderer(env, debug=self.config.debug)

        if self.config.static_dir is not None:
            self._static_files = StaticFiles(
                self.config.static_dir,
                prefix=self.config.static_url,
                cache_control="no-cache" if self.config.debug else "public, max-age=3600",
            )

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and template filters before calling app.run()."
            )
            raise RuntimeError(msg)
