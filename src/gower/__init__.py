"""Gower: a minimal regex-routed HTTP server.

Routes are regular expressions matched against the whole path, in
registration order. Handlers receive a ``Context`` and write plain text,
templates or JSON. Every request is counted in ``app.stats``.

Basic usage::

    from gower import App, ServerConfig

    app = App(ServerConfig.from_argv())

    @app.get(r"/say-hi/([a-zA-Z]+)")
    def say_hi(ctx):
        ctx.write("Hi ", ctx.matches[1])

    @app.get(r"/stats")
    def stats(ctx):
        ctx.write_json(ctx.stats.snapshot())

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "Context",
    "GowerError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Response",
    "Route",
    "SerializationError",
    "ServerConfig",
    "Stat",
    "TemplateRenderError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import gower`` fast while providing a clean top-level API.
    """
    if name == "App":
        from gower.app import App

        return App

    if name == "ServerConfig":
        from gower.config import ServerConfig

        return ServerConfig

    if name == "Context":
        from gower.context import Context

        return Context

    if name == "Request":
        from gower.http.request import Request

        return Request

    if name == "Response":
        from gower.http.response import Response

        return Response

    if name == "Route":
        from gower.routing.route import Route

        return Route

    if name == "Stat":
        from gower.stats import Stat

        return Stat

    if name in (
        "ConfigurationError",
        "GowerError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "SerializationError",
        "TemplateRenderError",
    ):
        from gower import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
