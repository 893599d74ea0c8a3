"""Template rendering with a per-path compile cache.

In debug mode every ``render`` re-reads and recompiles the file, so edits
show up on the next request. Otherwise each path is compiled once and
the compiled template is reused for the life of the process.

Thread safety:
    Handlers render from worker threads. Cache population is guarded by
    a lock with a double check, so two requests racing on a cold path
    compile it once.
"""

import threading
from pathlib import Path
from typing import Any

from kida import Environment, Template, TemplateError
from kida.lexer import LexerError

from gower.errors import TemplateRenderError


class TemplateRenderer:
    """Load, cache and execute kida templates by file path.

    Usage::

        renderer = TemplateRenderer(env)
        html = renderer.render("www/templates/index.html", {"name": "Bob"})
    """

    __slots__ = ("_cache", "_env", "_loads_lock", "_lock", "debug", "loads")

    def __init__(self, env: Environment, *, debug: bool = False) -> None:
        self._env = env
        self._cache: dict[str, Template] = {}
        self._lock = threading.Lock()
        self._loads_lock = threading.Lock()
        self.debug = debug
        # Number of times a template file was read and compiled
        self.loads = 0

    def render(self, path: str | Path, data: dict[str, Any] | None = None) -> bytes:
        """Render the template at *path* with *data*; return UTF-8 bytes.

        Raises ``TemplateRenderError`` if the file is missing or fails to
        compile or execute.
        """
        key = str(path)
        template = self._load(key) if self.debug else self._cached(key)
        try:
            out = template.render(data or {})
        except TemplateError as exc:
            raise TemplateRenderError(key, str(exc)) from exc
        return out.encode("utf-8")

    def clear(self) -> None:
        """Drop every cached template."""
        with self._lock:
            self._cache.clear()

    def _cached(self, key: str) -> Template:
        template = self._cache.get(key)
        if template is not None:
            return template
        with self._lock:
            template = self._cache.get(key)
            if template is None:
                template = self._load(key)
                self._cache[key] = template
        return template

    def _load(self, key: str) -> Template:
        try:
            source = Path(key).read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateRenderError(key, exc.strerror or str(exc)) from exc
        try:
            template = self._env.from_string(source, name=key)
        except (TemplateError, LexerError) as exc:
            raise TemplateRenderError(key, str(exc)) from exc
        with self._loads_lock:
            self.loads += 1
        return template
