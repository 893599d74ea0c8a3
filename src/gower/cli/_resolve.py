"""App import resolution: ``"module:attribute"`` strings to App instances."""

import importlib

from gower.app import App
from gower.errors import ConfigurationError


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a gower App instance.

    The attribute defaults to ``app`` (``"myapp"`` means ``myapp:app``).
    A callable that isn't an App is treated as a factory and called.

    Raises ``ConfigurationError`` if the module or attribute is missing
    or the result is not an App.
    """
    module_path, _, attr_name = import_string.partition(":")
    attr_name = attr_name or "app"

    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        msg = f"Cannot import {module_path!r}: {exc}"
        raise ConfigurationError(msg) from exc

    try:
        obj = getattr(module, attr_name)
    except AttributeError as exc:
        msg = f"Module {module_path!r} has no attribute {attr_name!r}"
        raise ConfigurationError(msg) from exc

    if callable(obj) and not isinstance(obj, App):
        obj = obj()

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a gower.App instance"
        raise ConfigurationError(msg)

    return obj
