"""Shared type aliases."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: receives a Context, return value is optional
Handler: TypeAlias = Callable[..., Any]
