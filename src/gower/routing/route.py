"""Route and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass

from gower._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled (pattern, method, handler) binding.

    ``source`` keeps the pattern as registered; ``pattern`` is the same
    expression anchored at both ends.
    """

    source: str
    pattern: re.Pattern[str]
    method: str
    handler: Handler

    def match(self, path: str) -> re.Match[str] | None:
        return self.pattern.match(path)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """A route together with the substrings its pattern captured.

    ``matches[0]`` is the full path, followed by each capture group in
    order. Groups that did not participate are ``""``.
    """

    route: Route
    matches: tuple[str, ...]
    named: dict[str, str]

    @property
    def groups(self) -> tuple[str, ...]:
        return self.matches[1:]
