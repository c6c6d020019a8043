"""Route and RouteMatch frozen dataclasses."""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

ANY = "*"
"""Method token that matches every HTTP verb."""

Destination: TypeAlias = Callable[..., Any] | str
PathSpec: TypeAlias = str | re.Pattern[str]


def normalize_methods(methods: str | Iterable[str] | None) -> frozenset[str]:
    """Turn a verb, an iterable of verbs, or ``None`` into a method-set.

    ``None`` and ``"*"`` mean any method. The result is never empty.
    """
    if methods is None:
        return frozenset({ANY})
    if isinstance(methods, str):
        methods = [methods]
    result = frozenset(m.upper() for m in methods)
    if not result:
        msg = "A route needs at least one HTTP method (use None for any method)"
        raise ValueError(msg)
    if ANY in result:
        return frozenset({ANY})
    return result


@dataclass(frozen=True, slots=True)
class Route:
    """One registered route: method-set, path pattern, destination.

    Created by ``App.add_route()``; never changed once in the route table.
    """

    methods: frozenset[str]
    path: PathSpec
    destination: Destination

    @property
    def any_method(self) -> bool:
        return ANY in self.methods

    def allows(self, method: str) -> bool:
        """True if this route accepts *method*."""
        return self.any_method or method.upper() in self.methods

    @property
    def pattern_text(self) -> str:
        """The path as written, or the regex source for compiled patterns."""
        if isinstance(self.path, re.Pattern):
            return self.path.pattern
        return self.path

    @property
    def destination_name(self) -> str:
        if isinstance(self.destination, str):
            return self.destination
        return getattr(self.destination, "__name__", repr(self.destination))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    named: dict[str, str]
