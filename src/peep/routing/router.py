"""Insertion-ordered router.

Routes are tried in the order they were added; the first route whose
pattern and method both match wins. The table is frozen when the app
starts serving.
"""

from collections.abc import Sequence

from peep.errors import MethodNotAllowed, NotFound
from peep.routing.pattern import CompiledPattern, compile_pattern
from peep.routing.route import ANY, Route, RouteMatch


class Router:
    """Ordered route table.

    Usage::

        router = Router()
        router.add(Route(frozenset({"GET"}), "/users/:id", handler))
        router.compile()
        match = router.match("GET", "/users/42")
        match.named  # {"id": "42"}
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[tuple[Route, CompiledPattern]] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route. Must be called before compile().

        The path pattern is compiled here so bad patterns fail at
        declaration time.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._entries.append((route, compile_pattern(route.path)))

    @property
    def routes(self) -> Sequence[Route]:
        """All registered routes, in matching order."""
        return tuple(route for route, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the route table.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no pattern matches the path.
        Raises ``MethodNotAllowed`` if a pattern matches but no method does.
        """
        method = method.upper()
        allowed: set[str] = set()

        for route, pattern in self._entries:
            named = pattern.match(path)
            if named is None:
                continue
            if route.allows(method):
                return RouteMatch(route=route, named=named)
            allowed.update(route.methods - {ANY})

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")
