"""Symbolic route destinations.

A route may name its handler instead of passing it::

    route("/login", "login")

    def login():
        ...

The name is looked up when a request arrives, so the handler can be
defined after the route. Explicitly registered names are tried first,
then the base namespace (by default the module that called ``activate()``).
"""

from collections.abc import Callable, Mapping
from types import ModuleType
from typing import Any

from peep.errors import UnresolvedDestinationError


class Destinations:
    """Name to handler lookup for string route destinations."""

    __slots__ = ("_base", "_registry")

    def __init__(self, base: Mapping[str, Any] | ModuleType | None = None) -> None:
        self._registry: dict[str, Callable[..., Any]] = {}
        self._base: Mapping[str, Any] | None = None
        if base is not None:
            self.set_base(base)

    @property
    def base(self) -> Mapping[str, Any] | None:
        return self._base

    def set_base(self, base: Mapping[str, Any] | ModuleType) -> None:
        """Set the namespace that bare names resolve against.

        A module is read through its ``__dict__``, so names the module
        defines later are still found.
        """
        if isinstance(base, ModuleType):
            base = vars(base)
        self._base = base

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        """Bind *name* to *handler* explicitly."""
        if not callable(handler):
            msg = f"Destination {name!r} must be callable, got {type(handler).__name__}"
            raise TypeError(msg)
        self._registry[name] = handler

    def resolve(self, name: str) -> Callable[..., Any]:
        """Return the callable *name* refers to.

        Dotted names walk attributes from the first segment, so
        ``"admin.login"`` finds ``login`` on whatever ``admin`` is.

        Raises ``UnresolvedDestinationError`` if the name is unknown or
        does not refer to a callable.
        """
        if name in self._registry:
            return self._registry[name]

        head, *rest = name.split(".")
        if self._base is None or head not in self._base:
            raise UnresolvedDestinationError(name)

        target = self._base[head]
        for part in rest:
            try:
                target = getattr(target, part)
            except AttributeError:
                raise UnresolvedDestinationError(name) from None

        if not callable(target):
            raise UnresolvedDestinationError(
                name, f"Route destination {name!r} is a {type(target).__name__}, not a callable"
            )
        return target
