"""Application attributes: eager values and memoized initializers.

``attr("cache", Cache())`` stores a value as is. ``attr("version", lambda: ...)``
stores a ``Lazy`` cell: the initializer runs on the first read and the result
is returned on every read after that.
"""

import inspect
import threading
from collections.abc import Callable, Iterator
from typing import Any

_UNSET: Any = object()


class Lazy:
    """A value cell holding either an uncomputed initializer or its result.

    ``resolve()`` computes at most once. Initializers may take no arguments,
    or one argument (the receiver passed to ``resolve``, usually the app).
    An initializer that reads its own cell, directly or through other
    attributes, raises ``RuntimeError`` instead of waiting on itself.
    """

    __slots__ = ("_initializer", "_lock", "_name", "_resolving", "_value")

    def __init__(self, initializer: Callable[..., Any], name: str | None = None) -> None:
        self._initializer = initializer
        self._name = name
        self._value: Any = _UNSET
        self._resolving = False
        self._lock = threading.RLock()

    @property
    def resolved(self) -> bool:
        """True once the initializer has run."""
        return self._value is not _UNSET

    def resolve(self, receiver: Any = None) -> Any:
        """Return the cached result, running the initializer on first call."""
        if self._value is not _UNSET:
            return self._value
        with self._lock:
            if self._value is _UNSET:
                # RLock: only the resolving thread gets here while the flag is set.
                if self._resolving:
                    msg = (
                        f"Attribute {self._label()!r} is being initialized "
                        "and its initializer read it again"
                    )
                    raise RuntimeError(msg)
                self._resolving = True
                try:
                    self._value = _call_initializer(self._initializer, receiver)
                finally:
                    self._resolving = False
        return self._value

    def _label(self) -> str:
        if self._name is not None:
            return self._name
        return getattr(self._initializer, "__name__", repr(self._initializer))

    def __repr__(self) -> str:
        if self.resolved:
            return f"Lazy(resolved={self._value!r})"
        return f"Lazy(<{self._label()}>)"


def _call_initializer(initializer: Callable[..., Any], receiver: Any) -> Any:
    try:
        sig = inspect.signature(initializer)
    except (TypeError, ValueError):
        return initializer()
    positional = [
        p
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    if positional:
        return initializer(receiver)
    return initializer()


def is_initializer(value: Any) -> bool:
    """Whether *value* is declared lazily.

    Functions, lambdas, bound methods, and partials are initializers.
    Classes and other callable objects are stored as plain values.
    """
    if isinstance(value, Lazy):
        return True
    return callable(value) and not isinstance(value, type) and (
        inspect.isfunction(value)
        or inspect.ismethod(value)
        or inspect.isbuiltin(value)
        or hasattr(value, "func")  # functools.partial
    )


class Attributes:
    """Named attributes of an application. Last declaration wins.

    Usage::

        attrs = Attributes(receiver=app)
        attrs.declare("answer", lambda: 42)
        attrs.read("answer")  # runs the lambda
        attrs.read("answer")  # cached
    """

    __slots__ = ("_cells", "_receiver")

    def __init__(self, receiver: Any = None) -> None:
        self._cells: dict[str, Any] = {}
        self._receiver = receiver

    def declare(self, name: str, value: Any) -> None:
        """Bind *name* to an eager value or a lazy initializer.

        Re-declaring replaces the previous cell. A result an earlier
        initializer already produced stays with whoever read it; the next
        read evaluates the new declaration.
        """
        if not name.isidentifier():
            msg = f"Attribute name must be a valid identifier, got {name!r}"
            raise ValueError(msg)
        if is_initializer(value) and not isinstance(value, Lazy):
            value = Lazy(value, name)
        self._cells[name] = value

    def read(self, name: str) -> Any:
        """Return the value of *name*. Raises ``KeyError`` if undeclared."""
        cell = self._cells[name]
        if isinstance(cell, Lazy):
            return cell.resolve(self._receiver)
        return cell

    def cell(self, name: str) -> Any:
        """Return the stored cell for *name* without resolving it."""
        return self._cells[name]

    def __contains__(self, name: object) -> bool:
        return name in self._cells

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Attributes({self._cells!r})"
