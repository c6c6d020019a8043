"""Request-scoped context via ContextVar.

Provides:
- ``RequestContext``: everything a handler may ask about the request in
  flight (named placeholders, parameters, stash, request, response).
- ``context_var``: the current ``RequestContext`` for this task/thread.

The context is set by the request handler before the route handler runs
and reset right after. Outside a request, ``get_context()`` raises
``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. Each request gets its own context; nothing here is
    shared between requests.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from peep.http.params import Params
from peep.http.request import Request
from peep.http.response import ResponseHandle

if TYPE_CHECKING:
    from peep.app import App


class RequestContext:
    """State of one in-flight request.

    ``named`` and ``params`` are read-only views. ``stash`` is a plain dict
    the handler may change freely.
    """

    __slots__ = ("app", "named", "params", "request", "response", "stash")

    def __init__(
        self,
        app: App,
        request: Request,
        *,
        named: dict[str, str] | None = None,
        params: Params | None = None,
        response: ResponseHandle | None = None,
    ) -> None:
        self.app = app
        self.request = request
        self.named: dict[str, str] = dict(named or {})
        self.params: Params = params if params is not None else request.query
        self.response = response or ResponseHandle()
        self.stash: dict[str, Any] = {}

    def param(self, key: str) -> Any:
        """Value of parameter *key*, or ``None`` if it was not sent."""
        return self.params.get(key)

    def named_placeholder(self, key: str) -> str | None:
        """Value of named placeholder *key*, or ``None`` if it did not match."""
        return self.named.get(key)

    def __repr__(self) -> str:
        return f"<RequestContext {self.request.method} {self.request.path}>"


context_var: ContextVar[RequestContext] = ContextVar("peep_request_context")
"""The current request context. Set by the ASGI handler before dispatch."""


def get_context() -> RequestContext:
    """Return the current request context.

    Raises ``LookupError`` if called outside a request.
    """
    try:
        return context_var.get()
    except LookupError:
        msg = "No request in flight: request keywords only work inside a route handler"
        raise LookupError(msg) from None


def get_request() -> Request:
    """Return the current request. Raises ``LookupError`` outside a request."""
    return get_context().request
