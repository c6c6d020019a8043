"""Immutable HTTP request.

Frozen metadata with async body access.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from peep._internal.asgi import Receive
from peep.errors import PayloadTooLarge
from peep.http.headers import Headers
from peep.http.params import Params

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, query) is frozen at creation.
    The body is read asynchronously via ``.body()``, ``.text()``,
    ``.json()`` and ``.body_params()``.
    """

    method: str
    path: str
    headers: Headers
    query: Params
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive
    _max_body: int | None = None

    # Private: body and parsed-body cache (the dict itself is mutable)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def is_ajax(self) -> bool:
        """True if the request was sent with ``X-Requested-With: XMLHttpRequest``."""
        return (self.headers.get("x-requested-with") or "").lower() == "xmlhttprequest"

    @property
    def is_json(self) -> bool:
        return "json" in (self.content_type or "")

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Cached: the ASGI receive channel is consumed once.
        Raises ``PayloadTooLarge`` past the configured size limit.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if self._max_body is not None and size > self._max_body:
                raise PayloadTooLarge(self._max_body)
            chunks.append(chunk)
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    async def body_params(self) -> Params:
        """Parameters carried in a URL-encoded form or JSON object body.

        Other content types carry no parameters.
        """
        if "_params" in self._cache:
            return self._cache["_params"]
        ct = (self.content_type or "").split(";", 1)[0].strip().lower()
        if ct == FORM_CONTENT_TYPE:
            result = Params.from_query_string(await self.body())
        elif ct.endswith("json"):
            result = Params.from_json(await self.body())
        else:
            result = Params()
        self._cache["_params"] = result
        return result

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        receive: Receive,
        *,
        max_body: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=Params.from_query_string(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
            _max_body=max_body,
        )
