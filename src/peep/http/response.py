"""HTTP responses.

``Response`` is the immutable value the server sends, built through
chainable ``.with_*()`` transformations. ``ResponseHandle`` is the
per-request mutable builder behind the ``res`` keyword: handlers set a
status, headers, and a body on it, and the server turns it into a
``Response`` when the handler returns.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

HTML = "text/html; charset=utf-8"
TEXT = "text/plain; charset=utf-8"
JSON = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


class ResponseHandle:
    """Mutable response for the current request.

    Setters return the handle, so calls chain::

        res.set_status(403).json().render({"message": "Forbidden"})

    ``text()``, ``html()`` and ``json()`` pick the content type that
    ``render()`` will use. ``render()`` with a dict or list in JSON mode
    serializes it.
    """

    __slots__ = ("_body", "_content_type", "_headers", "_renderer", "_rendered", "_status")

    def __init__(self, renderer: Callable[[str, Mapping[str, Any]], str] | None = None) -> None:
        self._status = 200
        self._content_type = HTML
        self._headers: list[tuple[str, str]] = []
        self._body: str | bytes = ""
        self._rendered = False
        self._renderer = renderer

    @property
    def status(self) -> int:
        return self._status

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def rendered(self) -> bool:
        """True once a body has been rendered into this handle."""
        return self._rendered

    def set_status(self, status: int) -> ResponseHandle:
        self._status = status
        return self

    def set_header(self, name: str, value: str) -> ResponseHandle:
        self._headers.append((name, value))
        return self

    def set_content_type(self, content_type: str) -> ResponseHandle:
        self._content_type = content_type
        return self

    def text(self) -> ResponseHandle:
        return self.set_content_type(TEXT)

    def html(self) -> ResponseHandle:
        return self.set_content_type(HTML)

    def json(self) -> ResponseHandle:
        return self.set_content_type(JSON)

    def render(self, body: Any) -> ResponseHandle:
        """Set the response body.

        Dicts and lists are serialized to JSON (and switch the content
        type to JSON); other values are used as text.
        """
        if isinstance(body, dict | list):
            body = json_module.dumps(body)
            self._content_type = JSON
        elif not isinstance(body, str | bytes):
            body = str(body)
        self._body = body
        self._rendered = True
        return self

    def template(self, name: str, data: Mapping[str, Any] | None = None) -> ResponseHandle:
        """Render template *name* with *data* and use it as the body."""
        if self._renderer is None:
            msg = "No template renderer is bound to this response"
            raise RuntimeError(msg)
        self._content_type = HTML
        return self.render(self._renderer(name, data or {}))

    def redirect(self, url: str, status: int = 302) -> ResponseHandle:
        """Redirect to *url* with an empty body."""
        self._status = status
        self._headers.append(("Location", url))
        self._body = ""
        self._rendered = True
        return self

    def to_response(self) -> Response:
        """Freeze the current state into a ``Response``."""
        return Response(
            body=self._body,
            status=self._status,
            content_type=self._content_type,
            headers=tuple(self._headers),
        )

    def __repr__(self) -> str:
        return f"<ResponseHandle {self._status} {self._content_type!r} rendered={self._rendered}>"
