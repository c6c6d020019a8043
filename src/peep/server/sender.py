"""ASGI response encoding: translates a Response into ASGI messages."""

from typing import Any

from peep.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def encode_response(response: Response, *, head: bool = False) -> list[dict[str, Any]]:
    """Build the ``http.response.start`` and ``http.response.body`` messages.

    For ``HEAD`` requests the headers (including Content-Length) describe
    the body, but the body itself is not sent.

    Raises ``UnicodeEncodeError`` if a header is not latin-1, before
    anything has been sent.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    return [
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        },
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        },
    ]
