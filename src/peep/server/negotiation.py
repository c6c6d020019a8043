"""Content negotiation: maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from peep.http.response import HTML, JSON, Response, ResponseHandle


def negotiate(value: Any, handle: ResponseHandle | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``           -> pass through
    2. ``ResponseHandle``     -> its current state
    3. ``None``               -> the request's ``res`` handle
    4. ``str``                -> text/html
    5. ``bytes``              -> application/octet-stream
    6. ``dict`` / ``list``    -> application/json
    7. ``(value, int)``       -> negotiate value, override status

    Headers set on the ``res`` handle are carried over to responses
    built from plain return values.
    """
    match value:
        case Response():
            return value
        case ResponseHandle():
            return value.to_response()
        case None:
            if handle is not None:
                return handle.to_response()
            return Response()
        case (inner, int() as status) if isinstance(value, tuple):
            return negotiate(inner, handle).with_status(status)
        case str():
            return _from_handle(handle, value, HTML)
        case bytes():
            return _from_handle(handle, value, "application/octet-stream")
        case dict() | list():
            return _from_handle(handle, json_module.dumps(value), JSON)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a str, bytes, dict, list, Response, or use res.render()."
            )
            raise TypeError(msg)


def _from_handle(handle: ResponseHandle | None, body: str | bytes, default_type: str) -> Response:
    if handle is None:
        return Response(body=body, content_type=default_type)
    base = handle.to_response()
    content_type = base.content_type if handle.content_type != HTML else default_type
    return Response(
        body=body,
        status=base.status,
        content_type=content_type,
        headers=base.headers,
    )
