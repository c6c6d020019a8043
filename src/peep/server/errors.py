"""Error responses for the request pipeline.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging
import traceback

from peep.errors import HTTPError
from peep.http.request import Request
from peep.http.response import TEXT, Response

logger = logging.getLogger("peep.server")


def handle_http_error(exc: HTTPError, request: Request, debug: bool) -> Response:
    """Map an HTTPError to a Response with the same status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status, content_type=TEXT)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Log an unexpected exception and answer 500.

    In debug mode the body carries the traceback.
    """
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500, content_type=TEXT)
    return Response(body="Internal Server Error", status=500, content_type=TEXT)
