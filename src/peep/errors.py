"""Peep exception hierarchy.

Shared across the keyword layer, router, app, and request handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PeepError(Exception):
    """Base for all peep-specific errors."""


class ConfigurationError(PeepError):
    """Raised when app configuration is invalid.

    Surfaces at ``activate()`` time and aborts startup.
    """


class InitializationError(PeepError):
    """The application singleton was initialized twice, or read before it existed."""


class UnresolvedDestinationError(PeepError):
    """A symbolic route destination did not resolve to a callable.

    Raised at request time, not registration time. The request handler
    turns it into a 500 response.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        msg = detail or f"Route destination {name!r} is not defined in the base namespace"
        super().__init__(msg)


@dataclass(frozen=True, slots=True)
class HTTPError(PeepError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. The ASGI handler catches these
    and turns them into a response with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: a route pattern matched but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
