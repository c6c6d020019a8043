"""Peep: terse single-file web services.

A small keyword layer over an ASGI application::

    from peep import less

    less.activate()

    get("/person/:name", lambda: "Hello " + named("name"))

    application = run()

Serve it with ``peep run app.py`` or any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "InitializationError",
    "Lazy",
    "MethodNotAllowed",
    "NotFound",
    "PeepError",
    "Request",
    "Response",
    "UnresolvedDestinationError",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import peep`` fast while providing a clean top-level API.
    """
    if name == "App":
        from peep.app import App

        return App

    if name == "AppConfig":
        from peep.config import AppConfig

        return AppConfig

    if name == "Lazy":
        from peep.attributes import Lazy

        return Lazy

    if name == "Request":
        from peep.http.request import Request

        return Request

    if name == "Response":
        from peep.http.response import Response

        return Response

    if name == "get_request":
        from peep.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InitializationError",
        "MethodNotAllowed",
        "NotFound",
        "PeepError",
        "UnresolvedDestinationError",
    ):
        from peep import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
