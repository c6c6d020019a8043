"""Less typing: keywords for single-file web apps.

One application per process, declared with plain function calls::

    from peep import less

    less.activate()

    get("/person/:name", lambda: "Hello " + named("name"))

    application = run()

``activate()`` creates the process-wide ``App`` and binds the keywords
(``app``, ``attr``, ``route``, ``get``, ``post``, ``put``, ``run``,
``param``, ``stash``, ``named``, ``req``, ``res``, ``template``,
``debug``, ``error``) into the calling module. They are also ordinary
functions of this module, so explicit imports work just as well::

    from peep.less import activate, get, named, run

    activate()
    get("/person/:name", lambda: "Hello " + named("name"))
    application = run()

``run()`` returns the ASGI application; serve it with ``peep run app.py``
or any ASGI server (``app`` is itself a keyword, hence ``application``).

String destinations are looked up, at request time, in the module that
called ``activate()``::

    route("/login", "login")

    def login():
        ...
"""

import logging
import sys
from collections.abc import Callable, Mapping, MutableMapping
from types import ModuleType
from typing import Any

from peep.app import App
from peep.config import AppConfig
from peep.context import get_context
from peep.errors import InitializationError
from peep.http.request import Request
from peep.http.response import ResponseHandle
from peep.routing.route import Destination, PathSpec, Route

logger = logging.getLogger("peep.less")

__all__ = [
    "KEYWORDS",
    "ApplicationHolder",
    "activate",
    "app",
    "attr",
    "current",
    "debug",
    "error",
    "get",
    "initialize",
    "named",
    "param",
    "post",
    "put",
    "req",
    "res",
    "route",
    "run",
    "stash",
    "template",
]


# -- Application holder --


class ApplicationHolder:
    """Owns the one application instance of a process.

    ``initialize()`` may succeed once; ``current()`` fails until it has.
    There is no way to drop the instance: it lives until the process exits.
    """

    __slots__ = ("_app",)

    def __init__(self) -> None:
        self._app: App | None = None

    @property
    def initialized(self) -> bool:
        return self._app is not None

    def initialize(self, config: AppConfig | None = None) -> App:
        """Construct the application. Raises ``InitializationError`` the second time."""
        if self._app is not None:
            msg = "The application is already initialized; activate() runs once per process"
            raise InitializationError(msg)
        self._app = App(config)
        return self._app

    def current(self) -> App:
        """Return the live application. Raises ``InitializationError`` before ``initialize()``."""
        if self._app is None:
            msg = "The application is not initialized yet; call activate() first"
            raise InitializationError(msg)
        return self._app


_holder = ApplicationHolder()


def initialize(config: AppConfig | None = None) -> App:
    """Initialize the process-wide application."""
    return _holder.initialize(config)


def current() -> App:
    """Return the process-wide application."""
    return _holder.current()


# -- Activation --


def activate(
    namespace: MutableMapping[str, Any] | ModuleType | None = None,
    /,
    **config: Any,
) -> App:
    """Create the application and bind the keywords into *namespace*.

    *namespace* defaults to the globals of the calling module. It is also
    the base namespace string route destinations resolve against.
    Keyword arguments become the ``AppConfig``; names it does not know are
    kept in ``AppConfig.options``.

    A keyword replaces whatever the namespace already bound to that name;
    replacing something other than the keyword itself logs a warning.

    Raises ``InitializationError`` if called twice, ``ConfigurationError``
    for bad configuration.
    """
    if namespace is None:
        namespace = sys._getframe(1).f_globals
    elif isinstance(namespace, ModuleType):
        namespace = vars(namespace)

    application = initialize(AppConfig.from_options(**config))
    application.destinations.set_base(namespace)

    for name, keyword in KEYWORDS.items():
        existing = namespace.get(name, keyword)
        if existing is not keyword:
            logger.warning(
                "activate() replaced %r in %s with the peep keyword",
                name,
                namespace.get("__name__", "<namespace>"),
            )
        namespace[name] = keyword

    logger.debug(
        "Activated %r for %s with %d keywords",
        application,
        namespace.get("__name__", "<namespace>"),
        len(KEYWORDS),
    )
    return application


# -- Routes --


def route(path: PathSpec | tuple[Any, PathSpec], destination: Destination) -> Route:
    """Add a route.

    *path* is a path string (any method), a compiled regex (any method),
    or a ``(methods, path)`` pair where *methods* is a verb or a list of
    verbs. *destination* is a handler or the name of one::

        route("/hello/:name", lambda: "Hello " + named("name"))
        route(("POST", "/edit/:id"), save)
        route((["GET", "POST"], "/form"), "form")
    """
    methods, pattern = _split_path_spec(path)
    return current().add_route(methods, pattern, destination)


def get(path: PathSpec | tuple[Any, PathSpec], destination: Destination) -> Route:
    """Add a GET route. A ``(methods, path)`` pair is passed through unchanged."""
    return route(_with_method("GET", path), destination)


def post(path: PathSpec | tuple[Any, PathSpec], destination: Destination) -> Route:
    """Add a POST route. A ``(methods, path)`` pair is passed through unchanged."""
    return route(_with_method("POST", path), destination)


def put(path: PathSpec | tuple[Any, PathSpec], destination: Destination) -> Route:
    """Add a PUT route. A ``(methods, path)`` pair is passed through unchanged."""
    return route(_with_method("PUT", path), destination)


def _with_method(method: str, path: PathSpec | tuple[Any, PathSpec]) -> tuple[Any, PathSpec]:
    if isinstance(path, tuple | list):
        return path
    return (method, path)


def _split_path_spec(path: PathSpec | tuple[Any, PathSpec]) -> tuple[Any, PathSpec]:
    if isinstance(path, tuple | list):
        if len(path) != 2:
            msg = f"A route path pair must be (methods, path), got {path!r}"
            raise ValueError(msg)
        methods, pattern = path
        return methods, pattern
    return None, path


# -- Attributes and entry point --


def attr(name: str, value: Any) -> None:
    """Declare an application attribute, read back as ``app().name``.

    A function is an initializer: it runs on the first read, with the
    application as its argument if it takes one, and the result is kept.
    """
    current().attr(name, value)


def run() -> App:
    """Freeze the application and return its ASGI entry point."""
    return current().run()


def app() -> App:
    """The application instance."""
    return current()


# -- Request accessors --


def param(key: str | None = None) -> Any:
    """All request parameters, or the value of *key* (``None`` if absent)."""
    ctx = get_context()
    if key is None:
        return ctx.params
    return ctx.param(key)


def stash(key: str | None = None) -> Any:
    """The request stash dict, or the value under *key* (``None`` if absent)."""
    ctx = get_context()
    if key is None:
        return ctx.stash
    return ctx.stash.get(key)


def named(key: str | None = None) -> Any:
    """All named placeholders, or the value of *key* (``None`` if absent)."""
    ctx = get_context()
    if key is None:
        return ctx.named
    return ctx.named_placeholder(key)


def req() -> Request:
    """The current request."""
    return get_context().request


def res() -> ResponseHandle:
    """The current response."""
    return get_context().response


def template(name: str, data: Mapping[str, Any] | None = None) -> ResponseHandle:
    """Render template *name* with *data* into the current response."""
    return get_context().response.template(name, data)


# -- Logging --


def debug(message: str, *args: Any) -> None:
    """Log *message* at DEBUG on the application logger."""
    current().logger.debug(message, *args)


def error(message: str, *args: Any) -> None:
    """Log *message* at ERROR on the application logger."""
    current().logger.error(message, *args)


KEYWORDS: Mapping[str, Callable[..., Any]] = {
    "app": app,
    "attr": attr,
    "route": route,
    "get": get,
    "post": post,
    "put": put,
    "run": run,
    "param": param,
    "stash": stash,
    "named": named,
    "req": req,
    "res": res,
    "template": template,
    "debug": debug,
    "error": error,
}
"""Keyword name to implementation, bound into the caller by ``activate()``."""