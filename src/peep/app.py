"""Peep application class.

Mutable during setup (routes, attributes). Frozen when ``run()`` is
called or the first request arrives; after that the route table and the
attributes are read-only.
"""

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from types import ModuleType
from typing import Any

from kida import Environment

from peep._internal.asgi import Receive, Scope, Send
from peep.attributes import Attributes
from peep.config import AppConfig
from peep.routing.destinations import Destinations
from peep.routing.route import Destination, PathSpec, Route, normalize_methods
from peep.routing.router import Router
from peep.server.handler import handle_request
from peep.templating.integration import create_environment, render_template


class App:
    """The peep application.

    Usually created for you by ``peep.less.activate()``, but usable on
    its own::

        app = App(AppConfig(debug=True))
        app.add_route("GET", "/person/:name", hello)
        app.attr("answer", lambda: 42)
        asgi = app.run()

    Declared attributes read like ordinary attributes: ``app.answer``.

    Thread safety:
        The setup phase is single-threaded (module-level declarations).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even if several ASGI workers call
        ``__call__()`` on their first request at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_router",
        "attributes",
        "config",
        "destinations",
        "logger",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        base: Mapping[str, Any] | ModuleType | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.attributes: Attributes = Attributes(receiver=self)
        self.destinations: Destinations = Destinations(base)
        self.logger: logging.Logger = logging.getLogger("peep.app")
        self._router: Router = Router()
        self._kida_env: Environment | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Route table --

    def add_route(
        self,
        methods: str | Iterable[str] | None,
        path: PathSpec,
        destination: Destination,
    ) -> Route:
        """Append a route to the table and return it.

        *methods* is a verb, an iterable of verbs, or ``None`` for any
        method. Routes match in the order they were added.
        """
        self._check_not_frozen()
        if not (callable(destination) or isinstance(destination, str)):
            msg = (
                "Route destination must be a callable or the name of one, "
                f"got {type(destination).__name__}"
            )
            raise TypeError(msg)
        route = Route(normalize_methods(methods), path, destination)
        self._router.add(route)
        return route

    @property
    def routes(self) -> Sequence[Route]:
        """Registered routes in matching order."""
        return self._router.routes

    # -- Attributes --

    def attr(self, name: str, value: Any) -> None:
        """Declare an attribute; callables are evaluated lazily on first read."""
        self._check_not_frozen()
        if hasattr(type(self), name):
            msg = f"Attribute {name!r} would shadow App.{name}"
            raise ValueError(msg)
        self.attributes.declare(name, value)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not slots, methods, or properties.
        try:
            attributes = object.__getattribute__(self, "attributes")
        except AttributeError:
            raise AttributeError(name) from None
        if name in attributes:
            return attributes.read(name)
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    # -- Templates --

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render template *name* with *data* using the app's kida environment.

        The environment is created on first use, so apps without
        templates never need a template directory.
        """
        if self._kida_env is None:
            self._kida_env = create_environment(self.config)
        return render_template(
            self._kida_env,
            name,
            data or {},
            default_ext=self.config.template_ext,
        )

    # -- Entry points --

    def run(self) -> "App":
        """Freeze the app and return its ASGI entry point.

        Safe to call more than once: the app is compiled the first time
        and the same callable is returned every time.
        """
        self._ensure_frozen()
        return self

    def serve(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with the pounce development server."""
        from peep.server.dev import run_dev_server

        self._ensure_frozen()
        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            reload_dirs=self.config.reload_dirs,
        )

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            app=self,
            router=self._router,
            destinations=self.destinations,
            renderer=self.render,
            debug=self.config.debug,
            max_body=self.config.max_content_length,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup and acknowledge startup/shutdown."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its read-only runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self._router.compile()
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Declare routes and attributes before calling run()."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        return f"<App routes={len(self._router)} attributes={len(self.attributes)}>"
