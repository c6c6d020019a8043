"""Development server.

Starts a pounce ASGI server with the live peep App object.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but a peep script holds a
    live ``App`` object, so ``pounce.Server`` is used directly with the
    ASGI callable.

    Args:
        app: ASGI callable (the peep App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        reload_dirs: Extra directories to watch alongside cwd.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_dirs=reload_dirs,
    )
    server = Server(config, app)
    server.run()
