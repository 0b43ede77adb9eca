"""Development server.

Starts a pounce ASGI server with a live SoffitApp object.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a pounce server with the given ASGI app.

    Args:
        app: ASGI callable (SoffitApp instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        reload_dirs: Extra directories to watch alongside cwd, typically
            the template directory.
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
