"""ASGI application serving ``POST {mount_path}/{module}``.

The only component that touches raw ASGI.  Reads the payload class
header and body, runs the dispatcher, renders the selected view with
kida and attaches the ``Cache-Control`` header.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from soffit._internal.asgi import Receive, Scope, Send
from soffit.cache_policy import CACHE_CONTROL_HEADER
from soffit.config import RendererConfig
from soffit.dispatch import PAYLOAD_CLASS_HEADER, RenderDispatcher
from soffit.errors import HTTPError, MethodNotAllowed, NotFound
from soffit.http.response import Response
from soffit.properties import EnvironProperties
from soffit.server.errors import handle_http_error, handle_internal_error
from soffit.templating.integration import create_environment, render_view

if TYPE_CHECKING:
    from kida import Environment

    from soffit.properties import PropertySource

logger = logging.getLogger("soffit.server")

# A module is a single path segment; no traversal, no hidden directories
_MODULE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")

_ALLOWED = frozenset({"POST"})


def request_header(scope: Scope, name: str) -> str | None:
    """First value of request header *name* in *scope*, matched case-insensitively."""
    wanted = name.lower().encode("latin-1")
    for key, value in scope.get("headers", ()):
        if key.lower() == wanted:
            return value.decode("latin-1")
    return None


class SoffitApp:
    """The render endpoint as an ASGI callable.

    Usage::

        app = SoffitApp(RendererConfig(template_dir="templates"))
        # serve with any ASGI server, e.g. ``soffit run``
    """

    __slots__ = ("config", "dispatcher", "properties", "_env")

    def __init__(
        self,
        config: RendererConfig | None = None,
        properties: PropertySource | None = None,
        *,
        dispatcher: RenderDispatcher | None = None,
        env: Environment | None = None,
    ) -> None:
        self.config = config or RendererConfig()
        self.properties = properties if properties is not None else EnvironProperties()
        self.dispatcher = dispatcher or RenderDispatcher.from_config(self.config, self.properties)
        self._env = env if env is not None else create_environment(self.config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
        elif scope["type"] == "http":
            await self._handle_http(scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info(
                    "Serving views from %s under %s",
                    self.config.template_dir,
                    self.config.mount_path,
                )
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        method = scope["method"]
        path = scope["path"]
        try:
            module = self._match(method, path)
            body = await self._read_body(scope, receive)
            result = self.dispatcher.dispatch(
                request_header(scope, PAYLOAD_CLASS_HEADER), body, module
            )
            html = render_view(self._env, result, self.config.model_name)
            response = Response(body=html).with_header(CACHE_CONTROL_HEADER, result.cache_control)
        except HTTPError as exc:
            response = handle_http_error(exc, method, path, debug=self.config.debug)
        except Exception as exc:
            response = handle_internal_error(exc, method, path, debug=self.config.debug)

        await self._send(response, send)

    def _match(self, method: str, path: str) -> str:
        """Return the module named by *path*, or raise NotFound / MethodNotAllowed."""
        prefix = self.config.mount_path.rstrip("/") + "/"
        if not path.startswith(prefix):
            raise NotFound()
        module = path[len(prefix) :]
        if not _MODULE_RE.match(module) or ".." in module:
            raise NotFound()
        if method != "POST":
            raise MethodNotAllowed(_ALLOWED)
        return module

    async def _read_body(self, scope: Scope, receive: Receive) -> bytes:
        limit = self.config.max_content_length
        declared = request_header(scope, "content-length")
        if declared is not None and declared.isdigit() and int(declared) > limit:
            raise HTTPError(status=413, detail="Request body too large")

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > limit:
                raise HTTPError(status=413, detail="Request body too large")
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    async def _send(self, response: Response, send: Send) -> None:
        """Write *response* as one start message and one body message.

        The endpoint only answers with 200, 4xx and 5xx statuses, so
        there is always a body, even if empty.
        """
        body = response.body_bytes
        headers = [(b"content-type", response.content_type.encode("latin-1"))]
        headers.extend(
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in response.headers
        )
        headers.append((b"content-length", str(len(body)).encode("latin-1")))
        await send({"type": "http.response.start", "status": response.status, "headers": headers})
        await send({"type": "http.response.body", "body": body})
