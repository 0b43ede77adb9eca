"""Error handling pipeline for render requests.

Maps HTTPError exceptions and unexpected failures to plain-text
Response objects.
"""

import logging
import traceback

from soffit.errors import HTTPError
from soffit.http.response import Response

logger = logging.getLogger("soffit.server")

_TEXT = "text/plain; charset=utf-8"


def handle_http_error(exc: HTTPError, method: str, path: str, *, debug: bool) -> Response:
    """Map an HTTPError to a Response carrying its status and headers."""
    if exc.status >= 500:
        # Missing templates and broken payload wiring are deployment defects
        logger.error("%d %s %s — %s", exc.status, method, path, exc.detail)
    else:
        logger.debug("%d %s %s — %s", exc.status, method, path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status, content_type=_TEXT)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, method: str, path: str, *, debug: bool) -> Response:
    """Handle unexpected exceptions (template errors included) as 500s."""
    logger.exception("500 %s %s", method, path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500, content_type=_TEXT)
    return Response(body="Internal Server Error", status=500, content_type=_TEXT)
