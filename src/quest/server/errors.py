"""Error handling pipeline for quest requests.

Maps HTTPError exceptions (including halts) and unexpected failures to
raw Response objects. Envelopes never see these: by the time an error
reaches this module it has already bypassed or escaped them.
"""

import logging

from quest.errors import HTTPError
from quest.http.request import Request
from quest.http.response import TEXT_CONTENT_TYPE, Response

logger = logging.getLogger("quest.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Send the error's status and detail as-is."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response(
        body=exc.detail or f"Error {exc.status}",
        status=exc.status,
        content_type=TEXT_CONTENT_TYPE,
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    body = f"Internal Server Error: {exc!r}" if debug else "Internal Server Error"
    return Response(body=body, status=500, content_type=TEXT_CONTENT_TYPE)
