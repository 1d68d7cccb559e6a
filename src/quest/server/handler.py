"""ASGI handler — translates ASGI scope/messages to quest types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, runs middleware, before filters, the matched
route and after filters, and sends the Response back through ASGI send().
"""

from collections.abc import Callable
from contextvars import Token
from typing import Any

from kida import Environment

from quest._internal.asgi import Receive, Scope, Send
from quest._internal.invoke import invoke
from quest.context import request_var
from quest.errors import HTTPError
from quest.http.request import Request
from quest.http.response import Response, ShortCircuit
from quest.middleware.protocol import Next
from quest.routing.router import AFTER, BEFORE, Router
from quest.server.errors import handle_http_error, handle_internal_error
from quest.server.negotiation import negotiate
from quest.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    kida_env: Environment | None = None,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    token: Token[Request] = request_var.set(request)

    try:

        async def dispatch(req: Request) -> Response:
            return await _dispatch(req, router=router, kida_env=kida_env)

        # Wrap middleware around the dispatch
        handler: Next = dispatch
        for mw in reversed(middleware):

            async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)
    finally:
        request_var.reset(token)

    await send_response(response, send)


async def _dispatch(
    request: Request,
    *,
    router: Router,
    kida_env: Environment | None,
) -> Response:
    """Before filters, matched route, after filters.

    A filter that short-circuits replaces whatever the pipeline would
    have sent; a before filter also stops the route from running.
    """
    for hook in router.filters(BEFORE, request.path):
        outcome = await invoke(hook.action, request)
        if isinstance(outcome, ShortCircuit):
            return outcome.to_response()

    match = router.match(request.method, request.path)
    request = request.with_path_params(match.path_params)
    token = request_var.set(request)
    try:
        result = await invoke(match.route.handler, request)
        response = negotiate(result, kida_env=kida_env)

        for hook in router.filters(AFTER, request.path):
            outcome = await invoke(hook.action, request)
            if isinstance(outcome, ShortCircuit):
                response = outcome.to_response()
    finally:
        request_var.reset(token)
    return response
