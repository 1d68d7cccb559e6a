"""Invoke helpers — call user handlers uniformly.

Handlers can be ``def`` or ``async def`` and may take no arguments or a
single ``request`` argument. Any code that calls a user-provided handler
goes through :func:`invoke` so both checks live in one place.
"""

import functools
import inspect
from collections.abc import Callable
from typing import Any

from quest.http.request import Request


def _declares_request(handler: Callable[..., Any]) -> bool:
    sig = inspect.signature(handler)
    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request or param.annotation == "Request":
            return True
    return False


_cached_declares_request = functools.lru_cache(maxsize=1024)(_declares_request)


def wants_request(handler: Callable[..., Any]) -> bool:
    """True if *handler* declares a parameter for the current request.

    The answer is cached per handler. Unhashable callables are inspected
    on every call.
    """
    try:
        return _cached_declares_request(handler)
    except TypeError:
        return _declares_request(handler)


async def invoke(handler: Callable[..., Any], request: Request) -> Any:
    """Call *handler* and await the result if it's a coroutine.

    The request is passed only when the handler asks for it::

        def ping():
            return "pong"

        async def show(request):
            return request.param(":id")
    """
    result = handler(request) if wants_request(handler) else handler()
    if inspect.isawaitable(result):
        result = await result
    return result
