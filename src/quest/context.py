"""Request-scoped context via ContextVar.

Handlers registered through a router take no arguments, so they read the
request they are serving from here::

    from quest.context import param

    def show():
        return load_user(param(":id"))

The server sets the request before dispatch and resets it afterwards.
``ContextVar`` is task-local under asyncio, so no locks are needed.
"""

from contextvars import ContextVar

from quest.http.request import Request

request_var: ContextVar[Request] = ContextVar("quest_request")
"""The current request. Set by the ASGI handler before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


def param(name: str) -> str | None:
    """Shortcut for ``get_request().param(name)``."""
    return get_request().param(name)


def param_values(name: str) -> list[str]:
    """Shortcut for ``get_request().param_values(name)``."""
    return get_request().param_values(name)
