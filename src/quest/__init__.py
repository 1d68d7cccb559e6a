"""Quest: routers, JSON endpoints and template views on one ASGI server.

All application logic lives in routers. The router's name decides where
its routes are served::

    from quest import Application, Endpoint, Router, View, param, require

    app = Application()

    @app.router
    class HelloWorldRouter(Router):
        name = "HelloWorldRouter"

        def routes(self):
            self.get(View("/", "hello.html"))
            self.get(Endpoint("/greet", self.greet))

        def greet(self):
            who = param("who")
            require(who)
            return f"hello {who}"

    app.run()  # GET /hello/world/greet?who=ann
"""

__version__ = "0.1.0"
__all__ = [
    "NO_DATA",
    "App",
    "AppConfig",
    "Application",
    "ConfigurationError",
    "DuplicateRoute",
    "Endpoint",
    "HTTPError",
    "Halt",
    "MethodNotAllowed",
    "NotFound",
    "QuestError",
    "Request",
    "Response",
    "RouteAlreadyMounted",
    "Router",
    "RouterNamespace",
    "Routine",
    "ShortCircuit",
    "Template",
    "View",
    "client_fingerprint",
    "client_ip",
    "client_user_agent",
    "get_request",
    "halt",
    "is_reachable",
    "param",
    "param_values",
    "require",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import quest`` fast while providing a clean top-level API.
    """
    if name == "App":
        from quest.app import App

        return App

    if name == "AppConfig":
        from quest.config import AppConfig

        return AppConfig

    if name == "Application":
        from quest.application import Application

        return Application

    if name == "Router":
        from quest.router import Router

        return Router

    if name == "RouterNamespace":
        from quest.namespace import RouterNamespace

        return RouterNamespace

    if name == "Endpoint":
        from quest.endpoint import Endpoint

        return Endpoint

    if name == "View":
        from quest.view import View

        return View

    if name == "Routine":
        from quest.routine import Routine

        return Routine

    if name == "Request":
        from quest.http.request import Request

        return Request

    if name in ("Response", "ShortCircuit"):
        from quest.http import response as _resp

        return getattr(_resp, name)

    if name in ("client_fingerprint", "client_ip", "client_user_agent"):
        from quest.http import client as _client

        return getattr(_client, name)

    if name in ("NO_DATA", "Template"):
        from quest.templating import returns as _tmpl

        return getattr(_tmpl, name)

    if name in ("halt", "require"):
        from quest import preconditions as _pre

        return getattr(_pre, name)

    if name in ("get_request", "param", "param_values"):
        from quest import context as _ctx

        return getattr(_ctx, name)

    if name == "is_reachable":
        from quest.reachability import is_reachable

        return is_reachable

    if name in (
        "ConfigurationError",
        "DuplicateRoute",
        "HTTPError",
        "Halt",
        "MethodNotAllowed",
        "NotFound",
        "QuestError",
        "RouteAlreadyMounted",
    ):
        from quest import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
