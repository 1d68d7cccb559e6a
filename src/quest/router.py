"""Routers — named collections of routes sharing a URL namespace.

A ``Router`` is responsible for defining accessible routes and serving an
``Endpoint`` or ``View`` for each of them.

The name of the router determines the absolute path prepended to the
relative paths defined in its ``routes()``: the words "Router" and "Index"
are stripped and the rest is converted from upper camel case to lowercase
with a forward slash at each word boundary. A router named
``HelloWorldRouter`` serves ``Endpoint("/greet", ...)`` at
``/hello/world/greet``; an ``IndexRouter`` serves from the site root.
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from quest.app import App
from quest.endpoint import Endpoint
from quest.errors import ConfigurationError, DuplicateRoute
from quest.namespace import RouterNamespace
from quest.rewrite import RewritableRoute
from quest.routine import Routine
from quest.routing.router import AFTER, BEFORE
from quest.view import View

logger = logging.getLogger("quest.router")


class Router(ABC):
    """Base class for application routers.

    Subclasses declare their name (or pass it to the constructor) and
    define ``routes()``::

        class HelloWorldRouter(Router):
            name = "HelloWorldRouter"

            def routes(self):
                self.before(Routine(check_session))
                self.get(View("/", "hello.html"))
                self.get(Endpoint("/greet/:who", self.greet))
                self.post(Endpoint("/greet", self.save_greeting))

    You may define several routes for the same path as long as each
    responds to a different HTTP verb (``GET /foo`` and ``POST /foo``).
    Registering the same verb and path twice in one router raises
    ``DuplicateRoute``, even if one is a ``View`` and the other an
    ``Endpoint``.
    """

    name: ClassVar[str | None] = None

    def __init__(self, name: str | None = None) -> None:
        declared = name or type(self).name
        if not declared:
            msg = f"{type(self).__qualname__} needs a name to derive its namespace from."
            raise ConfigurationError(msg)
        self.namespace = RouterNamespace.from_name(declared)
        self._app: App | None = None
        self._registered: set[tuple[str, str]] = set()

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} namespace={self.namespace.value!r}>"

    @abstractmethod
    def routes(self) -> None:
        """Define and register the routes handled by this router.

        Each route responds to one HTTP verb (``get``, ``post``, ``put``,
        ``delete``) and serves a ``View`` or an ``Endpoint``. Routines are
        added with ``before`` and ``after``.
        """

    def mount(self, app: App) -> None:
        """Run the registration pass against *app*. Allowed once per router."""
        if self._app is not None:
            msg = f"{self!r} has already registered its routes."
            raise ConfigurationError(msg)
        self._app = app
        self.routes()

    # -- Verbs --

    def get(self, route: Endpoint | View) -> None:
        """Serve GET requests with *route*."""
        self._register("GET", route)

    def post(self, route: Endpoint | View) -> None:
        """Serve POST requests with *route*."""
        self._register("POST", route)

    def put(self, route: Endpoint | View) -> None:
        """Serve PUT requests with *route*."""
        self._register("PUT", route)

    def delete(self, route: Endpoint | View) -> None:
        """Serve DELETE requests with *route*."""
        self._register("DELETE", route)

    # -- Routines --

    def before(self, routine: Routine) -> None:
        """Run *routine* before any of this router's routes."""
        self._register_routine(BEFORE, routine)

    def after(self, routine: Routine) -> None:
        """Run *routine* after any of this router's routes."""
        self._register_routine(AFTER, routine)

    # -- Internal --

    def _require_app(self) -> App:
        if self._app is None:
            msg = f"{self!r} is not mounted; routes can only be registered from routes()."
            raise ConfigurationError(msg)
        return self._app

    def _rewrite(self, route: RewritableRoute) -> None:
        route.prepend(self.namespace)
        if not route.path.startswith("/"):
            route.path = "/" + route.path

    def _register(self, verb: str, route: Endpoint | View) -> None:
        app = self._require_app()
        if not isinstance(route, (Endpoint, View)):
            msg = f"{verb} expects an Endpoint or a View, got {type(route).__name__}."
            raise ConfigurationError(msg)
        self._rewrite(route)
        key = (verb, route.path)
        if key in self._registered:
            raise DuplicateRoute(verb, route.path)
        app.register_route(verb, route.path, route)
        self._registered.add(key)
        logger.debug("%s %s -> %r", verb, route.path, route)

    def _register_routine(self, phase: str, routine: Routine) -> None:
        app = self._require_app()
        if not isinstance(routine, Routine):
            msg = f"{phase} expects a Routine, got {type(routine).__name__}."
            raise ConfigurationError(msg)
        self._rewrite(routine)
        app.register_filter(phase, routine.path, routine)
        logger.debug("%s %s -> %r", phase, routine.path, routine)
