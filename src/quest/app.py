"""The ASGI application that routers register into.

Mutable during setup (route, filter and middleware registration).
Frozen at runtime when ``__call__()`` is first invoked.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from quest._internal.asgi import Receive, Scope, Send
from quest.config import AppConfig
from quest.middleware.protocol import Middleware
from quest.routing.route import Filter, Route
from quest.routing.router import PHASES, Router
from quest.server.handler import handle_request
from quest.templating.integration import create_environment

VERBS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    method: str
    path: str
    handler: Callable[..., Any]


class App:
    """The quest server.

    Exposes the registration API routers mount into::

        app = App()
        app.register_route("GET", "/hello/world/greet", handler)
        app.register_filter("before", "/hello/world/*", action)

    Thread safety:
        Registration is single-threaded (one pass at startup). The freeze
        transition uses a Lock + double-check so exactly one worker compiles
        the route table on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_middleware",
        "_middleware_list",
        "_pending_filters",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._pending_filters: list[Filter] = []
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._kida_env: Environment | None = None

    # -- Registration API --

    def register_route(self, verb: str, path: str, handler: Callable[..., Any]) -> None:
        """Register *handler* for *verb* requests to the absolute *path*."""
        self._check_not_frozen()
        method = verb.upper()
        if method not in VERBS:
            msg = f"Unsupported verb {verb!r}; expected one of {sorted(VERBS)}."
            raise ValueError(msg)
        self._pending_routes.append(_PendingRoute(method, path, handler))

    def register_filter(self, phase: str, pattern: str, action: Callable[..., Any]) -> None:
        """Run *action* before or after every route whose path matches *pattern*."""
        self._check_not_frozen()
        if phase not in PHASES:
            msg = f"Unsupported filter phase {phase!r}; expected one of {PHASES}."
            raise ValueError(msg)
        self._pending_filters.append(Filter(phase, pattern, action))

    def add_middleware(self, middleware: Middleware) -> None:
        """Wrap route dispatch in *middleware*. First added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    @property
    def routes(self) -> list[Route]:
        """Compiled routes (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Compile the route table now instead of on the first request."""
        self._ensure_frozen()

    def reset(self) -> None:
        """Drop every registration and compiled state so setup can start over."""
        with self._freeze_lock:
            self._pending_routes.clear()
            self._pending_filters.clear()
            self._middleware_list.clear()
            self._router = None
            self._middleware = ()
            self._kida_env = None
            self._frozen = False

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn (blocking)."""
        import uvicorn

        self._ensure_frozen()
        uvicorn.run(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            kida_env=self._kida_env,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so registration errors surface before traffic."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            router.add(Route(path=pending.path, handler=pending.handler, method=pending.method))
        for hook in self._pending_filters:
            router.add_filter(hook)
        router.compile()
        self._router = router
        self._middleware = tuple(self._middleware_list)
        self._kida_env = create_environment(self.config)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, filters, and middleware before the first request."
            )
            raise RuntimeError(msg)
