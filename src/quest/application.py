"""Application bootstrap.

Each ``Application`` runs within an ASGI server and serves requests using
the routers registered with it. All application logic lives in routers,
so a typical entry point is just::

    app = Application()
    app.register(IndexRouter, HelloWorldRouter)

    if __name__ == "__main__":
        app.run()

Routers are listed explicitly. Nothing scans modules or subclasses.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from quest import reachability
from quest._internal.asgi import Receive, Scope, Send
from quest.app import App
from quest.config import AppConfig
from quest.middleware.static import StaticFiles
from quest.router import Router

logger = logging.getLogger("quest.application")

type RouterFactory = Callable[[], Router]


def configure_logging(level: str) -> None:
    """Set the level of every ``quest.*`` logger."""
    logging.getLogger("quest").setLevel(level.upper())


class Application:
    """Registers routers once and exposes the result as an ASGI app.

    ``start()`` performs the single registration pass: each router factory
    (usually a ``Router`` subclass) is called with no arguments and the
    resulting router registers its routes. A router that fails to build or
    register is logged and skipped; the rest still start.
    """

    __slots__ = ("_lock", "_routers", "_running", "app", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        routers: Iterable[RouterFactory] = (),
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.app = App(self.config)
        self._routers: list[RouterFactory] = list(routers)
        self._running = False
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._running

    def register(self, *routers: RouterFactory) -> None:
        """Add router factories to the registration pass."""
        if self._running:
            msg = "Cannot register routers after the application has started."
            raise RuntimeError(msg)
        self._routers.extend(routers)

    def router[F: RouterFactory](self, factory: F) -> F:
        """Class decorator form of ``register``::

            @app.router
            class HelloWorldRouter(Router):
                name = "HelloWorldRouter"
                ...
        """
        self.register(factory)
        return factory

    def start(self) -> App:
        """Register every router and freeze the app.

        Later calls return the running app as-is.
        """
        if self._running:
            return self.app
        with self._lock:
            if not self._running:
                configure_logging(self.config.log_level)
                reachability.configure(
                    max_size=self.config.reachability_cache_size,
                    timeout=self.config.reachability_timeout,
                )
                self._serve_static_files()
                for factory in self._routers:
                    self._mount(factory)
                self.app.freeze()
                self._running = True
        return self.app

    def stop(self) -> None:
        """Stop the application and discard every registered route."""
        with self._lock:
            if self._running:
                self.app.reset()
                self._running = False

    def run(self) -> None:
        """Start and serve on ``config.host``:``config.port`` (blocking)."""
        self.start().run()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point. Starts the application on first use."""
        await self.start()(scope, receive, send)

    def _serve_static_files(self) -> None:
        static_dir = self.config.static_dir
        if static_dir is None:
            return
        if not Path(static_dir).is_dir():
            logger.debug("Static directory %s not found; not serving static files", static_dir)
            return
        self.app.add_middleware(StaticFiles(static_dir, prefix=self.config.static_url))

    def _mount(self, factory: RouterFactory) -> None:
        try:
            router = factory()
            logger.info("Registering routes from %r", router)
            router.mount(self.app)
        except Exception:
            logger.exception("Skipping router %r: registration failed", factory)
