"""Tests for Application — router bootstrap, end to end."""

import logging
from pathlib import Path

import pytest
from conftest import TEMPLATES_DIR

from quest.application import Application, configure_logging
from quest.config import AppConfig
from quest.context import param, param_values
from quest.endpoint import Endpoint
from quest.preconditions import halt, require
from quest.router import Router
from quest.routine import Routine
from quest.testing import TestClient
from quest.view import View


class HelloWorldRouter(Router):
    name = "HelloWorldRouter"

    def routes(self) -> None:
        self.get(View("/", "hello.html", self.page))
        self.get(Endpoint("/greet", self.greet))
        self.get(Endpoint("/users/:id", self.user))
        self.put(Endpoint("/users/:name/rename", self.rename))
        self.get(Endpoint("/tags", lambda: param_values("tag")))
        self.get(Endpoint("/boom", self.boom))

    def page(self):
        return {"who": param("who") or "world"}

    def greet(self):
        who = param("who")
        require(who)
        return f"hello {who}"

    def user(self):
        return {"id": param(":id")}

    def rename(self):
        name = param(":name")
        require(name)
        return {"renamed": name}

    def boom(self):
        raise RuntimeError("kaboom")


class IndexRouter(Router):
    name = "IndexRouter"

    def routes(self) -> None:
        self.get(Endpoint("/ping", lambda: "pong"))


class AdminRouter(Router):
    name = "AdminRouter"

    def routes(self) -> None:
        self.before(Routine(self.check))
        self.get(Endpoint("/stats", lambda: {"users": 3}))

    def check(self):
        if param("token") != "secret":
            halt(401, "Unauthorized")


class BrokenRouter(Router):
    name = "BrokenRouter"

    def routes(self) -> None:
        raise ValueError("misconfigured")


@pytest.fixture
def application(config: AppConfig) -> Application:
    return Application(config, routers=[HelloWorldRouter, IndexRouter, AdminRouter])


class TestEndToEnd:
    async def test_endpoint_success(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/greet?who=ann")
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.json() == {"status": "success", "payload": "hello ann"}

    async def test_require_halts(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/greet")
        assert response.status == 400
        assert response.text == "Request is missing a required parameter"

    async def test_blank_param_halts(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/greet?who=")
        assert response.status == 400

    async def test_path_variable(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/users/42")
        assert response.json() == {"status": "success", "payload": {"id": "42"}}

    async def test_sibling_path_variable_keeps_its_name(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.put("/hello/world/users/ann/rename")
        assert response.json() == {"status": "success", "payload": {"renamed": "ann"}}

    async def test_param_values_drop_blanks(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/tags?tag=a&tag=&tag=b")
        assert response.json()["payload"] == ["a", "b"]

    async def test_failed_envelope_keeps_200(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/boom")
        assert response.status == 200
        assert response.json() == {"status": "failed", "payload": "kaboom"}

    async def test_view(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/hello/world/?who=ann")
        assert response.status == 200
        assert "<p>Hello ann</p>" in response.text

    async def test_index_router_at_root(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/ping")
        assert response.json()["payload"] == "pong"

    async def test_not_found(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.get("/nowhere")
        assert response.status == 404

    async def test_method_not_allowed(self, application: Application) -> None:
        async with TestClient(application) as client:
            response = await client.post("/ping")
        assert response.status == 405
        assert response.header("allow") == "GET"

    async def test_routine_halts(self, application: Application) -> None:
        async with TestClient(application) as client:
            denied = await client.get("/admin/stats")
            allowed = await client.get("/admin/stats?token=secret")
        assert denied.status == 401
        assert denied.text == "Unauthorized"
        assert allowed.json() == {"status": "success", "payload": {"users": 3}}


class TestLifecycle:
    def test_start_is_idempotent(self, application: Application) -> None:
        app = application.start()
        assert application.running
        assert application.start() is app
        assert len([r for r in app.routes if r.path == "/ping"]) == 1

    def test_start_when_running_skips_lock(self, application: Application) -> None:
        class _Unavailable:
            def __enter__(self):
                raise AssertionError("lock taken while running")

            def __exit__(self, *exc_info):
                return False

        app = application.start()
        application._lock = _Unavailable()
        assert application.start() is app

    def test_start_freezes(self, application: Application) -> None:
        assert application.start().frozen

    def test_register_after_start_raises(self, application: Application) -> None:
        application.start()
        with pytest.raises(RuntimeError):
            application.register(IndexRouter)

    def test_stop_discards_routes(self, application: Application) -> None:
        application.start()
        application.stop()
        assert not application.running
        assert not application.app.frozen
        app = application.start()
        assert {r.path for r in app.routes} >= {"/ping", "/hello/world/greet"}

    def test_decorator_registration(self, config: AppConfig) -> None:
        application = Application(config)

        @application.router
        class PingRouter(Router):
            name = "PingRouter"

            def routes(self) -> None:
                self.get(Endpoint("/", lambda: "pong"))

        app = application.start()
        assert [r.path for r in app.routes] == ["/ping/"]

    def test_factory_callable(self, config: AppConfig) -> None:
        application = Application(config, routers=[lambda: HelloWorldRouter("ApiRouter")])
        app = application.start()
        assert "/api/greet" in {r.path for r in app.routes}


class TestFailingRouters:
    async def test_failing_router_is_skipped(
        self, config: AppConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        application = Application(config, routers=[BrokenRouter, IndexRouter])
        with caplog.at_level(logging.ERROR, logger="quest.application"):
            application.start()
        assert "BrokenRouter" in caplog.text

        async with TestClient(application) as client:
            response = await client.get("/ping")
        assert response.json()["payload"] == "pong"

    def test_failing_constructor_is_skipped(self, config: AppConfig) -> None:
        def explode() -> Router:
            raise RuntimeError("cannot build")

        application = Application(config, routers=[explode, IndexRouter])
        app = application.start()
        assert [r.path for r in app.routes] == ["/ping"]


class TestStaticFiles:
    async def test_serves_public_directory(self, tmp_path: Path) -> None:
        public = tmp_path / "public"
        public.mkdir()
        (public / "robots.txt").write_text("User-agent: *")
        config = AppConfig(template_dir=TEMPLATES_DIR, static_dir=str(public))
        application = Application(config, routers=[IndexRouter])

        async with TestClient(application) as client:
            static = await client.get("/robots.txt")
            routed = await client.get("/ping")
        assert static.status == 200
        assert static.text == "User-agent: *"
        assert routed.json()["payload"] == "pong"

    def test_missing_directory_is_ignored(self, config: AppConfig) -> None:
        application = Application(config, routers=[IndexRouter])
        application.start()
        assert application.running


class TestConfigureLogging:
    def test_sets_quest_logger_level(self) -> None:
        logger = logging.getLogger("quest")
        previous = logger.level
        try:
            configure_logging("info")
            assert logger.level == logging.INFO
        finally:
            logger.setLevel(previous)
