"""Tests for View — template rendering routes."""

import pytest
from conftest import make_request

from quest.app import App
from quest.errors import ConfigurationError
from quest.http.response import ShortCircuit
from quest.preconditions import halt
from quest.templating.returns import NO_DATA, Template
from quest.testing import TestClient
from quest.view import View


class TestViewResult:
    async def test_returns_template_with_data(self) -> None:
        view = View("/", "title.html", lambda: {"title": "Home"})
        result = await view(make_request())
        assert result == Template("title.html", {"title": "Home"})

    async def test_without_handler_uses_no_data(self) -> None:
        result = await View("/", "static.html")(make_request())
        assert isinstance(result, Template)
        assert result.context is NO_DATA

    async def test_handler_returning_no_data(self) -> None:
        result = await View("/", "static.html", lambda: View.NO_DATA)(make_request())
        assert result.context is NO_DATA

    async def test_halt_short_circuits(self) -> None:
        def handler():
            halt(401, "login required")

        result = await View("/", "title.html", handler)(make_request())
        assert result == ShortCircuit(401, "login required")

    async def test_other_exceptions_propagate(self) -> None:
        def handler():
            raise ConfigurationError("broken view")

        with pytest.raises(ConfigurationError, match="broken view"):
            await View("/", "title.html", handler)(make_request())


class TestViewRendering:
    async def test_renders_template(self, app: App) -> None:
        app.register_route("GET", "/", View("/", "title.html", lambda: {"title": "Home"}))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "text/html" in response.content_type
            assert "<h1>Home</h1>" in response.text

    async def test_static_template(self, app: App) -> None:
        app.register_route("GET", "/about", View("/about", "static.html"))

        async with TestClient(app) as client:
            response = await client.get("/about")
            assert "<p>static page</p>" in response.text

    async def test_autoescapes_data(self, app: App) -> None:
        app.register_route("GET", "/", View("/", "title.html", lambda: {"title": "<b>x</b>"}))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert "<b>x</b>" not in response.text

    async def test_halt_sends_raw_status(self, app: App) -> None:
        def handler():
            halt(401, "login required")

        app.register_route("GET", "/", View("/", "title.html", handler))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 401
            assert response.text == "login required"
