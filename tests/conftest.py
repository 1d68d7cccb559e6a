"""Shared fixtures and helpers for the quest test suite."""

from pathlib import Path
from typing import Any

import pytest

from quest.app import App
from quest.config import AppConfig
from quest.http.request import Request

TEMPLATES_DIR = Path(__file__).parent / "templates"


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


def make_request(
    path: str = "/",
    *,
    method: str = "GET",
    query: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    client: tuple[str, int] | None = ("127.0.0.1", 5000),
    path_params: dict[str, str] | None = None,
) -> Request:
    """Build a Request without going through a server."""
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": headers or [],
        "client": client,
    }
    return Request.from_asgi(scope, _no_body, path_params=path_params)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    """An AppConfig using the test templates and no static directory."""
    return AppConfig(template_dir=TEMPLATES_DIR, static_dir=str(tmp_path / "public"))


@pytest.fixture
def app(config: AppConfig) -> App:
    return App(config)
