"""Tests for Request parameter access and body reading."""

from typing import Any

import pytest
from conftest import make_request

from quest.context import get_request, param, param_values, request_var
from quest.http.request import Request


class TestParam:
    def test_query(self) -> None:
        request = make_request(query=b"who=ann&age=3")
        assert request.param("who") == "ann"
        assert request.param("age") == "3"

    def test_path_variable_needs_colon(self) -> None:
        request = make_request(query=b"id=query", path_params={"id": "path"})
        assert request.param(":id") == "path"
        assert request.param("id") == "query"

    def test_missing(self) -> None:
        request = make_request()
        assert request.param("nope") is None
        assert request.param(":nope") is None

    def test_first_value_wins(self) -> None:
        assert make_request(query=b"a=1&a=2").param("a") == "1"


class TestParamValues:
    def test_all_values(self) -> None:
        assert make_request(query=b"a=1&a=2").param_values("a") == ["1", "2"]

    def test_blank_values_removed(self) -> None:
        assert make_request(query=b"a=&a=x&a=").param_values("a") == ["x"]

    def test_absent_is_empty(self) -> None:
        assert make_request().param_values("a") == []


class TestContext:
    def test_outside_request_raises(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    def test_helpers_read_current_request(self) -> None:
        request = make_request(query=b"t=1&t=2", path_params={"id": "9"})
        token = request_var.set(request)
        try:
            assert get_request() is request
            assert param(":id") == "9"
            assert param_values("t") == ["1", "2"]
        finally:
            request_var.reset(token)


class TestRequest:
    def test_with_path_params_copies(self) -> None:
        request = make_request("/users/1")
        bound = request.with_path_params({"id": "1"})
        assert bound.path_params == {"id": "1"}
        assert request.path_params == {}

    def test_url_includes_query(self) -> None:
        assert make_request("/search", query=b"q=x").url == "/search?q=x"
        assert make_request("/search").url == "/search"

    def test_headers_case_insensitive(self) -> None:
        request = make_request(headers=[(b"Content-Type", b"application/json")])
        assert request.content_type == "application/json"
        assert request.headers["CONTENT-TYPE"] == "application/json"

    async def test_body_is_cached(self) -> None:
        messages = [
            {"type": "http.request", "body": b'{"a": ', "more_body": True},
            {"type": "http.request", "body": b"1}", "more_body": False},
        ]

        async def receive() -> dict[str, Any]:
            return messages.pop(0)

        scope = {"type": "http", "method": "POST", "path": "/", "headers": []}
        request = Request.from_asgi(scope, receive)
        assert await request.json() == {"a": 1}
        assert await request.text() == '{"a": 1}'
