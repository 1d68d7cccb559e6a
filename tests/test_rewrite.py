"""Tests for quest.rewrite — mounting routes under a namespace."""

import pytest

from quest.errors import ConfigurationError, RouteAlreadyMounted
from quest.namespace import RouterNamespace
from quest.rewrite import RewritableRoute, prepend


class TestPrepend:
    def test_prefixes_namespace(self) -> None:
        route = RewritableRoute("/greet")
        prepend(route, "hello/world")
        assert route.path == "/hello/world/greet"

    def test_accepts_router_namespace(self) -> None:
        route = RewritableRoute("/greet")
        route.prepend(RouterNamespace.from_name("HelloWorldRouter"))
        assert route.path == "/hello/world/greet"

    def test_inserts_missing_leading_slash(self) -> None:
        route = RewritableRoute("greet")
        prepend(route, "hello")
        assert route.path == "/hello/greet"

    def test_lowercases_namespace(self) -> None:
        route = RewritableRoute("/Greet")
        prepend(route, "Hello/World")
        assert route.path == "/hello/world/Greet"

    def test_no_other_slash_normalization(self) -> None:
        route = RewritableRoute("/greet/")
        prepend(route, "hello")
        assert route.path == "/hello/greet/"

    @pytest.mark.parametrize("namespace", ["", "index", "Index"])
    def test_root_namespace_is_noop(self, namespace: str) -> None:
        route = RewritableRoute("/greet")
        prepend(route, namespace)
        assert route.path == "/greet"

    def test_marks_route_mounted(self) -> None:
        route = RewritableRoute("/greet")
        assert not route.mounted
        prepend(route, "")
        assert route.mounted


class TestConsumeOnce:
    def test_second_prepend_raises(self) -> None:
        route = RewritableRoute("/greet")
        prepend(route, "hello")
        with pytest.raises(RouteAlreadyMounted):
            prepend(route, "hello")
        assert route.path == "/hello/greet"

    def test_second_prepend_after_root_mount_raises(self) -> None:
        route = RewritableRoute("/greet")
        prepend(route, "index")
        with pytest.raises(RouteAlreadyMounted):
            prepend(route, "hello")

    def test_is_configuration_error(self) -> None:
        assert issubclass(RouteAlreadyMounted, ConfigurationError)
