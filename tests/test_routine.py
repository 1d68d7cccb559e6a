"""Tests for Routine — catch-all hooks."""

from conftest import make_request

from quest.http.response import ShortCircuit
from quest.preconditions import halt
from quest.routine import CATCH_ALL, Routine


class TestRoutine:
    def test_fixed_catch_all_path(self) -> None:
        assert Routine(lambda: None).path == CATCH_ALL == "/*"

    def test_path_after_mount(self) -> None:
        routine = Routine(lambda: None)
        routine.prepend("hello/world")
        assert routine.path == "/hello/world/*"

    async def test_returns_none_when_action_passes(self) -> None:
        calls: list[str] = []
        routine = Routine(lambda: calls.append("ran"))
        assert await routine(make_request()) is None
        assert calls == ["ran"]

    async def test_halt_short_circuits(self) -> None:
        def action():
            halt(429, "slow down")

        result = await Routine(action)(make_request())
        assert result == ShortCircuit(429, "slow down")

    async def test_action_may_take_request(self) -> None:
        seen: list[str] = []

        async def action(request):
            seen.append(request.path)

        await Routine(action)(make_request("/hello/world/greet"))
        assert seen == ["/hello/world/greet"]
