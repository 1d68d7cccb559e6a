"""Routines — catch-all hooks around a router's routes.

A ``Routine`` does not return a payload or render a view. It is generally
used to check some common precondition before the other routes run (or to
do some bookkeeping after they have).

A routine matches every route of the router it was registered with: one
defined in ``HelloWorldRouter`` runs for every request to
``/hello/world/*``. There is no way to narrow the paths it matches.
"""

from collections.abc import Callable
from typing import Any

from quest._internal.invoke import invoke
from quest.errors import HTTPError
from quest.http.request import Request
from quest.http.response import ShortCircuit
from quest.rewrite import RewritableRoute

CATCH_ALL = "/*"


class Routine(RewritableRoute):
    """Run *action* for every request under the router's namespace.

    If the routine decides the request must not go on, it calls
    ``halt()`` (or ``require()``), and the halt response is sent instead.
    """

    __slots__ = ("action",)

    def __init__(self, action: Callable[..., Any]) -> None:
        super().__init__(CATCH_ALL)
        self.action = action

    async def __call__(self, request: Request) -> ShortCircuit | None:
        try:
            await invoke(self.action, request)
        except HTTPError as exc:
            return ShortCircuit(exc.status, exc.detail, exc.headers)
        return None
