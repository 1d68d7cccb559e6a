"""Template views.

A ``View`` names a template file under the app's template directory and
a handler that supplies the data for it. The rendered template is the
whole response body.
"""

from collections.abc import Callable, Mapping
from typing import Any

from quest._internal.invoke import invoke
from quest.errors import HTTPError
from quest.http.request import Request
from quest.http.response import ShortCircuit
from quest.rewrite import RewritableRoute
from quest.templating.returns import NO_DATA, Template


class View(RewritableRoute):
    """A route that renders a template.

    Views are defined inside a router's ``routes()``::

        self.get(View("/", "index.html", self.home))

        def home(self):
            return {"title": "Home", "items": items}

    The handler returns the mapping from template variable names to
    values, or ``View.NO_DATA`` if the template needs none. Omit the
    handler altogether for a static page. A halt raised by the handler
    reaches the client as a raw response.
    """

    NO_DATA = NO_DATA

    __slots__ = ("handler", "template")

    def __init__(
        self,
        path: str,
        template: str,
        handler: Callable[..., Mapping[str, Any]] | None = None,
    ) -> None:
        super().__init__(path)
        self.template = template
        self.handler = handler

    async def __call__(self, request: Request) -> Template | ShortCircuit:
        if self.handler is None:
            return Template(self.template, NO_DATA)
        try:
            data = await invoke(self.handler, request)
        except HTTPError as exc:
            return ShortCircuit(exc.status, exc.detail, exc.headers)
        return Template(self.template, NO_DATA if data is None else data)
