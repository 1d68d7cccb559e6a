"""The request a route handler is serving.

A ``Request`` is built once per HTTP call and never changes, apart from the
copy bound to the path variables of the matched route. Handlers mostly
reach it through ``quest.context.param``.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any

from quest._internal.asgi import Receive, Scope
from quest.http.headers import Headers
from quest.http.query import QueryParams


class _Body:
    """Reads the ASGI request body once and remembers it.

    Shared by a request and its path-bound copies so the body can be read
    from either.
    """

    __slots__ = ("_data", "_receive")

    def __init__(self, receive: Receive) -> None:
        self._receive = receive
        self._data: bytes | None = None

    async def read(self) -> bytes:
        if self._data is None:
            parts: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                parts.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._data = b"".join(parts)
        return self._data


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` holds the route variables (``/users/:id``), ``query``
    the query string. Read either through ``param``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    client: tuple[str, int] | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    _body: _Body | None = field(default=None, repr=False, compare=False)

    # -- Parameters --

    def param(self, name: str) -> str | None:
        """Return a parameter associated with this request.

        Prefix the name with ``":"`` if it is a variable in the route
        (i.e. ``/foo/:id``). Otherwise it is read from the query string
        (i.e. ``/foo?id=``). Returns ``None`` when it was not provided.
        """
        if name.startswith(":"):
            return self.path_params.get(name[1:])
        return self.query.get(name)

    def param_values(self, name: str) -> list[str]:
        """Every non-blank query-string value sent for *name*.

        Route variables are single-valued, so only the query is searched.
        """
        return self.query.values_for(name)

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy of this request bound to a route match's variables."""
        return replace(self, path_params=dict(path_params))

    # -- Metadata --

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        query = self.query.raw.decode("latin-1")
        return f"{self.path}?{query}" if query else self.path

    # -- Body --

    async def body(self) -> bytes:
        """The full request body. Empty when the request was built without one."""
        if self._body is None:
            return b""
        return await self._body.read()

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Build a request from an ASGI HTTP scope."""
        peer = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers") or ())),
            query=QueryParams(scope.get("query_string") or b""),
            client=(peer[0], peer[1]) if peer else None,
            path_params=dict(path_params or {}),
            http_version=scope.get("http_version", "1.1"),
            _body=_Body(receive),
        )
