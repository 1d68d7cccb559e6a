"""JSON endpoints.

An ``Endpoint`` runs its handler and always answers with the same two-field
envelope::

    {"status": "success", "payload": <whatever the handler returned>}
    {"status": "failed",  "payload": <message of the exception it raised>}

A failed envelope is still sent with the server's default status (200):
the failure belongs to the application, not to the transport. Only a halt
(``Halt`` or any other ``HTTPError``) changes the HTTP status, and it
skips the envelope entirely.
"""

import json as json_module
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from quest._internal.invoke import invoke
from quest.errors import HTTPError, error_message
from quest.http.request import Request
from quest.http.response import JSON_CONTENT_TYPE, Response, ShortCircuit
from quest.rewrite import RewritableRoute

logger = logging.getLogger("quest.router")

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Envelope:
    """The outward shape of every endpoint response."""

    status: str
    payload: Any

    @classmethod
    def success(cls, payload: Any) -> "Envelope":
        return cls(STATUS_SUCCESS, payload)

    @classmethod
    def failed(cls, exc: BaseException) -> "Envelope":
        return cls(STATUS_FAILED, error_message(exc))

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "payload": self.payload}

    def to_json(self) -> str:
        return json_module.dumps(self.to_dict())


class Endpoint(RewritableRoute):
    """A route that serves a JSON payload wrapped in an ``Envelope``.

    Endpoints are defined inside a router's ``routes()``::

        def routes(self):
            self.get(Endpoint("/users/:id", self.show_user))

        def show_user(self):
            user_id = param(":id")
            require(user_id)
            return users.find(user_id)

    The handler may take no arguments or a ``request`` argument, and may
    be sync or async. Return ``Endpoint.NO_DATA`` when there is nothing to
    send back.
    """

    NO_DATA = None

    __slots__ = ("handler",)

    def __init__(self, path: str, handler: Callable[..., Any]) -> None:
        super().__init__(path)
        self.handler = handler

    async def __call__(self, request: Request) -> Response | ShortCircuit:
        try:
            payload = await invoke(self.handler, request)
            # Serialize inside the try so an unencodable payload fails the envelope
            body = Envelope.success(payload).to_json()
        except HTTPError as exc:
            return ShortCircuit(exc.status, exc.detail, exc.headers)
        except Exception as exc:
            logger.debug("%s %s failed: %s", request.method, request.path, exc, exc_info=True)
            body = Envelope.failed(exc).to_json()
        return Response(body=body, content_type=JSON_CONTENT_TYPE)
