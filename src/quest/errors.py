"""Quest exception hierarchy.

Shared across the router registry, the ASGI server, and the envelopes so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class QuestError(Exception):
    """Base for all quest-specific errors."""


class ConfigurationError(QuestError):
    """Raised when routers or the app are wired up incorrectly.

    Surfaces during the registration pass, before any request is served.
    """


class DuplicateRoute(ConfigurationError):  # noqa: N818
    """A router registered the same verb and path twice."""

    def __init__(self, verb: str, path: str) -> None:
        super().__init__(f"{verb} {path} is already registered by this router")
        self.verb = verb
        self.path = path


class RouteAlreadyMounted(ConfigurationError):  # noqa: N818
    """A route was handed to ``prepend`` a second time."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Route {path!r} has already been mounted under a namespace. "
            "Create a new route object for each registration."
        )
        self.path = path


@dataclass(frozen=True, slots=True)
class HTTPError(QuestError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, filters, or handlers. The ASGI handler catches
    these and sends a raw response with ``status`` and ``detail``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class Halt(HTTPError):  # noqa: N818
    """Stop processing the request and respond with ``status`` now.

    Envelopes never wrap a halt: it passes through ``Endpoint`` and
    ``View`` untouched and reaches the client as a raw response.
    """

    def __init__(self, status: int, detail: str = "") -> None:
        super().__init__(status=status, detail=detail)


def error_message(exc: BaseException) -> str:
    """Reliably get a message that describes *exc*.

    Falls back to the exception's class name when it carries no message.
    """
    message = str(exc)
    if not message:
        message = type(exc).__name__
    return message
