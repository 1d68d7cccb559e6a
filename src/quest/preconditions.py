"""Request preconditions that stop processing early.

Handlers, views and routines call these before doing any work. A failed
check raises ``Halt``, which the envelopes pass through untouched, so the
client gets the raw status instead of a JSON envelope.
"""

from collections.abc import Sized
from typing import Any, NoReturn

from quest.errors import Halt

MISSING_PARAMETER = "Request is missing a required parameter"


def halt(status: int, message: str = "") -> NoReturn:
    """Stop the request immediately and respond with *status*."""
    raise Halt(status, message)


def is_null_or_empty(value: Any) -> bool:
    """True for ``None``, ``""`` and empty collections.

    Numbers and booleans are never empty, even when falsy.
    """
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def require(*params: Any) -> None:
    """Halt with 400 unless every value in *params* is present.

    Usage::

        def lookup():
            name = param("name")
            require(name)
            return directory.find(name)
    """
    for value in params:
        if is_null_or_empty(value):
            halt(400, MISSING_PARAMETER)
