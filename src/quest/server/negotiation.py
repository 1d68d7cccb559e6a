"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from kida import Environment

from quest.errors import ConfigurationError
from quest.http.response import JSON_CONTENT_TYPE, Response, ShortCircuit
from quest.templating.integration import render_template
from quest.templating.returns import Template


def negotiate(value: Any, *, kida_env: Environment | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``       -> pass through
    2. ``ShortCircuit``   -> raw response with the halt's status and detail
    3. ``Template``       -> render via kida -> text/html
    4. ``str``            -> 200, text/html
    5. ``bytes``          -> 200, application/octet-stream
    6. ``dict`` / ``list``-> 200, application/json
    7. ``None``           -> 200, empty body
    """
    match value:
        case Response():
            return value
        case ShortCircuit():
            return value.to_response()
        case Template():
            if kida_env is None:
                msg = f"Cannot render template {value.name!r}: no template environment configured."
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value))
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(body=json_module.dumps(value), content_type=JSON_CONTENT_TYPE)
        case None:
            return Response()
        case _:
            msg = f"Route handler returned unsupported type {type(value).__name__!r}."
            raise ConfigurationError(msg)
