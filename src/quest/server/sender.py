"""Writes a quest Response to the ASGI ``send`` callable."""

from quest._internal.asgi import Message, Send
from quest.http.response import Response

# Statuses that never carry a message body
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type), *response.headers]
    pairs.append(("content-length", str(length)))
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


def response_messages(response: Response) -> tuple[Message, Message]:
    """The ``http.response.start`` and ``http.response.body`` pair for *response*."""
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes
    start: Message = {
        "type": "http.response.start",
        "status": status,
        "headers": _encode_headers(response, len(body)),
    }
    return start, {"type": "http.response.body", "body": body}


async def send_response(response: Response, send: Send) -> None:
    for message in response_messages(response):
        await send(message)
