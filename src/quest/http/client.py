"""Best-effort identification of the client behind a request."""

import hashlib
import ipaddress

from quest.http.request import Request

UNKNOWN_USER_AGENT = "idk"


def client_ip(request: Request) -> str:
    """Return the client IP address.

    When the socket peer is a loopback or unspecified address the request
    has probably been proxied, so ``X-Forwarded-For`` wins if present.
    """
    ip = request.client[0] if request.client else ""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return ip
    if address.is_loopback or address.is_unspecified:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded
    return ip


def client_user_agent(request: Request) -> str:
    """Return the ``User-Agent`` header, or a placeholder when it is missing."""
    return request.headers.get("user-agent") or UNKNOWN_USER_AGENT


def client_fingerprint(request: Request) -> str:
    """MD5 hex digest of the client's user agent and IP address."""
    raw = client_user_agent(request) + client_ip(request)
    return hashlib.md5(raw.encode("utf-8"), usedforsecurity=False).hexdigest()
