"""Template return type.

A frozen value that views hand back to the server. The content
negotiation layer renders it with the app's kida environment.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

NO_DATA: Mapping[str, Any] = MappingProxyType({})
"""An empty, read-only mapping for templates that need no data."""


@dataclass(frozen=True, slots=True)
class Template:
    """Render a template file with a data mapping.

    Usage::

        return Template("index.html", {"title": "Home"})
    """

    name: str
    context: Mapping[str, Any] = field(default_factory=lambda: NO_DATA)
