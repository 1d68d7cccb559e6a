"""URL namespaces derived from router names.

A router named ``HelloWorldRouter`` serves its routes under
``/hello/world``: the ``Router`` and ``Index`` marker tokens are dropped
and every remaining word boundary becomes a path separator. A name that
reduces to nothing (``IndexRouter``) mounts at the site root.
"""

import re
from dataclasses import dataclass

ROUTER_TOKEN = "Router"
INDEX_TOKEN = "Index"
ROOT_MARKER = "index"

# Each uppercase letter after the first character starts a new word
_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def derive_namespace(name: str) -> str:
    """Convert a router name to a lowercase, slash-delimited prefix.

    Examples::

        "HelloWorldRouter" -> "hello/world"
        "UserIndexRouter"  -> "user"
        "IndexRouter"      -> ""
    """
    words = name.replace(ROUTER_TOKEN, "").replace(INDEX_TOKEN, "")
    return _WORD_BOUNDARY.sub("/", words).lower()


def is_root(namespace: str) -> bool:
    """True if *namespace* mounts at the site root."""
    return not namespace or namespace.lower() == ROOT_MARKER


@dataclass(frozen=True, slots=True)
class RouterNamespace:
    """The URL prefix shared by every route of one router.

    Computed once from the router's declared name and never changed.
    """

    name: str
    value: str

    @classmethod
    def from_name(cls, name: str) -> "RouterNamespace":
        return cls(name=name, value=derive_namespace(name))

    @property
    def is_root(self) -> bool:
        return is_root(self.value)

    def __str__(self) -> str:
        return self.value
