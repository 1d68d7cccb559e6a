"""Routes whose relative path is rewritten under a router's namespace.

A route is created with a path relative to its router (``/greet``) and
mounted exactly once, which turns the path absolute
(``/hello/world/greet``). Mounting twice is an error instead of a silent
double prefix.
"""

from quest.errors import RouteAlreadyMounted
from quest.namespace import RouterNamespace, is_root


class RewritableRoute:
    """Base class for everything a ``Router`` can register.

    ``path`` is a plain attribute owned by the route. It holds the relative
    path until the route is mounted and the absolute path afterwards.
    """

    __slots__ = ("_mounted", "path")

    def __init__(self, path: str) -> None:
        self.path = path
        self._mounted = False

    @property
    def mounted(self) -> bool:
        """True once the route has been through ``prepend``."""
        return self._mounted

    def prepend(self, namespace: str | RouterNamespace) -> None:
        """Rewrite this route by prepending *namespace* to its path."""
        prepend(self, namespace)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


def prepend(route: RewritableRoute, namespace: str | RouterNamespace) -> None:
    """Mount *route* under *namespace*, mutating ``route.path`` in place.

    An empty or ``index`` namespace leaves the path untouched. Otherwise
    the lowercased namespace, anchored at ``/``, is concatenated with the
    path (which gains a leading ``/`` if it lacks one). No other slash
    normalization happens.

    Raises ``RouteAlreadyMounted`` if *route* was mounted before.
    """
    if route.mounted:
        raise RouteAlreadyMounted(route.path)
    route._mounted = True

    prefix = str(namespace)
    if is_root(prefix):
        return
    prefix = prefix.lower()
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    path = route.path if route.path.startswith("/") else "/" + route.path
    route.path = prefix + path
