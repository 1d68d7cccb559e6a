"""Compiled router with trie-based path matching.

Routes and filters are registered during setup and compiled into an
immutable lookup structure when the app freezes.
"""

import re
from dataclasses import dataclass

from quest.errors import ConfigurationError, MethodNotAllowed, NotFound
from quest.routing.params import CONVERTERS, compile_converter
from quest.routing.route import Filter, PathSegment, Route, RouteMatch

BEFORE = "before"
AFTER = "after"
PHASES = (BEFORE, AFTER)


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"            -> [PathSegment("users")]
        "/users/:id"        -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/users/{id:int}"   -> [PathSegment("users"), PathSegment("{id:int}", param_type="int", ...)]
        "/hello/world/*"    -> [PathSegment("hello"), PathSegment("world"), PathSegment("*", is_splat=True)]
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part == "*":
            if index != len(parts) - 1:
                msg = f"Route path {path!r} has '*' before its last segment."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_splat=True))
        elif part.startswith(":"):
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        elif part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            param_name, _, param_type = inner.partition(":")
            param_type = param_type or "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path variable type {param_type!r} in {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def _split(path: str) -> list[str]:
    return [p for p in path.strip("/").split("/") if p]


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("children", "param_edges", "routes_by_method", "splat_routes")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # One edge per distinct (name, type) variable, tried in the order added
        self.param_edges: list[_ParamEdge] = []
        # Routes ending in "*" at this level, keyed by HTTP method
        self.splat_routes: dict[str, Route] = {}
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}

    def param_edge(self, seg: PathSegment) -> "_ParamEdge":
        """The edge for *seg*'s variable, created on first use."""
        name = seg.param_name or ""
        for edge in self.param_edges:
            if edge.param_name == name and edge.param_type == seg.param_type:
                return edge
        edge = _ParamEdge(
            param_name=name,
            param_type=seg.param_type,
            regex=compile_converter(seg.param_type),
            node=_TrieNode(),
        )
        self.param_edges.append(edge)
        return edge


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(frozen=True, slots=True)
class _CompiledFilter:
    filter: Filter
    segments: tuple[PathSegment, ...]

    def matches(self, parts: list[str]) -> bool:
        segments = self.segments
        for index, seg in enumerate(segments):
            if seg.is_splat:
                return True
            if index >= len(parts):
                return False
            if seg.is_param:
                if not compile_converter(seg.param_type).match(parts[index]):
                    return False
            elif seg.value != parts[index]:
                return False
        return len(parts) == len(segments)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/users/:id", handler, "GET"))
        router.add_filter(Filter("before", "/users/*", check_login))
        router.compile()
        match = router.match("GET", "/users/42")
        hooks = router.filters("before", "/users/42")

    Registering the same method and path twice keeps the last handler.
    Variables with different names at the same level (``/users/:id`` and
    ``/users/:name/rename``) each keep their own name.
    """

    __slots__ = ("_compiled", "_filters", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._filters: list[_CompiledFilter] = []
        self._compiled = False

    def _check_open(self) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        self._check_open()
        node = self._root
        for seg in parse_path(route.path):
            if seg.is_splat:
                node.splat_routes[route.method] = route
                return
            if seg.is_param:
                node = node.param_edge(seg).node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())
        node.routes_by_method[route.method] = route

    def add_filter(self, hook: Filter) -> None:
        """Add a before/after filter. Filters run in the order added."""
        self._check_open()
        if hook.phase not in PHASES:
            msg = f"Unknown filter phase {hook.phase!r}; expected one of {PHASES}."
            raise ConfigurationError(msg)
        self._filters.append(_CompiledFilter(hook, tuple(parse_path(hook.pattern))))

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, for introspection."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        result.extend(node.routes_by_method.values())
        result.extend(node.splat_routes.values())
        for child in node.children.values():
            self._collect_routes(child, result)
        for edge in node.param_edges:
            self._collect_routes(edge.node, result)

    def compile(self) -> None:
        """Freeze the router. No more routes or filters can be added."""
        self._compiled = True

    def filters(self, phase: str, path: str) -> list[Filter]:
        """Filters of *phase* whose pattern matches *path*, in order added."""
        parts = _split(path)
        return [f.filter for f in self._filters if f.filter.phase == phase and f.matches(parts)]

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Static segments are preferred over variables and variables over a
        splat, but only among routes that serve *method*.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if routes match the path but none
        serves *method*; its ``Allow`` header lists the methods that would.
        """
        allowed: set[str] = set()
        result = self._match_node(self._root, _split(path), 0, {}, method, allowed)
        if result is not None:
            route, params = result
            return RouteMatch(route=route, path_params=params)
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        method: str,
        allowed: set[str],
    ) -> tuple[Route, dict[str, str]] | None:
        """Depth-first search for a route serving *method*.

        Methods of routes that match the path but not *method* are
        collected into *allowed*.
        """
        if index == len(parts):
            if method in node.routes_by_method:
                return node.routes_by_method[method], params
            allowed.update(node.routes_by_method)
            return self._match_splat(node, "", params, method, allowed)

        part = parts[index]

        # 1. Static child first (exact match)
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, params, method, allowed)
            if result is not None:
                return result

        # 2. Parameter children, in the order added
        for edge in node.param_edges:
            if edge.regex.match(part):
                bound = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, bound, method, allowed)
                if result is not None:
                    return result

        # 3. Splat consumes the rest
        return self._match_splat(node, "/".join(parts[index:]), params, method, allowed)

    @staticmethod
    def _match_splat(
        node: _TrieNode,
        rest: str,
        params: dict[str, str],
        method: str,
        allowed: set[str],
    ) -> tuple[Route, dict[str, str]] | None:
        if method in node.splat_routes:
            return node.splat_routes[method], {**params, "splat": rest}
        allowed.update(node.splat_routes)
        return None
