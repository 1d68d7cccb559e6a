"""Route, Filter, and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``      (is_param=False)
    Param:   ``/:id``        (is_param=True, param_name="id")
    Typed:   ``/{id:int}``   (is_param=True, param_name="id", param_type="int")
    Splat:   ``/*``          (is_splat=True), only as the last segment
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    is_splat: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A registered (verb, absolute path, handler) triple."""

    path: str
    handler: Callable[..., Any]
    method: str


@dataclass(frozen=True, slots=True)
class Filter:
    """A hook run before or after routes whose path matches ``pattern``."""

    phase: str
    pattern: str
    action: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
