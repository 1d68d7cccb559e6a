"""Middleware — callables wrapped around route dispatch."""

from quest.middleware.protocol import Middleware, Next
from quest.middleware.static import StaticFiles

__all__ = [
    "Middleware",
    "Next",
    "StaticFiles",
]
