"""Serves the application's public directory.

Every GET or HEAD whose path names a file under the directory is answered
with that file. Anything else, including paths that name nothing, goes on
to the routers.
"""

import mimetypes
from pathlib import Path

from quest.http.request import Request
from quest.http.response import TEXT_CONTENT_TYPE, Response
from quest.middleware.protocol import Next

_READ_METHODS = frozenset({"GET", "HEAD"})


class StaticFiles:
    """Middleware serving files below *directory* at URL *prefix*.

    Usage::

        app.add_middleware(StaticFiles("public"))              # /logo.png
        app.add_middleware(StaticFiles("assets", "/static"))   # /static/app.css

    A directory path serves its *index* file. Paths that resolve outside
    *directory* (``..`` or symlinks) get a 403.
    """

    __slots__ = ("cache_control", "index", "prefix", "root")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self.root = Path(directory).resolve()
        self.prefix = prefix.strip("/")
        self.index = index
        self.cache_control = cache_control

    def _relative(self, path: str) -> str | None:
        """The part of *path* below the prefix, or ``None`` if outside it."""
        parts = path.lstrip("/")
        if not self.prefix:
            return parts
        if parts == self.prefix:
            return ""
        head = self.prefix + "/"
        return parts[len(head) :] if parts.startswith(head) else None

    async def __call__(self, request: Request, next: Next) -> Response:
        relative = self._relative(request.path) if request.method in _READ_METHODS else None
        if relative is None:
            return await next(request)

        target = (self.root / relative).resolve()
        if not target.is_relative_to(self.root):
            return Response("Forbidden", status=403, content_type=TEXT_CONTENT_TYPE)
        if target.is_dir():
            target = target / self.index
        if not target.is_file():
            return await next(request)

        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return Response(
            body=target.read_bytes(),
            content_type=content_type,
            headers=(("Cache-Control", self.cache_control),),
        )
