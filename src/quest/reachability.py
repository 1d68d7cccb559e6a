"""URL reachability checks with a memoizing cache.

``is_reachable(url)`` answers whether a GET of *url* succeeds. Answers are
cached per URL. The cache is bounded and may drop any entry at any time;
a dropped entry is simply fetched again on the next lookup.
"""

import logging
import threading
from collections import OrderedDict

import httpx

logger = logging.getLogger("quest.reachability")


class ReachabilityCache:
    """Thread-safe, bounded cache of URL reachability.

    Usage::

        cache = ReachabilityCache(max_size=256)
        if cache.is_reachable("https://example.com/logo.png"):
            ...

    The fetch happens outside the lock: two threads missing on the same
    URL may both fetch it, and both store the same kind of answer.
    Least recently used entries are evicted first when the cache is full.
    """

    __slots__ = ("_client", "_entries", "_lock", "_max_size", "_timeout")

    def __init__(
        self,
        *,
        max_size: int = 1024,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        if max_size < 1:
            msg = "max_size must be at least 1"
            raise ValueError(msg)
        self._max_size = max_size
        self._timeout = timeout
        self._client = client
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, bool] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def is_reachable(self, url: str) -> bool:
        """Return ``True`` if *url* can be fetched (memoized)."""
        with self._lock:
            cached = self._entries.get(url)
            if cached is not None:
                self._entries.move_to_end(url)
                return cached

        reachable = self._fetch(url)

        with self._lock:
            self._entries[url] = reachable
            self._entries.move_to_end(url)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
        return reachable

    def evict(self, url: str) -> None:
        """Forget the answer for *url*."""
        with self._lock:
            self._entries.pop(url, None)

    def clear(self) -> None:
        """Forget every answer."""
        with self._lock:
            self._entries.clear()

    def _fetch(self, url: str) -> bool:
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                response = httpx.get(url, timeout=self._timeout, follow_redirects=True)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("%s is not reachable: %s", url, exc)
            return False
        return True


_default_cache = ReachabilityCache()


def configure(*, max_size: int, timeout: float) -> None:
    """Replace the process-wide cache with an empty one using these limits."""
    global _default_cache
    _default_cache = ReachabilityCache(max_size=max_size, timeout=timeout)


def is_reachable(url: str) -> bool:
    """Return ``True`` if *url* is reachable, using the process-wide cache."""
    return _default_cache.is_reachable(url)
