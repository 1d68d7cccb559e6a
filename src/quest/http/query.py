"""Immutable query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Parsed query string.

    ``params["id"]`` is the first value sent for ``id``; ``values_for("id")``
    is every non-blank value.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        self._data: dict[str, list[str]] = parse_qs(
            query_string.decode("latin-1"), keep_blank_values=True
        )

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self._data!r})"

    def values_for(self, key: str) -> list[str]:
        """All values for *key* with blank entries dropped.

        Returns an empty list when *key* was not sent at all.
        """
        return [value for value in self._data.get(key, ()) if value != ""]

    @property
    def raw(self) -> bytes:
        return self._raw
