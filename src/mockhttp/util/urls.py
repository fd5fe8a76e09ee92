"""
URL and query-string decomposition.

Decoding is form-style (``+`` becomes a space) and happens once, on the whole
path or query, before any splitting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from urllib.parse import SplitResult, unquote_plus, urlsplit

from .multivalue import MultiValueList


QueryMap = Mapping[str, MultiValueList]

_DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}


def decode(value: str) -> str:
    """Percent-decode ``value``. Malformed escapes are left as-is."""
    if not value:
        return value
    return unquote_plus(value)


def split_segments(path: str) -> tuple[str, ...]:
    """
    Split a decoded path into its segments.

    The leading empty segment is dropped: ``"/foo/bar"`` gives
    ``("foo", "bar")`` and ``"/"`` gives ``()``.
    """
    if path in ("", "/"):
        return ()
    return tuple(path.split("/")[1:])


def parse_query(raw_query: str | None) -> QueryMap | None:
    """
    Parse an already-decoded query string into key -> MultiValueList.

    Returns ``None`` (not an empty mapping) for an empty or absent query.
    A key without ``=`` is present with no values. Each value is further
    split on ``,`` so ``?ids=1,2`` yields ``["1", "2"]``; a single value that
    legitimately contains a comma is split too.
    """
    if not raw_query:
        return None

    query = raw_query[1:] if raw_query.startswith("?") else raw_query

    result: dict[str, list[str]] = {}
    for token in query.split("&"):
        if not token:
            continue
        key, sep, value = token.partition("=")
        if not key:
            # "=value" has nothing to key it by
            continue
        values = result.setdefault(key, [])
        if sep:
            values.extend(v for v in value.split(",") if v)

    return MappingProxyType({key: MultiValueList(values) for key, values in result.items()})


@dataclass(frozen=True, slots=True)
class UrlDetails:
    """
    The URL a request was received on.

    ``absolute_url`` is the externally visible URL, ``url`` the one the
    application sees (e.g. with a reverse-proxy path base removed). They are
    the same unless a path base is involved.
    """
    url: str
    absolute_url: str | None = None
    _parts: SplitResult = field(init=False, repr=False, compare=False)
    _absolute_parts: SplitResult = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.url is None:
            raise ValueError("url cannot be None")
        if self.absolute_url is None:
            object.__setattr__(self, "absolute_url", self.url)
        object.__setattr__(self, "_parts", urlsplit(self.url))
        object.__setattr__(self, "_absolute_parts", urlsplit(self.absolute_url))

    @classmethod
    def parse(cls, absolute_url: str, path_base: str = "") -> "UrlDetails":
        """Build details for ``absolute_url`` with ``path_base`` stripped from ``url``."""
        base = path_base.rstrip("/")
        if not base:
            return cls(url=absolute_url)

        parts = urlsplit(absolute_url)
        path = parts.path
        if path == base or path.startswith(base + "/"):
            path = path[len(base):] or "/"
        return cls(url=parts._replace(path=path).geturl(), absolute_url=absolute_url)

    @property
    def scheme(self) -> str:
        return self._parts.scheme

    @property
    def host(self) -> str:
        return self._parts.hostname or ""

    @property
    def port(self) -> int:
        try:
            port = self._parts.port
        except ValueError:
            port = None
        if port is None:
            return _DEFAULT_PORTS.get(self.scheme.lower(), 0)
        return port

    @property
    def path(self) -> str:
        return self._parts.path

    @property
    def absolute_path(self) -> str:
        return self._absolute_parts.path

    @property
    def query(self) -> str:
        """Raw query string including the leading ``?``, or ``""``."""
        return f"?{self._parts.query}" if self._parts.query else ""
