"""Immutable snapshot of one inbound HTTP request."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..body.data import BodyData
from ..util.headers import Headers
from ..util.multivalue import MultiValueList
from ..util.urls import QueryMap, UrlDetails, decode, parse_query, split_segments


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class RequestMessage:
    """
    A request as seen by matching and templating code.

    Everything derived from the URL is computed once at construction. The
    ``body*`` getters read through to ``body_data`` so they always agree
    with it.

    Attributes:
        url_details: Relative and absolute URL the request arrived on
        method: HTTP method, as sent
        client_ip: Remote address of the client
        body_data: Classified body, or ``None`` when there is no body
        headers: Header name -> values, case-insensitive lookup
        cookies: Cookie name -> value
    """
    url_details: UrlDetails
    method: str
    client_ip: str
    body_data: BodyData | None = None
    headers: Headers | Mapping[str, Iterable[str] | str] | None = None
    cookies: Mapping[str, str] | None = None
    received_at: datetime = field(default_factory=_utcnow)

    url: str = field(init=False)
    absolute_url: str = field(init=False)
    protocol: str = field(init=False)
    host: str = field(init=False)
    port: int = field(init=False)
    origin: str = field(init=False)
    path: str = field(init=False)
    absolute_path: str = field(init=False)
    path_segments: tuple[str, ...] = field(init=False)
    absolute_path_segments: tuple[str, ...] = field(init=False)
    raw_query: str = field(init=False)
    query: QueryMap | None = field(init=False)

    def __post_init__(self):
        if self.url_details is None:
            raise ValueError("url_details cannot be None")
        if self.method is None:
            raise ValueError("method cannot be None")
        if self.client_ip is None:
            raise ValueError("client_ip cannot be None")

        details = self.url_details
        path = decode(details.path)
        absolute_path = decode(details.absolute_path)
        raw_query = decode(details.query)

        computed: dict[str, Any] = {
            "url": details.url,
            "absolute_url": details.absolute_url,
            "protocol": details.scheme,
            "host": details.host,
            "port": details.port,
            "origin": f"{details.scheme}://{details.host}:{details.port}",
            "path": path,
            "absolute_path": absolute_path,
            "path_segments": split_segments(path),
            "absolute_path_segments": split_segments(absolute_path),
            "raw_query": raw_query,
            "query": parse_query(raw_query),
        }
        if self.headers is not None and not isinstance(self.headers, Headers):
            computed["headers"] = Headers(self.headers)
        if self.cookies is not None:
            computed["cookies"] = MappingProxyType(dict(self.cookies))

        for name, value in computed.items():
            object.__setattr__(self, name, value)

    @property
    def body(self) -> str | None:
        """The body as a string, when it has one."""
        return self.body_data.as_string if self.body_data else None

    @property
    def body_as_json(self) -> Any:
        return self.body_data.as_json if self.body_data else None

    @property
    def body_as_bytes(self) -> bytes | None:
        return self.body_data.as_bytes if self.body_data else None

    @property
    def detected_body_type(self) -> str | None:
        return str(self.body_data.detected_body_type) if self.body_data else None

    @property
    def detected_body_type_from_content_type(self) -> str | None:
        if self.body_data is None:
            return None
        return str(self.body_data.detected_body_type_from_content_type)

    def get_parameter(self, key: str, ignore_case: bool = False) -> MultiValueList | None:
        """
        Look up a query parameter.

        With ``ignore_case`` the first key equal to ``key`` ignoring case
        wins; otherwise the key must match exactly.
        """
        if self.query is None:
            return None
        if not ignore_case:
            return self.query.get(key)

        folded = key.casefold()
        for name, values in self.query.items():
            if name.casefold() == folded:
                return values
        return None
