"""
Header names and the write-time header policy.

Two rules apply when a response is written to the host:

- headers listed in :data:`RESPONSE_HEADERS_TO_FIX` are not appended but set
  through their action, which only ever sees the first value
- headers the host manages itself (:data:`RESTRICTED_RESPONSE_HEADERS`) are
  dropped, because forwarding them produces duplicated or invalid output
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping

from ..util.multivalue import MultiValueList

if TYPE_CHECKING:
    from .channel import ResponseChannel


CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"
CONTENT_ENCODING = "Content-Encoding"
CONNECTION = "Connection"
COOKIE = "Cookie"
HOST = "Host"
KEEP_ALIVE = "Keep-Alive"
TRANSFER_ENCODING = "Transfer-Encoding"

HeaderAction = Callable[["ResponseChannel", MultiValueList], None]


def _set_content_type(channel: "ResponseChannel", values: MultiValueList) -> None:
    # Multiple Content-Type values are not supported: first wins.
    channel.content_type = values.first


RESPONSE_HEADERS_TO_FIX: Mapping[str, HeaderAction] = MappingProxyType({
    CONTENT_TYPE.lower(): _set_content_type,
})

RESTRICTED_RESPONSE_HEADERS: frozenset[str] = frozenset({
    CONTENT_LENGTH.lower(),
    CONNECTION.lower(),
    KEEP_ALIVE.lower(),
    TRANSFER_ENCODING.lower(),
})


def header_fixup(name: str) -> HeaderAction | None:
    """The special write action for ``name``, if it has one."""
    return RESPONSE_HEADERS_TO_FIX.get(name.lower())


def is_restricted_response_header(name: str) -> bool:
    """Whether ``name`` is managed by the host and must not be forwarded."""
    return name.lower() in RESTRICTED_RESPONSE_HEADERS
