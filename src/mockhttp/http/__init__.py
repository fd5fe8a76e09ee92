"""Writing responses to a host, and a small HTTP/1.1 host adapter.

The mapper is host-agnostic: anything implementing :class:`ResponseChannel`
can receive a response. The stream adapter in :mod:`.server` is one such host.
"""

from .channel import BufferedResponseChannel, ResponseChannel
from .headers import RESPONSE_HEADERS_TO_FIX, RESTRICTED_RESPONSE_HEADERS, is_restricted_response_header
from .mapper import MaterializedResponse, ResponseMapper
from .server import ConnectionHandler, read_request, serialize_response, write_response

__all__ = [
    "BufferedResponseChannel",
    "ConnectionHandler",
    "MaterializedResponse",
    "RESPONSE_HEADERS_TO_FIX",
    "RESTRICTED_RESPONSE_HEADERS",
    "ResponseChannel",
    "ResponseMapper",
    "is_restricted_response_header",
    "read_request",
    "serialize_response",
    "write_response",
]
