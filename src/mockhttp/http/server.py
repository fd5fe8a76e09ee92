"""
HTTP/1.1 host adapter over AnyIO byte streams.

Reads one request from a stream into a :class:`RequestMessage`, hands it to
an async handler and writes the returned :class:`ResponseMessage` back
through a :class:`ResponseMapper`.

Scope:
- request line + headers, repeated headers kept in order
- optional Content-Length body (no chunked encoding)
- one request per connection (Connection: close)

Listener setup is left to the caller; :class:`ConnectionHandler` plugs into
``listener.serve()``.
"""

from __future__ import annotations

import logging
import re
from http import HTTPStatus
from http.cookies import CookieError, SimpleCookie
from typing import Awaitable, Callable

import anyio
from anyio.abc import ByteStream, SocketAttribute

from ..body.parser import parse_body, should_parse_body
from ..exceptions import BadRequestError, InvalidHeaderError, PayloadTooLargeError
from ..message.request import RequestMessage
from ..message.response import ResponseMessage
from ..util.headers import Headers
from ..util.urls import UrlDetails
from .channel import BufferedResponseChannel
from .headers import CONTENT_ENCODING, CONTENT_LENGTH, CONTENT_TYPE, COOKIE, HOST
from .mapper import ResponseMapper


logger = logging.getLogger(__name__)

Handler = Callable[[RequestMessage], Awaitable[ResponseMessage | None]]

DEFAULT_MAX_HEADER_BYTES = 64 * 1024
DEFAULT_MAX_BODY_BYTES = 1 * 1024 * 1024

_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _status_line(status: int) -> str:
    try:
        text = HTTPStatus(status).phrase
    except ValueError:
        text = ""
    return f"HTTP/1.1 {status} {text}\r\n"


async def _read_until(stream: ByteStream, marker: bytes, max_bytes: int) -> tuple[bytes, bytes]:
    """Read up to and including ``marker``; also return what was read past it."""
    buf = bytearray()
    while True:
        if len(buf) > max_bytes:
            raise BadRequestError("request head too large")
        idx = buf.find(marker)
        if idx != -1:
            end = idx + len(marker)
            return bytes(buf[:end]), bytes(buf[end:])
        try:
            chunk = await stream.receive(4096)
        except anyio.EndOfStream:
            return bytes(buf), b""
        if not chunk:
            return bytes(buf), b""
        buf.extend(chunk)


async def _read_exact(stream: ByteStream, n: int, prefix: bytes = b"") -> bytes:
    buf = bytearray(prefix)
    while len(buf) < n:
        try:
            chunk = await stream.receive(n - len(buf))
        except anyio.EndOfStream:
            break
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf[:n])


def _parse_head(block: bytes) -> tuple[str, str, str, list[tuple[str, str]]]:
    head = block.decode("iso-8859-1")

    lines = head.split("\r\n")
    if not lines or not lines[0]:
        raise BadRequestError("missing request line")

    parts = lines[0].split(" ")
    if len(parts) != 3:
        raise BadRequestError("invalid request line")
    method, target, version = parts

    headers: list[tuple[str, str]] = []
    for line in lines[1:]:
        if line == "":
            break
        if ":" not in line:
            continue
        name, value = line.split(":", 1)
        headers.append((name.strip(), value.strip()))
    return method, target, version, headers


def _parse_cookies(headers: Headers) -> dict[str, str] | None:
    if COOKIE not in headers:
        return None
    jar = SimpleCookie()
    for value in headers[COOKIE]:
        try:
            jar.load(value)
        except CookieError:
            logger.debug("ignoring malformed cookie header %r", value)
    return {name: morsel.value for name, morsel in jar.items()}


def _build_url(scheme: str, target: str, headers: Headers) -> str:
    if "://" in target:
        # absolute-form request target (proxies)
        return target
    host = headers.get_first(HOST) or "localhost"
    return f"{scheme}://{host}{target}"


async def read_request(
    stream: ByteStream,
    *,
    client_ip: str,
    scheme: str = "http",
    path_base: str = "",
    max_header_bytes: int = DEFAULT_MAX_HEADER_BYTES,
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
    allow_body_for_all_methods: bool = False,
) -> RequestMessage | None:
    """
    Read one request from ``stream``.

    Returns ``None`` when the peer closed the connection without sending
    anything. Raises :class:`BadRequestError` for unparseable input and
    :class:`PayloadTooLargeError` when the body exceeds ``max_body_bytes``.
    """
    block, leftover = await _read_until(stream, b"\r\n\r\n", max_header_bytes)
    if not block:
        return None

    method, target, _version, raw_headers = _parse_head(block)
    headers = Headers(raw_headers)

    try:
        content_length = int(headers.get_first(CONTENT_LENGTH, "0") or "0")
    except ValueError as e:
        raise BadRequestError("invalid content-length") from e
    if content_length < 0:
        raise BadRequestError("invalid content-length")
    if content_length > max_body_bytes:
        raise PayloadTooLargeError("payload too large")

    body = b""
    if content_length:
        body = await _read_exact(stream, content_length, leftover)

    body_data = None
    if should_parse_body(method, allow_body_for_all_methods):
        body_data = parse_body(
            body,
            content_type=headers.get_first(CONTENT_TYPE),
            content_encoding=headers.get_first(CONTENT_ENCODING),
        )

    try:
        url_details = UrlDetails.parse(_build_url(scheme, target, headers), path_base)
    except ValueError as e:
        raise BadRequestError("invalid request target") from e
    return RequestMessage(
        url_details=url_details,
        method=method,
        client_ip=client_ip,
        body_data=body_data,
        headers=headers,
        cookies=_parse_cookies(headers),
    )


def _header_line(name: str, value: str) -> bytes:
    if not _TOKEN.fullmatch(name):
        raise InvalidHeaderError(f"invalid response header name {name!r}")
    if "\r" in value or "\n" in value or "\x00" in value:
        raise InvalidHeaderError(f"invalid value for response header {name}")
    # Values outside latin-1 go out as UTF-8 octets.
    try:
        encoded = value.encode("latin-1")
    except UnicodeEncodeError:
        encoded = value.encode("utf-8")
    return name.encode("ascii") + b": " + encoded + b"\r\n"


def serialize_response(channel: BufferedResponseChannel) -> bytes:
    """
    Render a filled-in channel as HTTP/1.1 response bytes.

    Raises :class:`InvalidHeaderError` for header names that are not tokens
    and for values containing CR, LF or NUL.
    """
    body = channel.body

    lines: list[tuple[str, str]] = []
    if channel.content_type is not None:
        lines.append((CONTENT_TYPE, channel.content_type))
    lines.extend(channel.headers)
    # Host-managed headers; the mapper never forwards these.
    lines.append((CONTENT_LENGTH, str(len(body))))
    lines.append(("Connection", "close"))

    start = _status_line(channel.status_code).encode("ascii")
    head = b"".join(_header_line(k, v) for k, v in lines)
    return start + head + b"\r\n" + body


async def write_response(stream: ByteStream, channel: BufferedResponseChannel) -> None:
    """Serialize a filled-in channel onto ``stream`` as an HTTP/1.1 response."""
    await stream.send(serialize_response(channel))


class ConnectionHandler:
    """
    Serves one request per connection.

    Usage::

        handler = ConnectionHandler(my_handler, ResponseMapper(LocalFileSystemHandler()))
        async with await anyio.create_tcp_listener(local_port=8080) as listener:
            await listener.serve(handler)
    """

    def __init__(
        self,
        handler: Handler,
        mapper: ResponseMapper,
        *,
        scheme: str = "http",
        path_base: str = "",
        max_header_bytes: int = DEFAULT_MAX_HEADER_BYTES,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        allow_body_for_all_methods: bool = False,
    ):
        self._handler = handler
        self._mapper = mapper
        self._scheme = scheme
        self._path_base = path_base
        self._max_header_bytes = max_header_bytes
        self._max_body_bytes = max_body_bytes
        self._allow_body_for_all_methods = allow_body_for_all_methods

    async def __call__(self, stream: ByteStream) -> None:
        async with stream:
            await self.handle(stream, client_ip=_client_ip(stream))

    async def handle(self, stream: ByteStream, *, client_ip: str) -> None:
        try:
            request = await read_request(
                stream,
                client_ip=client_ip,
                scheme=self._scheme,
                path_base=self._path_base,
                max_header_bytes=self._max_header_bytes,
                max_body_bytes=self._max_body_bytes,
                allow_body_for_all_methods=self._allow_body_for_all_methods,
            )
        except BadRequestError as e:
            await self._respond(stream, ResponseMessage.text(str(e), status_code=e.status_code))
            return
        if request is None:
            return

        try:
            response = await self._handler(request)
            channel = BufferedResponseChannel()
            await self._mapper.map(response, channel)
            data = serialize_response(channel)
        except Exception as e:
            logger.exception("failed to produce a response for %s %s", request.method, request.url)
            await self._respond(stream, ResponseMessage.text(f"server error: {e!r}", status_code=500))
            return

        await stream.send(data)

    async def _respond(self, stream: ByteStream, response: ResponseMessage) -> None:
        channel = BufferedResponseChannel()
        await self._mapper.map(response, channel)
        await write_response(stream, channel)


def _client_ip(stream: ByteStream) -> str:
    address = stream.extra(SocketAttribute.remote_address, None)
    if isinstance(address, tuple):
        return str(address[0])
    if address:
        return str(address)
    return "unknown"
