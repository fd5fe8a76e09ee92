"""
Response materialization.

Turns a :class:`~mockhttp.message.response.ResponseMessage` into a status
code, a content type, a list of header writes and body bytes, then applies
them to a :class:`~mockhttp.http.channel.ResponseChannel`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import anyio.to_thread
from typing_extensions import override

from ..body.data import DEFAULT_ENCODING, BodyData, BytesBody, FileBody, JsonBody, TextBody
from ..exceptions import BodyFileError
from ..handlers.filesystem import FileSystemHandler
from ..message.response import ResponseMessage
from ..util.multivalue import MultiValueList
from .channel import ResponseChannel
from .headers import header_fixup, is_restricted_response_header


logger = logging.getLogger(__name__)


def _drop_nulls(value: Any) -> Any:
    """Remove dict entries whose value is ``None``, at any depth."""
    if isinstance(value, dict):
        return {k: _drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_nulls(v) for v in value]
    return value


def serialize_json(value: Any, indented: bool = False) -> str:
    if indented:
        return json.dumps(_drop_nulls(value), indent=2, ensure_ascii=False)
    return json.dumps(_drop_nulls(value), separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class MaterializedResponse:
    """What gets written to the host, fully resolved."""
    status_code: int
    content_type: str | None = None
    headers: list[tuple[str, MultiValueList]] = field(default_factory=list)
    body: bytes | None = None


class ResponseMapper:
    """
    Writes response descriptions onto host response channels.

    File-backed bodies are read through ``file_system_handler`` in a worker
    thread. A body that cannot be resolved fails the whole response before
    anything reaches the channel.
    """

    def __init__(self, file_system_handler: FileSystemHandler):
        if file_system_handler is None:
            raise ValueError("file_system_handler cannot be None")
        self._file_system_handler = file_system_handler

    async def resolve_body(self, body_data: BodyData | None) -> bytes | None:
        """Resolve a body descriptor to the bytes to send, ``None`` for no body."""
        if body_data is None:
            return None

        match body_data.body:
            case None:
                return None
            case TextBody(text=text, encoding=encoding):
                return text.encode(encoding or DEFAULT_ENCODING)
            case JsonBody(value=value, indented=indented, encoding=encoding):
                return serialize_json(value, indented).encode(encoding or DEFAULT_ENCODING)
            case BytesBody(data=data):
                return data
            case FileBody(path=path):
                try:
                    return await anyio.to_thread.run_sync(
                        self._file_system_handler.read_response_body_as_file, path
                    )
                except BodyFileError as e:
                    logger.warning("failed to resolve response body file: %s", e)
                    raise

    async def materialize(self, response_message: ResponseMessage) -> MaterializedResponse:
        body = await self.resolve_body(response_message.body_data)

        # Replay the header policy against a recorder to get the write list.
        recorder = _RecordingChannel()
        _apply_headers(response_message, recorder)

        return MaterializedResponse(
            status_code=response_message.status_code,
            content_type=recorder.content_type,
            headers=recorder.appended,
            body=body,
        )

    async def map(self, response_message: ResponseMessage | None, channel: ResponseChannel) -> None:
        """Write ``response_message`` onto ``channel``. ``None`` writes nothing."""
        if response_message is None:
            return

        materialized = await self.materialize(response_message)

        channel.status_code = materialized.status_code
        if materialized.content_type is not None:
            channel.content_type = materialized.content_type
        for name, values in materialized.headers:
            channel.append_header(name, values)

        if materialized.body is not None:
            await channel.write(materialized.body)


def _apply_headers(response_message: ResponseMessage, channel: ResponseChannel) -> None:
    for name, values in response_message.headers.items():
        action = header_fixup(name)
        if action is not None:
            action(channel, values)
        elif is_restricted_response_header(name):
            logger.debug("dropping host-managed response header %s", name)
        else:
            channel.append_header(name, values)


class _RecordingChannel(ResponseChannel):
    def __init__(self):
        super().__init__()
        self.appended: list[tuple[str, MultiValueList]] = []

    @override
    def append_header(self, name: str, values: Iterable[str]) -> None:
        self.appended.append((name, MultiValueList(values)))

    @override
    async def write(self, data: bytes) -> None:
        raise RuntimeError("recording channel does not accept a body")
