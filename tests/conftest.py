"""Shared fixtures."""

import anyio
import pytest
from anyio.abc import SocketAttribute

from mockhttp import LocalFileSystemHandler, ResponseMapper


class FakeStream:
    """In-memory byte stream: feeds ``data`` in ``chunk_size`` pieces, records what is sent."""

    def __init__(self, data: bytes, chunk_size: int = 4096, remote_address=("10.0.0.7", 50123)):
        self._pending = bytearray(data)
        self._chunk_size = chunk_size
        self._remote_address = remote_address
        self.sent = bytearray()
        self.closed = False

    async def receive(self, max_bytes: int = 65536) -> bytes:
        if not self._pending:
            raise anyio.EndOfStream
        n = min(max_bytes, self._chunk_size)
        chunk = bytes(self._pending[:n])
        del self._pending[:n]
        return chunk

    async def send(self, item: bytes) -> None:
        self.sent.extend(item)

    async def send_eof(self) -> None:
        pass

    async def aclose(self) -> None:
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def extra(self, attribute, default=None):
        if attribute is SocketAttribute.remote_address:
            return self._remote_address
        return default


@pytest.fixture
def mapper(tmp_path):
    return ResponseMapper(LocalFileSystemHandler(tmp_path))
