"""The host side of a response: where status, headers and bytes end up."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from typing_extensions import override


class ResponseChannel(ABC):
    """
    A concrete host response being filled in.

    ``status_code`` and ``content_type`` are plain attributes; headers are
    appended (duplicates allowed) and the body is written once.
    """

    def __init__(self):
        self.status_code: int = 200
        self.content_type: str | None = None

    @abstractmethod
    def append_header(self, name: str, values: Iterable[str]) -> None:
        """Append every value of ``name``, keeping order and duplicates."""
        raise NotImplementedError(f"{self.__class__.__name__}.append_header not implemented")

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Write body bytes."""
        raise NotImplementedError(f"{self.__class__.__name__}.write not implemented")


class BufferedResponseChannel(ResponseChannel):
    """Collects a response in memory, e.g. to serialize it onto a stream later."""

    def __init__(self):
        super().__init__()
        self.headers: list[tuple[str, str]] = []
        self._body = bytearray()

    @override
    def append_header(self, name: str, values: Iterable[str]) -> None:
        self.headers.extend((name, value) for value in values)

    @override
    async def write(self, data: bytes) -> None:
        self._body.extend(data)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def header_values(self, name: str) -> list[str]:
        """All appended values of ``name`` (case-insensitive)."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]
