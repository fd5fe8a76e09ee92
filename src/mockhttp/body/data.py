"""
Body descriptors.

A body is exactly one of four variants:

- :class:`TextBody` - a string plus an optional text encoding
- :class:`JsonBody` - a structured value plus an indent flag
- :class:`BytesBody` - raw bytes, passed through untouched
- :class:`FileBody` - a reference resolved to bytes when the response is written

:class:`BodyData` wraps one variant together with the classification taken
from the ``Content-Type`` header, which may legitimately disagree with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


DEFAULT_ENCODING = "utf-8"


class BodyType(Enum):
    """Detected body kinds."""
    NONE = "None"
    TEXT = "String"
    JSON = "Json"
    BYTES = "Bytes"
    FILE = "File"
    MULTIPART = "MultiPart"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TextBody:
    text: str
    encoding: str | None = None
    body_type: ClassVar[BodyType] = BodyType.TEXT


@dataclass(frozen=True, slots=True)
class JsonBody:
    value: Any
    indented: bool = False
    encoding: str | None = None
    body_type: ClassVar[BodyType] = BodyType.JSON


@dataclass(frozen=True, slots=True)
class BytesBody:
    data: bytes
    body_type: ClassVar[BodyType] = BodyType.BYTES


@dataclass(frozen=True, slots=True)
class FileBody:
    path: str
    body_type: ClassVar[BodyType] = BodyType.FILE


Body = Union[TextBody, JsonBody, BytesBody, FileBody]


@dataclass(frozen=True, slots=True)
class BodyData:
    """
    A body variant plus its content-type classification.

    ``raw`` holds the wire bytes (after content decoding) for inbound bodies
    and is ``None`` for bodies authored in code. All ``as_*`` accessors are
    derived from ``body`` and ``raw``, never stored.
    """
    body: Body | None
    detected_body_type_from_content_type: BodyType = BodyType.NONE
    raw: bytes | None = None

    @property
    def detected_body_type(self) -> BodyType:
        if self.body is None:
            return BodyType.NONE
        return self.body.body_type

    @property
    def encoding(self) -> str | None:
        match self.body:
            case TextBody(encoding=encoding) | JsonBody(encoding=encoding):
                return encoding
            case _:
                return None

    @property
    def as_string(self) -> str | None:
        match self.body:
            case TextBody(text=text):
                return text
            case JsonBody(encoding=encoding) if self.raw is not None:
                return self.raw.decode(encoding or DEFAULT_ENCODING, errors="replace")
            case _:
                return None

    @property
    def as_json(self) -> Any:
        match self.body:
            case JsonBody(value=value):
                return value
            case _:
                return None

    @property
    def as_bytes(self) -> bytes | None:
        match self.body:
            case BytesBody(data=data):
                return data
            case _:
                return self.raw

    @property
    def as_file(self) -> str | None:
        match self.body:
            case FileBody(path=path):
                return path
            case _:
                return None

    @property
    def is_json_indented(self) -> bool | None:
        match self.body:
            case JsonBody(indented=indented):
                return indented
            case _:
                return None
