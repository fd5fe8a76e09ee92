"""Logical response description produced by matching/templating code."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..body.data import BodyData, BytesBody, FileBody, JsonBody, TextBody
from ..util.multivalue import MultiValueList


HeaderValues = Iterable[str] | str


def _freeze_headers(headers: Mapping[str, HeaderValues] | None) -> Mapping[str, MultiValueList]:
    if not headers:
        return MappingProxyType({})
    return MappingProxyType({name: MultiValueList(values) for name, values in headers.items()})


def _with_content_type(
    headers: Mapping[str, HeaderValues] | None, content_type: str
) -> dict[str, HeaderValues]:
    merged: dict[str, HeaderValues] = {"Content-Type": content_type}
    if headers:
        for name, values in headers.items():
            if name.lower() == "content-type":
                merged.pop("Content-Type", None)
            merged[name] = values
    return merged


@dataclass(frozen=True, slots=True)
class ResponseMessage:
    """
    Status code, headers and at most one body.

    Header values are coerced to :class:`MultiValueList`; header order is
    the order they were given in.
    """
    status_code: int = 200
    headers: Mapping[str, MultiValueList] = field(default_factory=dict)
    body_data: BodyData | None = None

    def __post_init__(self):
        object.__setattr__(self, "headers", _freeze_headers(self.headers))

    @staticmethod
    def text(
        text: str,
        *,
        status_code: int = 200,
        headers: Mapping[str, HeaderValues] | None = None,
        encoding: str | None = None,
    ) -> "ResponseMessage":
        charset = encoding or "utf-8"
        return ResponseMessage(
            status_code=status_code,
            headers=_with_content_type(headers, f"text/plain; charset={charset}"),
            body_data=BodyData(TextBody(text, encoding=encoding)),
        )

    @staticmethod
    def json(
        obj: Any,
        *,
        status_code: int = 200,
        headers: Mapping[str, HeaderValues] | None = None,
        indented: bool = False,
        encoding: str | None = None,
    ) -> "ResponseMessage":
        charset = encoding or "utf-8"
        return ResponseMessage(
            status_code=status_code,
            headers=_with_content_type(headers, f"application/json; charset={charset}"),
            body_data=BodyData(JsonBody(obj, indented=indented, encoding=encoding)),
        )

    @staticmethod
    def binary(
        data: bytes,
        *,
        status_code: int = 200,
        headers: Mapping[str, HeaderValues] | None = None,
        content_type: str = "application/octet-stream",
    ) -> "ResponseMessage":
        return ResponseMessage(
            status_code=status_code,
            headers=_with_content_type(headers, content_type),
            body_data=BodyData(BytesBody(data)),
        )

    @staticmethod
    def file(
        path: str,
        *,
        status_code: int = 200,
        headers: Mapping[str, HeaderValues] | None = None,
    ) -> "ResponseMessage":
        return ResponseMessage(
            status_code=status_code,
            headers=dict(headers or {}),
            body_data=BodyData(FileBody(path)),
        )
