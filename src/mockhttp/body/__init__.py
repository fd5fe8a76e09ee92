"""Body descriptors and inbound body classification."""

from .data import (
    DEFAULT_ENCODING,
    Body,
    BodyData,
    BodyType,
    BytesBody,
    FileBody,
    JsonBody,
    TextBody,
)
from .parser import detect_body_type_from_content_type, parse_body, should_parse_body

__all__ = [
    "DEFAULT_ENCODING",
    "Body",
    "BodyData",
    "BodyType",
    "BytesBody",
    "FileBody",
    "JsonBody",
    "TextBody",
    "detect_body_type_from_content_type",
    "parse_body",
    "should_parse_body",
]
