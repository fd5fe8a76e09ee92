"""Classification of inbound request bodies."""

from __future__ import annotations

import gzip
import json
import logging
import zlib

from .data import DEFAULT_ENCODING, BodyData, BodyType, BytesBody, JsonBody, TextBody


logger = logging.getLogger(__name__)

_BODY_ALLOWED_FOR_METHOD: dict[str, bool] = {
    "HEAD": False,
    "GET": False,
    "PUT": True,
    "POST": True,
    "DELETE": True,
    "TRACE": False,
    "OPTIONS": True,
    "CONNECT": False,
    "PATCH": True,
}

_JSON_TYPES = frozenset({"application/json", "text/json"})
_TEXT_TYPES = frozenset({
    "application/xml",
    "application/x-www-form-urlencoded",
    "application/javascript",
})


def should_parse_body(method: str, allow_body_for_all_methods: bool = False) -> bool:
    """Whether a body sent with ``method`` is read at all."""
    if allow_body_for_all_methods:
        return True
    return _BODY_ALLOWED_FOR_METHOD.get(method.upper(), True)


def _split_content_type(content_type: str) -> tuple[str, dict[str, str]]:
    media_type, *params = content_type.split(";")
    parsed: dict[str, str] = {}
    for param in params:
        name, sep, value = param.partition("=")
        if sep:
            parsed[name.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), parsed


def charset_from_content_type(content_type: str | None) -> str | None:
    if not content_type:
        return None
    _, params = _split_content_type(content_type)
    return params.get("charset")


def detect_body_type_from_content_type(content_type: str | None) -> BodyType:
    """
    Classify a body strictly by its ``Content-Type`` header value.

    The result is independent of what the body bytes look like.
    """
    if not content_type or not content_type.strip():
        return BodyType.NONE

    media_type, _ = _split_content_type(content_type)
    if media_type in _JSON_TYPES or media_type.endswith("+json"):
        return BodyType.JSON
    if media_type.startswith("multipart/"):
        return BodyType.MULTIPART
    if media_type.startswith("text/") or media_type in _TEXT_TYPES or media_type.endswith("+xml"):
        return BodyType.TEXT
    return BodyType.BYTES


def _decompress(raw: bytes, content_encoding: str | None) -> bytes:
    encoding = (content_encoding or "").strip().lower()
    if encoding in ("gzip", "x-gzip"):
        logger.debug("decompressing gzip request body (%d bytes)", len(raw))
        return gzip.decompress(raw)
    if encoding == "deflate":
        logger.debug("decompressing deflate request body (%d bytes)", len(raw))
        try:
            return zlib.decompress(raw)
        except zlib.error:
            # raw deflate stream without zlib header
            return zlib.decompress(raw, -zlib.MAX_WBITS)
    return raw


def _try_decode(raw: bytes, encoding: str) -> str | None:
    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return None


def _try_json(text: str) -> tuple[bool, object]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def parse_body(
    raw: bytes | None,
    content_type: str | None = None,
    content_encoding: str | None = None,
) -> BodyData | None:
    """
    Build :class:`BodyData` for an inbound body.

    Returns ``None`` when there is no body. ``gzip`` and ``deflate`` content
    encodings are undone before classification.
    """
    if not raw:
        return None

    try:
        data = _decompress(raw, content_encoding)
    except (OSError, EOFError, zlib.error):
        logger.debug("request body is not valid %s, keeping it as sent", content_encoding)
        data = raw

    from_content_type = detect_body_type_from_content_type(content_type)
    charset = charset_from_content_type(content_type)

    if from_content_type is BodyType.BYTES:
        return BodyData(BytesBody(data), from_content_type, raw=data)

    text = _try_decode(data, charset or DEFAULT_ENCODING)
    if text is None:
        return BodyData(BytesBody(data), from_content_type, raw=data)

    if from_content_type is BodyType.JSON or (
        from_content_type is BodyType.NONE and text.lstrip()[:1] in ("{", "[")
    ):
        ok, value = _try_json(text)
        if ok:
            return BodyData(JsonBody(value, encoding=charset), from_content_type, raw=data)

    return BodyData(TextBody(text, encoding=charset), from_content_type, raw=data)
