"""Tests for body descriptors and inbound body classification."""

import gzip
import zlib

import pytest

from mockhttp import BodyData, BodyType, BytesBody, FileBody, JsonBody, TextBody
from mockhttp.body.parser import (
    charset_from_content_type,
    detect_body_type_from_content_type,
    parse_body,
    should_parse_body,
)


class TestBodyData:
    """Test the derived accessors of BodyData."""

    def test_no_body(self):
        """Test an empty BodyData reports NONE and no projections."""
        data = BodyData(None)
        assert data.detected_body_type is BodyType.NONE
        assert data.as_string is None
        assert data.as_json is None
        assert data.as_bytes is None
        assert data.as_file is None

    def test_text(self):
        """Test a text body exposes only its string."""
        data = BodyData(TextBody("hi", encoding="latin-1"))
        assert data.detected_body_type is BodyType.TEXT
        assert data.as_string == "hi"
        assert data.encoding == "latin-1"
        assert data.as_json is None
        assert data.as_bytes is None

    def test_json_without_raw(self):
        """Test an authored JSON body has no string or byte projection."""
        data = BodyData(JsonBody({"a": 1}, indented=True))
        assert data.as_json == {"a": 1}
        assert data.is_json_indented is True
        assert data.as_string is None
        assert data.as_bytes is None

    def test_json_with_raw(self):
        """Test an inbound JSON body projects its raw bytes and text."""
        data = BodyData(JsonBody([1]), BodyType.JSON, raw=b"[1]")
        assert data.as_string == "[1]"
        assert data.as_bytes == b"[1]"

    def test_bytes_and_file(self):
        """Test bytes and file variants."""
        assert BodyData(BytesBody(b"\x00")).as_bytes == b"\x00"
        data = BodyData(FileBody("a/b.json"))
        assert data.detected_body_type is BodyType.FILE
        assert data.as_file == "a/b.json"
        assert data.is_json_indented is None

    def test_body_type_names(self):
        """Test BodyType renders as its conventional name."""
        assert str(BodyType.TEXT) == "String"
        assert str(BodyType.JSON) == "Json"
        assert str(BodyType.MULTIPART) == "MultiPart"


class TestContentTypeDetection:
    """Test classification from the Content-Type header alone."""

    @pytest.mark.parametrize("content_type, expected", [
        (None, BodyType.NONE),
        ("", BodyType.NONE),
        ("application/json", BodyType.JSON),
        ("Application/JSON; charset=utf-8", BodyType.JSON),
        ("application/vnd.api+json", BodyType.JSON),
        ("text/plain", BodyType.TEXT),
        ("text/html; charset=iso-8859-1", BodyType.TEXT),
        ("application/soap+xml", BodyType.TEXT),
        ("application/x-www-form-urlencoded", BodyType.TEXT),
        ("multipart/form-data; boundary=xyz", BodyType.MULTIPART),
        ("application/octet-stream", BodyType.BYTES),
        ("image/png", BodyType.BYTES),
    ])
    def test_detect(self, content_type, expected):
        """Test each header value maps to the expected type."""
        assert detect_body_type_from_content_type(content_type) is expected

    def test_charset(self):
        """Test the charset parameter is extracted."""
        assert charset_from_content_type('text/plain; charset="ISO-8859-1"') == "ISO-8859-1"
        assert charset_from_content_type("text/plain") is None
        assert charset_from_content_type(None) is None


class TestParseBody:
    """Test inbound body classification."""

    @pytest.mark.parametrize("raw", [None, b""])
    def test_absent_body(self, raw):
        """Test no body gives no BodyData."""
        assert parse_body(raw, "application/json") is None

    def test_json_by_header(self):
        """Test a JSON content type parses the body."""
        data = parse_body(b'{"x": 1}', "application/json")
        assert data.body == JsonBody({"x": 1})
        assert data.detected_body_type_from_content_type is BodyType.JSON
        assert data.as_string == '{"x": 1}'

    def test_json_sniffed_without_header(self):
        """Test JSON is recognized when no content type is sent."""
        data = parse_body(b"[1, 2]")
        assert data.detected_body_type is BodyType.JSON
        assert data.as_json == [1, 2]
        assert data.detected_body_type_from_content_type is BodyType.NONE

    def test_invalid_json_falls_back_to_text(self):
        """Test a JSON content type with a non-JSON body stays text."""
        data = parse_body(b"not json", "application/json")
        assert data.body == TextBody("not json")
        assert data.detected_body_type_from_content_type is BodyType.JSON

    def test_text_content_type_is_not_sniffed(self):
        """Test a text content type keeps JSON-looking bodies as text."""
        data = parse_body(b'{"x": 1}', "text/plain")
        assert data.detected_body_type is BodyType.TEXT

    def test_plain_text(self):
        """Test plain text without a header."""
        data = parse_body(b"hello")
        assert data.body == TextBody("hello")

    def test_undecodable_is_bytes(self):
        """Test bytes that are not valid text stay bytes even with a text header."""
        data = parse_body(b"\x80\x81\xff", "text/plain")
        assert data.body == BytesBody(b"\x80\x81\xff")
        assert data.detected_body_type is BodyType.BYTES
        assert data.detected_body_type_from_content_type is BodyType.TEXT

    def test_binary_content_type(self):
        """Test a binary content type is never decoded."""
        data = parse_body(b"hello", "application/octet-stream")
        assert data.body == BytesBody(b"hello")
        assert data.as_bytes == b"hello"

    def test_charset_is_honored(self):
        """Test the declared charset decodes the body."""
        data = parse_body("café".encode("latin-1"), "text/plain; charset=iso-8859-1")
        assert data.as_string == "café"
        assert data.encoding == "iso-8859-1"

    def test_gzip(self):
        """Test gzip bodies are decompressed before classification."""
        data = parse_body(gzip.compress(b'{"a": 1}'), "application/json", "gzip")
        assert data.as_json == {"a": 1}
        assert data.as_bytes == b'{"a": 1}'

    def test_deflate(self):
        """Test deflate bodies are decompressed."""
        data = parse_body(zlib.compress(b"hello"), None, "deflate")
        assert data.as_string == "hello"

    def test_bad_gzip_kept_as_sent(self):
        """Test a body that is not really gzip is classified as sent."""
        data = parse_body(b"hello", None, "gzip")
        assert data.as_string == "hello"


class TestShouldParseBody:
    """Test which methods carry a body."""

    @pytest.mark.parametrize("method, expected", [
        ("GET", False),
        ("head", False),
        ("POST", True),
        ("put", True),
        ("DELETE", True),
        ("PATCH", True),
        ("PURGE", True),
    ])
    def test_methods(self, method, expected):
        """Test the per-method default."""
        assert should_parse_body(method) is expected

    def test_allow_all(self):
        """Test the override accepts bodies on every method."""
        assert should_parse_body("GET", allow_body_for_all_methods=True) is True
