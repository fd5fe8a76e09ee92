"""Tests for MultiValueList and Headers."""

import pytest

from mockhttp import Headers, MultiValueList


class TestMultiValueList:
    """Test the ordered multi-value list."""

    def test_empty(self):
        """Test an empty list is a valid, falsy value."""
        values = MultiValueList()
        assert values == ()
        assert not values
        assert values.first is None

    def test_single_string_is_one_value(self):
        """Test a plain string is not split into characters."""
        values = MultiValueList("abc")
        assert values == ("abc",)
        assert str(values) == "abc"

    def test_order_and_duplicates(self):
        """Test insertion order and duplicates are kept."""
        values = MultiValueList(["b", "a", "b"])
        assert list(values) == ["b", "a", "b"]
        assert values.first == "b"
        assert str(values) == "('b', 'a', 'b')"

    def test_immutable(self):
        """Test the list cannot be mutated in place."""
        values = MultiValueList(["a"])
        assert not hasattr(values, "append")
        with pytest.raises(TypeError):
            values[0] = "b"  # type: ignore[index]

    def test_extended_returns_new_list(self):
        """Test extended() leaves the original untouched."""
        values = MultiValueList(["a"])
        more = values.extended(["b", "c"])
        assert values == ("a",)
        assert more == ("a", "b", "c")
        assert isinstance(more, MultiValueList)


class TestHeaders:
    """Test the case-insensitive header mapping."""

    def test_case_insensitive_lookup(self):
        """Test names match regardless of casing."""
        headers = Headers({"Content-Type": "application/json"})
        assert headers["content-type"] == ("application/json",)
        assert headers["CONTENT-TYPE"] == ("application/json",)
        assert "content-TYPE" in headers
        assert 42 not in headers

    def test_repeated_names_merge_in_order(self):
        """Test repeated names accumulate values and keep the first casing."""
        headers = Headers([("Set-Cookie", "a=1"), ("set-cookie", "b=2"), ("X-Other", "x")])
        assert len(headers) == 2
        assert list(headers) == ["Set-Cookie", "X-Other"]
        assert headers["SET-COOKIE"] == ("a=1", "b=2")

    def test_mapping_of_lists(self):
        """Test a mapping of name -> list keeps every value."""
        headers = Headers({"Accept": ["text/html", "application/json"]})
        assert headers["accept"] == ("text/html", "application/json")
        assert headers.get_first("accept") == "text/html"

    def test_get_first_default(self):
        """Test get_first() falls back to the default."""
        headers = Headers()
        assert headers.get_first("Host") is None
        assert headers.get_first("Host", "localhost") == "localhost"
        assert headers.get("Host") is None

    def test_empty_header_values(self):
        """Test a header with no values is present but has no first value."""
        headers = Headers({"X-Empty": []})
        assert "x-empty" in headers
        assert headers["x-empty"] == ()
        assert headers.get_first("x-empty") is None
