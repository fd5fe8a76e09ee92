"""Ordered, duplicate-permitting value list used for headers and query values."""

from __future__ import annotations

from typing import Iterable


class MultiValueList(tuple[str, ...]):
    """
    Immutable ordered sequence of strings.

    Insertion order is significant and duplicates are kept, so a repeated
    header (``Set-Cookie``) or query key (``?a=1&a=2``) keeps every value.
    """

    __slots__ = ()

    def __new__(cls, values: Iterable[str] | str | None = None) -> "MultiValueList":
        if values is None:
            return super().__new__(cls)
        if isinstance(values, str):
            return super().__new__(cls, (values,))
        return super().__new__(cls, values)

    @property
    def first(self) -> str | None:
        return self[0] if self else None

    def extended(self, values: Iterable[str]) -> "MultiValueList":
        """Return a new list with ``values`` appended."""
        return MultiValueList((*self, *values))

    def __str__(self) -> str:
        # A single value reads as a plain string in templates.
        if len(self) == 1:
            return self[0]
        return repr(tuple(self))

    def __repr__(self) -> str:
        return f"MultiValueList({list(self)!r})"
