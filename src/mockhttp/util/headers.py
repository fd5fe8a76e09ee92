"""
Immutable, case-insensitive header mapping.

Names are matched case-insensitively but the casing of the first occurrence
is kept for iteration, so headers read back the way the client sent them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Iterable

from .multivalue import MultiValueList


HeaderSource = Mapping[str, Iterable[str] | str] | Iterable[tuple[str, str]]


class Headers(Mapping[str, MultiValueList]):
    """Read-only header mapping from name to :class:`MultiValueList`."""

    __slots__ = ("_names", "_values")

    def __init__(self, source: HeaderSource | None = None) -> None:
        names: dict[str, str] = {}
        values: dict[str, list[str]] = {}

        pairs: Iterable[tuple[str, Iterable[str] | str]]
        if source is None:
            pairs = ()
        elif isinstance(source, Mapping):
            pairs = source.items()
        else:
            pairs = source

        for name, value in pairs:
            key = name.lower()
            names.setdefault(key, name)
            bucket = values.setdefault(key, [])
            if isinstance(value, str):
                bucket.append(value)
            else:
                bucket.extend(value)

        self._names = names
        self._values = {key: MultiValueList(vals) for key, vals in values.items()}

    def __getitem__(self, name: str) -> MultiValueList:
        return self._values[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._values)

    def get_first(self, name: str, default: str | None = None) -> str | None:
        """First value for ``name`` (case-insensitive), or ``default``."""
        values = self._values.get(name.lower())
        if not values:
            return default
        return values[0]

    def __repr__(self) -> str:
        return f"Headers({ {name: list(self[name]) for name in self}!r})"
