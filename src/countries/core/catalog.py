"""
Country Catalog

The immutable, ordered collection of every valid country in a registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from src.countries.core.models import Country


class Catalog(Sequence[Country]):
    """Countries in table order; a read-only sequence."""

    __slots__ = ("_countries", "_members")

    def __init__(self, countries: Iterable[Country]):
        self._countries: tuple[Country, ...] = tuple(countries)
        self._members = frozenset(self._countries)

    @overload
    def __getitem__(self, index: int) -> Country: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Country, ...]: ...

    def __getitem__(self, index):
        return self._countries[index]

    def __len__(self) -> int:
        return len(self._countries)

    def __iter__(self) -> Iterator[Country]:
        return iter(self._countries)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, Country) and item in self._members

    def sorted(self) -> list[Country]:
        """Countries in canonical (alpha-3) order."""
        return sorted(self._countries)

    def __repr__(self) -> str:
        return f"Catalog({len(self._countries)} countries)"
