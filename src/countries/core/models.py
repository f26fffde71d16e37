"""
Country Model

A Country is a validated row index into a CountryRegistry. Every declared
property is readable as an attribute, e.g. ``country.official_name_en``.
"""

from __future__ import annotations

from functools import total_ordering
from typing import TYPE_CHECKING, Any

from src.countries.core.properties import ORDER_PROPERTY

if TYPE_CHECKING:
    from src.countries.core.registry import CountryRegistry


@total_ordering
class Country:
    """
    Handle for one row of the country table.

    Two countries are equal when they share registry and row. Countries are
    ordered by ISO 3166 alpha-3 code.

    Use ``CountryRegistry.country(index)`` or ``CountryResolver.resolve(token)``
    to obtain instances.
    """

    __slots__ = ("_registry", "_index")

    def __init__(self, registry: CountryRegistry, index: int):
        registry.check_index(index)
        self._registry = registry
        self._index = index

    @property
    def index(self) -> int:
        """Row index in the registry's table."""
        return self._index

    @property
    def registry(self) -> CountryRegistry:
        return self._registry

    def get(self, name: str, as_type: type | None = None) -> Any:
        """
        Read a property.

        Args:
            name: Property name (see ``CountryRegistry.property_names``)
            as_type: ``str``, ``Code`` or ``int``; defaults to the property's
                declared output representation

        Raises:
            KeyError: Unknown property
            TypeError: Representation not available for this property
        """
        return self._registry.accessor(name)(self._index, as_type)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            accessor = self._registry.accessor(name)
        except KeyError:
            raise AttributeError(f"'Country' object has no attribute {name!r}") from None
        return accessor(self._index, None)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._registry.property_names))

    def to_dict(self) -> dict[str, Any]:
        """All declared properties in declaration order."""
        return {name: self.get(name) for name in self._registry.property_names}

    @property
    def sort_key(self) -> str:
        return str(self.get(ORDER_PROPERTY, str))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Country):
            return NotImplemented
        return self._registry is other._registry and self._index == other._index

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Country):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash((id(self._registry), self._index))

    def __str__(self) -> str:
        return str(self.get("cldr_name_en", str))

    def __repr__(self) -> str:
        return f"Country({self.sort_key!r})"
