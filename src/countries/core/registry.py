"""
Country Registry

Builds everything derived from the country table in one pass over the
declared properties:
- typed column storage
- one accessor per property, keyed by property name
- lookup mappings for unique properties, merged into the global mapping
- the catalog of valid countries

A registry is immutable once constructed, and construction either
completes or raises ConfigurationError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from src.countries.core.catalog import Catalog
from src.countries.core.lookup import (
    LookupCollision,
    PropertyLookup,
    build_global_mapping,
    build_int_mapping,
    build_property_mapping,
)
from src.countries.core.models import Country
from src.countries.core.properties import PRIMARY_PROPERTY, PROPERTIES, Code, PropertySpec, isnull
from src.countries.core.table import ColumnStore
from src.countries.exceptions import OutOfRangeError

if TYPE_CHECKING:
    from src.countries.config import CountriesConfig

logger = logging.getLogger(__name__)

Accessor = Callable[[int, Any], Any]


class CountryRegistry:
    """
    The loaded country table and its derived lookups.

    Example:
        registry = CountryRegistry.from_csv("country-codes.csv")
        france = registry.country(registry.lookup("iso3166_alpha2").get("FR"))
        france.official_name_en  # "France"
    """

    def __init__(
        self,
        table: Mapping[str, Sequence[str]],
        properties: Iterable[PropertySpec] = PROPERTIES,
    ):
        """
        Args:
            table: Column label -> raw cell text, one cell per row
            properties: Property declarations

        Raises:
            ConfigurationError: Malformed table or clashing global identifiers
        """
        self._store = ColumnStore(table, properties)
        self._accessors: dict[str, Accessor] = {}
        self._lookups: dict[str, PropertyLookup] = {}

        for prop in self._store.properties:
            self._accessors[prop.name] = self._make_accessor(prop)
            if not prop.unique:
                continue
            values = self._store.column(prop.name)
            if prop.kind == "int":
                self._lookups[prop.name] = build_int_mapping(prop.name, values)
            else:
                self._lookups[prop.name] = build_property_mapping(
                    prop.name, values, fold_case=prop.fold_case
                )

        self._global_lookup: Mapping[str, int] = MappingProxyType(
            build_global_mapping(
                self._lookups[p.name] for p in self._store.properties if p.unique and p.is_global
            )
        )

        self._catalog = Catalog(
            Country(self, row)
            for row in range(len(self._store))
            if not isnull(self._store.get(PRIMARY_PROPERTY, row))
        )

        logger.info(
            f"Country registry ready: {len(self._store)} rows, {len(self._catalog)} countries, "
            f"{len(self._global_lookup)} global identifiers, {len(self.collisions)} lookup clashes"
        )

    @classmethod
    def from_csv(cls, path: str | Path) -> CountryRegistry:
        """Build a registry from a country-codes CSV file."""
        from src.countries.adapters.source import read_table

        return cls(read_table(path))

    @classmethod
    def from_config(cls, config: CountriesConfig) -> CountryRegistry:
        """Build a registry from the configured table, downloading it if allowed."""
        from src.countries.adapters.source import load_table

        return cls(load_table(config))

    def _make_accessor(self, prop: PropertySpec) -> Accessor:
        store = self._store
        name = prop.name

        if prop.kind == "int":

            def int_accessor(row: int, as_type: type | None = None) -> int:
                if as_type not in (None, int):
                    raise TypeError(f"{name} is an integer property, not {as_type.__name__}")
                return store.get(name, row)

            return int_accessor

        default = Code if prop.output == "code" else str

        def text_accessor(row: int, as_type: type | None = None) -> str:
            target = as_type or default
            if target is Code:
                return store.get_code(name, row)
            if target is str:
                return store.get(name, row)
            raise TypeError(f"{name} is a text property, not {target.__name__}")

        return text_accessor

    # ------------------------------------------------------------------
    # Rows and properties
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of table rows (including rows outside the catalog)."""
        return len(self._store)

    def check_index(self, index: int) -> None:
        """Raise OutOfRangeError unless index is a row of the table."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._store):
            raise OutOfRangeError(index, len(self._store))

    def country(self, index: int) -> Country:
        """The country at a row index."""
        return Country(self, index)

    @property
    def properties(self) -> tuple[PropertySpec, ...]:
        return self._store.properties

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(self._accessors)

    def spec(self, name: str) -> PropertySpec:
        return self._store.spec(name)

    def accessor(self, name: str) -> Accessor:
        """Accessor ``(row, as_type) -> value`` for a property; KeyError if undeclared."""
        return self._accessors[name]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> PropertyLookup:
        """Lookup of a unique property; KeyError if the property is not unique."""
        return self._lookups[name]

    @property
    def global_lookup(self) -> Mapping[str, int]:
        """Read-only merged mapping of all global identifiers."""
        return self._global_lookup

    @property
    def collisions(self) -> list[LookupCollision]:
        """Per-property lookup clashes found while building."""
        return [c for lookup in self._lookups.values() for c in lookup.collisions]

    @property
    def catalog(self) -> Catalog:
        return self._catalog
