"""
Lookup Table Builder

Builds value -> row index mappings for identifier columns and merges the
global ones into a single identifier mapping.

Collision policy:
- Within one property, a key seen on two rows is logged and recorded; the
  first row keeps the key and the build carries on.
- Across properties, a key pointing at two rows aborts with
  LookupCollisionError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from src.countries.core.properties import isnull
from src.countries.exceptions import LookupCollisionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupCollision:
    """A key claimed by two rows of the same property."""

    prop: str
    key: str | int
    value: str | int  # Original cell value that produced the key
    kept_row: int
    dropped_row: int


@dataclass
class PropertyLookup:
    """Lookup mapping for one unique property; the mapping is read-only."""

    prop: str
    mapping: Mapping = field(default_factory=dict)
    collisions: list[LookupCollision] = field(default_factory=list)

    def __post_init__(self):
        self.mapping = MappingProxyType(dict(self.mapping))

    def get(self, key) -> int | None:
        return self.mapping.get(key)

    def __contains__(self, key) -> bool:
        return key in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)


def case_variants(value: str) -> tuple[str, ...]:
    """The value, its lowercase and its uppercase form (duplicates removed)."""
    return tuple(dict.fromkeys((value, value.lower(), value.upper())))


def build_property_mapping(
    prop: str,
    values: Sequence[str | int],
    fold_case: bool = True,
) -> PropertyLookup:
    """
    Map every non-null value of a property to its row index.

    Args:
        prop: Property name (used in diagnostics)
        values: Column values in row order
        fold_case: Also register lowercase and uppercase forms of text values

    Returns:
        PropertyLookup with the mapping and any collisions found
    """
    mapping: dict = {}
    collisions: list[LookupCollision] = []
    for row, value in enumerate(values):
        if isnull(value):
            continue
        keys = case_variants(value) if fold_case and isinstance(value, str) else (value,)
        for key in keys:
            existing = mapping.setdefault(key, row)
            if existing != row:
                collisions.append(LookupCollision(prop, key, value, existing, row))
                logger.error(
                    f"Lookup clash in {prop}: {key!r} (from {value!r}) is row {existing}, "
                    f"ignoring row {row}"
                )
    return PropertyLookup(prop, mapping, collisions)


def build_int_mapping(prop: str, values: Sequence[int]) -> PropertyLookup:
    """Map every non-zero integer value of a property to its row index."""
    return build_property_mapping(prop, values, fold_case=False)


def build_global_mapping(lookups: Iterable[PropertyLookup]) -> dict[str, int]:
    """
    Merge per-property mappings into one global identifier mapping.

    Args:
        lookups: Lookups of the properties flagged global, in declaration order

    Returns:
        Merged key -> row index mapping

    Raises:
        LookupCollisionError: A key maps to different rows in two properties
    """
    merged: dict[str, int] = {}
    owners: dict[str, str] = {}
    for lookup in lookups:
        for key, row in lookup.mapping.items():
            existing = merged.get(key)
            if existing is None:
                merged[key] = row
                owners[key] = lookup.prop
            elif existing != row:
                raise LookupCollisionError(key, (owners[key], lookup.prop), (existing, row))
    return merged

