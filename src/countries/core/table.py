"""
Column Store

Holds the parsed country table: one value sequence per declared property,
aligned by row index and converted to the property's scalar kind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from src.countries.core.properties import PROPERTIES, Code, PropertySpec
from src.countries.exceptions import InvalidTableError, MissingColumnError

logger = logging.getLogger(__name__)


def _parse_int(raw: str, column: str, row: int) -> int:
    raw = raw.strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        raise InvalidTableError(
            f"Column {column!r} row {row}: expected an integer, got {raw!r}"
        ) from None


class ColumnStore:
    """
    Typed, row-aligned storage for the declared properties.

    Text columns are kept twice: as plain strings and as interned Code
    objects, so either representation is a plain list index.
    """

    def __init__(
        self,
        table: Mapping[str, Sequence[str]],
        properties: Iterable[PropertySpec] = PROPERTIES,
    ):
        """
        Build the store from a parsed table.

        Args:
            table: Column label -> raw cell text, one cell per row
            properties: Property declarations to load

        Raises:
            MissingColumnError: A declared column is absent
            InvalidTableError: Columns differ in length or a cell cannot be parsed
        """
        self._properties: dict[str, PropertySpec] = {p.name: p for p in properties}
        self._values: dict[str, list] = {}
        self._codes: dict[str, list[Code]] = {}

        size: int | None = None
        for prop in self._properties.values():
            if prop.column not in table:
                raise MissingColumnError(prop.column, prop.name)
            raw = table[prop.column]
            if size is None:
                size = len(raw)
            elif len(raw) != size:
                raise InvalidTableError(
                    f"Column {prop.column!r} has {len(raw)} rows, expected {size}"
                )

            if prop.kind == "int":
                self._values[prop.name] = [
                    _parse_int(cell, prop.column, row) for row, cell in enumerate(raw)
                ]
            else:
                values = [str(cell) for cell in raw]
                self._values[prop.name] = values
                self._codes[prop.name] = [Code.of(v) for v in values]

        self._size = size or 0
        logger.debug(f"Loaded {len(self._properties)} columns x {self._size} rows")

    def __len__(self) -> int:
        return self._size

    @property
    def properties(self) -> tuple[PropertySpec, ...]:
        return tuple(self._properties.values())

    def spec(self, name: str) -> PropertySpec:
        return self._properties[name]

    def column(self, name: str) -> Sequence:
        """All values of a property, in row order."""
        return tuple(self._values[name])

    def get(self, name: str, row: int):
        """Value of a property at a row, in its scalar kind."""
        return self._values[name][row]

    def get_code(self, name: str, row: int) -> Code:
        """Value of a text property at a row, as an interned Code."""
        return self._codes[name][row]
