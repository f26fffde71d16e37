"""
Country Properties

Static descriptors for every column of the country table that the
registry exposes, plus the interned code type used for short identifiers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Literal

Kind = Literal["text", "int"]
Output = Literal["text", "code", "int"]


class Code(str):
    """
    Short identifier text (ISO alpha codes, IOC/FIFA codes, ...).

    Instances are created once per table cell from interned strings, so
    every read of a code property returns the same object. Equal to, and
    hashing like, the plain string it wraps.
    """

    __slots__ = ()

    @classmethod
    def of(cls, value: str) -> Code:
        """Build a code from interned text."""
        return cls(sys.intern(str(value)))

    def __repr__(self) -> str:
        return f"Code({str.__repr__(self)})"


@dataclass(frozen=True)
class PropertySpec:
    """
    Declaration of one country property.

    Attributes:
        name: Attribute name on Country (e.g. "iso3166_alpha2")
        column: Column label in the source table
        kind: Scalar kind stored in the table ("text" or "int")
        output: Representation returned by default ("text", "code" or "int")
        unique: Values identify a country and get a lookup mapping
        is_global: Lookup also feeds the global identifier mapping
    """

    name: str
    column: str
    kind: Kind = "text"
    output: Output = "text"
    unique: bool = False
    is_global: bool = False

    @property
    def fold_case(self) -> bool:
        return self.kind == "text"


def _text(name: str, column: str, unique: bool = True, is_global: bool = True) -> PropertySpec:
    return PropertySpec(name, column, "text", "text", unique, is_global)


def _code(name: str, column: str, unique: bool = False, is_global: bool = False) -> PropertySpec:
    return PropertySpec(name, column, "text", "code", unique, is_global)


_UNTERM_LANGUAGES = (
    ("ar", "Arabic"),
    ("cn", "Chinese"),
    ("en", "English"),
    ("es", "Spanish"),
    ("fr", "French"),
    ("ru", "Russian"),
)

PROPERTIES: tuple[PropertySpec, ...] = (
    PropertySpec("iso3166_numeric", "ISO3166-1-numeric", "int", "int", unique=True),
    *(_text(f"official_name_{lang}", f"official_name_{lang}") for lang, _ in _UNTERM_LANGUAGES),
    _code("iso3166_alpha2", "ISO3166-1-Alpha-2", unique=True, is_global=True),
    _code("iso3166_alpha3", "ISO3166-1-Alpha-3", unique=True, is_global=True),
    *(
        _text(f"unterm_{form.lower()}_name_{lang}", f"UNTERM {language} {form}")
        for lang, language in _UNTERM_LANGUAGES
        for form in ("Formal", "Short")
    ),
    _text("cldr_name_en", "CLDR display name"),
    _text("tld_name", "TLD", unique=False, is_global=False),
    _code("wmo_code", "WMO"),
    _code("fips_code", "FIPS"),
    _code("fifa_code", "FIFA", unique=True),
    _code("ioc_code", "IOC", unique=True),
    _code("continent_code", "Continent"),
    _text("capital_name_en", "Capital", unique=False, is_global=False),
)

PROPERTY_NAMES: tuple[str, ...] = tuple(p.name for p in PROPERTIES)

# Rows without an alpha-2 code are not catalog members
PRIMARY_PROPERTY = "iso3166_alpha2"
# Canonical order of countries
ORDER_PROPERTY = "iso3166_alpha3"
# Integer tokens resolve through this property
NUMERIC_PROPERTY = "iso3166_numeric"


def isnull(value: object) -> bool:
    """Empty text and zero mean "absent" for a property on a row."""
    if isinstance(value, str):
        return value == ""
    if isinstance(value, int):
        return value == 0
    return value is None
