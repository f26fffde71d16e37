"""
Countries Exception Hierarchy

Provides structured exception types for country resolution.
All countries-specific exceptions inherit from CountriesError.

Usage:
    from src.countries.exceptions import AmbiguousCountryError, InvalidCountryError

    try:
        country = resolver.resolve("Guinea")
    except AmbiguousCountryError as e:
        print([c.iso3166_alpha3 for c in e.candidates])
    except InvalidCountryError as e:
        logger.error(f"Could not resolve country: {e}")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.countries.core.models import Country


class CountriesError(Exception):
    """
    Base exception for all countries errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code for programmatic handling
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


# =============================================================================
# Resolution Errors
# =============================================================================


class InvalidCountryError(CountriesError, ValueError):
    """A value could not be converted to a country."""

    def __init__(self, value: Any, detail: str | None = None, code: str | None = None) -> None:
        message = f"invalid country specification: {value!r}"
        if detail:
            message += f"\n{detail}"
        super().__init__(message, code=code)
        self.value = value
        self.detail = detail


class InvalidInputError(InvalidCountryError):
    """The token is null (empty text, empty code) or of an unsupported type."""

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__(value, detail, code="INVALID_INPUT")


class CountryNotFoundError(InvalidCountryError):
    """No country matches the token, or the token is blacklisted."""

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__(value, detail, code="NOT_FOUND")


class AmbiguousCountryError(InvalidCountryError):
    """
    The token matches several countries, or one country but is too short
    to be accepted automatically.

    Attributes:
        candidates: Distinct matching countries in canonical (alpha-3) order
    """

    def __init__(self, value: Any, candidates: tuple[Country, ...]) -> None:
        listed = ", ".join(repr(c) for c in candidates)
        super().__init__(value, f"maybe you meant one of [{listed}]", code="AMBIGUOUS")
        self.candidates = candidates


class OutOfRangeError(CountriesError, IndexError):
    """A row index outside the table was used to build a country handle."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            f"Row index {index} out of range for table of {size} rows",
            code="OUT_OF_RANGE",
        )
        self.index = index
        self.size = size


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CountriesError):
    """Base class for errors in the source table or its declared properties."""

    pass


class LookupCollisionError(ConfigurationError):
    """Two identifier columns map the same key to different rows."""

    def __init__(self, key: str, properties: tuple[str, str], rows: tuple[int, int]) -> None:
        super().__init__(
            f"Clash while merging lookups: {key!r} is row {rows[0]} in "
            f"{properties[0]} but row {rows[1]} in {properties[1]}",
            code="LOOKUP_COLLISION",
        )
        self.key = key
        self.properties = properties
        self.rows = rows


class MissingColumnError(ConfigurationError):
    """A declared property's source column is missing from the table."""

    def __init__(self, column: str, prop: str) -> None:
        super().__init__(
            f"Column {column!r} required by property '{prop}' is missing from the table",
            code="MISSING_COLUMN",
        )
        self.column = column
        self.prop = prop


class InvalidTableError(ConfigurationError):
    """The source table is malformed (ragged rows, unparseable cells)."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, code="INVALID_TABLE")
        self.reason = reason


class TableNotFoundError(ConfigurationError):
    """The source table file does not exist and may not be downloaded."""

    def __init__(self, path: str, hint: str | None = None) -> None:
        message = f"Country table not found: {path}"
        if hint:
            message += f". {hint}"
        super().__init__(message, code="TABLE_NOT_FOUND")
        self.path = path


# =============================================================================
# Source Errors
# =============================================================================


class DownloadError(CountriesError):
    """Failed to download the country table."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, code="DOWNLOAD_FAILED")
        self.url = url
        self.status_code = status_code
