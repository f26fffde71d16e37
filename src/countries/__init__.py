"""
Countries

Resolves country names, UN and ISO 3166 codes, and numeric codes to
canonical country entries of the datahub "country-codes" table.

Usage:
    # Programmatic, with the configured table
    from src.countries import api
    api.resolve("UK").official_name_en

    # Explicit registry and resolver
    from src.countries import CountryRegistry, CountryResolver
    resolver = CountryResolver(CountryRegistry.from_csv("country-codes.csv"))
    resolver.resolve("FRA")

    # CLI
    python -m src.countries resolve UK France 840
"""

from .config import CountriesConfig
from .core.cache import ResolutionCache
from .core.catalog import Catalog
from .core.models import Country
from .core.properties import PROPERTIES, Code, PropertySpec
from .core.registry import CountryRegistry
from .core.resolver import CountryResolver
from .exceptions import (
    AmbiguousCountryError,
    ConfigurationError,
    CountriesError,
    CountryNotFoundError,
    InvalidCountryError,
    InvalidInputError,
    OutOfRangeError,
)

__all__ = [
    "AmbiguousCountryError",
    "Catalog",
    "Code",
    "ConfigurationError",
    "CountriesConfig",
    "CountriesError",
    "Country",
    "CountryNotFoundError",
    "CountryRegistry",
    "CountryResolver",
    "InvalidCountryError",
    "InvalidInputError",
    "OutOfRangeError",
    "PROPERTIES",
    "PropertySpec",
    "ResolutionCache",
]
