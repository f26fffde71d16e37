"""
Process-wide Country Resolver

Lazily builds one default CountryResolver from configuration and exposes
module-level shortcuts around it.

Usage:
    from src.countries import api

    api.resolve("France").iso3166_numeric          # 250
    api.country_property("official_name_en", "UK")
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from src.countries.config import CountriesConfig, load_config
from src.countries.core.models import Country
from src.countries.core.registry import CountryRegistry
from src.countries.core.resolver import CountryResolver

logger = logging.getLogger(__name__)

# Global state
_resolver: CountryResolver | None = None
_lock = threading.Lock()


def get_resolver(config: CountriesConfig | None = None) -> CountryResolver:
    """
    Get the default resolver, building it on first use.

    Construction finishes before any caller receives the resolver.

    Args:
        config: Configuration for the first build; ignored afterwards
    """
    global _resolver

    if _resolver is not None:
        return _resolver
    with _lock:
        if _resolver is None:
            registry = CountryRegistry.from_config(config or load_config())
            _resolver = CountryResolver(registry)
            logger.info("Default country resolver initialized")
    return _resolver


def set_resolver(resolver: CountryResolver) -> None:
    """Install a resolver as the process default."""
    global _resolver

    with _lock:
        _resolver = resolver


def reset_resolver() -> None:
    """Drop the default resolver; the next call rebuilds it."""
    global _resolver

    with _lock:
        _resolver = None


def resolve(token: Any) -> Country:
    """Resolve a token with the default resolver."""
    return get_resolver().resolve(token)


def all_countries() -> list[Country]:
    """Every country of the default registry, in table order."""
    return list(get_resolver().registry.catalog)


def add_alias(token: str, country: Any) -> Country:
    return get_resolver().add_alias(token, country)


def add_to_blacklist(token: str) -> None:
    get_resolver().add_to_blacklist(token)


def country_property(name: str, token: Any, as_type: type | None = None) -> Any:
    """
    Read one property of anything resolvable to a country.

    Example:
        country_property("iso3166_alpha3", "France")       # Code('FRA')
        country_property("iso3166_alpha3", "France", str)  # 'FRA'
    """
    return resolve(token).get(name, as_type)
