"""
Country Resolver

Turns a loosely specified token into exactly one Country.

Text tokens go through an ordered pipeline, stopping at the first step
that applies:
1. Empty token: InvalidInputError
2. Whitelist hit on the literal token
3. Blacklist hit on the literal token: CountryNotFoundError
4. Whitelist hit on the lowercased token (the literal token is then cached)
5. Blacklist hit on the lowercased token: CountryNotFoundError
6. Substring search of the lowercased token in every global identifier:
   - one candidate country and more than 3 characters: accepted with a
     warning, and the token is cached
   - no candidate: CountryNotFoundError
   - otherwise: AmbiguousCountryError listing the candidates

Code tokens check the code caches first and then fall back to the text
pipeline. Integer tokens are ISO 3166 numeric codes.
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Any

from src.countries.core.cache import ResolutionCache
from src.countries.core.models import Country
from src.countries.core.properties import NUMERIC_PROPERTY, Code, isnull
from src.countries.core.registry import CountryRegistry
from src.countries.exceptions import (
    AmbiguousCountryError,
    CountryNotFoundError,
    InvalidInputError,
)

logger = logging.getLogger(__name__)

# Fuzzy matches are only accepted for tokens longer than this
MIN_FUZZY_LENGTH = 3


class CountryResolver:
    """
    Resolves names, codes and numbers to countries of one registry.

    Each resolver owns its ResolutionCache, so independent resolvers never
    share learned aliases.

    Example:
        resolver = CountryResolver(CountryRegistry.from_csv("country-codes.csv"))
        resolver.resolve("UK").iso3166_alpha3     # Code('GBR')
        resolver.resolve(250).official_name_en    # "France"
    """

    def __init__(self, registry: CountryRegistry, cache: ResolutionCache | None = None):
        """
        Args:
            registry: Loaded country registry
            cache: Cache to use; seeded from the registry's global lookup
                unless it already holds a seed
        """
        self._registry = registry
        self._cache = cache if cache is not None else ResolutionCache()
        if not self._cache.is_seeded:
            self._cache.seed(registry.global_lookup)

    @property
    def registry(self) -> CountryRegistry:
        return self._registry

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, token: Any) -> Country:
        """
        Resolve a token to a country.

        Args:
            token: Country, text (name or code), Code, or ISO 3166 numeric code

        Returns:
            The matching Country

        Raises:
            InvalidInputError: Empty token or unsupported type
            CountryNotFoundError: No match, or the token is blacklisted
            AmbiguousCountryError: Several matches, or a too-short single match
        """
        if isinstance(token, Country):
            if token.registry is not self._registry:
                raise InvalidInputError(token, "country belongs to a different registry")
            return token
        if isinstance(token, bool):
            raise InvalidInputError(token, "expected a name, a code or a numeric code")
        if isinstance(token, Integral):
            return self._resolve_int(int(token))
        if isinstance(token, Code):
            return self._resolve_symbol(token)
        if isinstance(token, str):
            return self._resolve_text(token)
        raise InvalidInputError(token, "expected a name, a code or a numeric code")

    def _resolve_int(self, token: int) -> Country:
        if isnull(token):
            raise CountryNotFoundError(token)
        index = self._registry.lookup(NUMERIC_PROPERTY).get(token)
        if index is None:
            raise CountryNotFoundError(token)
        return self._registry.country(index)

    def _resolve_symbol(self, token: Code) -> Country:
        if isnull(token):
            raise InvalidInputError(token)

        with self._cache.lock:
            index = self._cache.lookup_symbol(token)
            if index is not None:
                return self._registry.country(index)
            if self._cache.is_symbol_blacklisted(token):
                raise CountryNotFoundError(token)
            return self._resolve_text(str(token))

    def _resolve_text(self, token: str) -> Country:
        if isnull(token):
            raise InvalidInputError(token)

        with self._cache.lock:
            index = self._cache.lookup(token)
            if index is not None:
                return self._registry.country(index)
            if self._cache.is_blacklisted(token):
                logger.debug(f"Blacklisted token: {token!r}")
                raise CountryNotFoundError(token)

            lowered = token.lower()
            index = self._cache.lookup(lowered)
            if index is None:
                if self._cache.is_blacklisted(lowered):
                    logger.debug(f"Blacklisted token: {lowered!r}")
                    raise CountryNotFoundError(token)
                index = self._fuzzy_match(token)

            self._cache.whitelist(token, index)
            return self._registry.country(index)

    def _fuzzy_match(self, token: str) -> int:
        """Row index of the single fuzzy candidate, or raise."""
        rows = self._candidate_rows(token)
        if len(rows) == 1 and len(token) > MIN_FUZZY_LENGTH:
            index = next(iter(rows))
            country = self._registry.country(index)
            logger.warning(
                f"assuming {token!r} is {country!r}; if this is an error, call "
                f"add_to_blacklist({token!r}); if not, consider calling "
                f"add_alias({token!r}, {country!r})"
            )
            return index
        if not rows:
            raise CountryNotFoundError(token)
        raise AmbiguousCountryError(token, self._sorted_countries(rows))

    def _candidate_rows(self, token: str) -> set[int]:
        """Distinct rows whose global identifiers contain the token (case-insensitive)."""
        needle = token.lower()
        return {
            index
            for key, index in self._registry.global_lookup.items()
            if index is not None and needle in key.lower()
        }

    def _sorted_countries(self, rows: set[int]) -> tuple[Country, ...]:
        return tuple(sorted(self._registry.country(index) for index in rows))

    def search(self, token: str) -> list[Country]:
        """
        Countries whose global identifiers contain the token.

        Read-only: nothing is accepted, rejected or cached.
        """
        if not token:
            return []
        return list(self._sorted_countries(self._candidate_rows(token)))

    def resolve_by(self, prop: str, token: Any) -> Country:
        """
        Resolve a token against one unique property only (exact match).

        Args:
            prop: Unique property name (e.g. "ioc_code")
            token: Value of that property

        Raises:
            KeyError: Property is not unique
            InvalidInputError: Empty token
            CountryNotFoundError: No row has this value
        """
        lookup = self._registry.lookup(prop)
        if isinstance(token, bool) or isnull(token):
            raise InvalidInputError(token)
        index = lookup.get(token)
        if index is None:
            raise CountryNotFoundError(token, f"no country has {prop} = {token!r}")
        return self._registry.country(index)

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def add_alias(self, token: str, country: Any) -> Country:
        """
        Make a token (and its case variants) resolve to a country.

        Args:
            token: Text to register
            country: Country, or anything resolvable to one

        Returns:
            The country the alias points to
        """
        if isnull(str(token)):
            raise InvalidInputError(token)
        target = self.resolve(country)
        self._cache.whitelist(str(token), target.index)
        logger.debug(f"Alias {token!r} -> {target!r}")
        return target

    def add_to_blacklist(self, token: str) -> None:
        """Make a token (and its case variants) never resolve."""
        if isnull(str(token)):
            raise InvalidInputError(token)
        self._cache.blacklist(str(token))
        logger.debug(f"Blacklisted {token!r}")

    def reset_cache(self) -> None:
        """Forget all aliases and blacklisted tokens learned so far."""
        self._cache.reset()

    def cache_stats(self) -> dict[str, int]:
        return self._cache.stats()
