"""
Resolution Cache

In-memory whitelist/blacklist of tokens, owned by one CountryResolver.

Four structures are kept in sync: text and code (symbol) forms of the
whitelist (token -> row index) and of the blacklist (tokens that must not
resolve). Every write registers the token's lowercase and uppercase forms
as well. Nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from src.countries.core.lookup import case_variants
from src.countries.core.properties import Code

logger = logging.getLogger(__name__)


class ResolutionCache:
    """
    Mutable token caches guarded by a single re-entrant lock.

    Callers that need a read-check-then-write sequence to be atomic hold
    ``cache.lock`` around it; individual methods also take the lock.
    """

    def __init__(self, seed: Mapping[str, int] | None = None):
        """
        Args:
            seed: Initial whitelist (usually the global identifier mapping)
        """
        self._lock = threading.RLock()
        self._whitelist: dict[str, int] = {}
        self._blacklist: set[str] = set()
        self._symbol_whitelist: dict[Code, int] = {}
        self._symbol_blacklist: set[Code] = set()
        self._seed: dict[str, int] = {}
        if seed is not None:
            self.seed(seed)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def is_seeded(self) -> bool:
        return bool(self._seed)

    def seed(self, mapping: Mapping[str, int]) -> None:
        """Add a mapping to the whitelist and remember it for reset()."""
        with self._lock:
            self._seed.update(mapping)
            self._whitelist.update(mapping)
            self._symbol_whitelist.update((Code.of(k), v) for k, v in mapping.items())

    def reset(self) -> None:
        """Drop everything learned since seeding."""
        with self._lock:
            self._whitelist = dict(self._seed)
            self._blacklist = set()
            self._symbol_whitelist = {Code.of(k): v for k, v in self._seed.items()}
            self._symbol_blacklist = set()
            logger.debug("Resolution cache reset")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def lookup(self, token: str) -> int | None:
        """Row index whitelisted for a text token."""
        with self._lock:
            return self._whitelist.get(token)

    def lookup_symbol(self, token: Code) -> int | None:
        """Row index whitelisted for a code token."""
        with self._lock:
            return self._symbol_whitelist.get(token)

    def is_blacklisted(self, token: str) -> bool:
        with self._lock:
            return token in self._blacklist

    def is_symbol_blacklisted(self, token: Code) -> bool:
        with self._lock:
            return token in self._symbol_blacklist

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def whitelist(self, token: str, index: int) -> None:
        """Map a token and its case variants to a row, in text and code form."""
        with self._lock:
            for variant in case_variants(str(token)):
                code = Code.of(variant)
                self._whitelist[variant] = index
                self._symbol_whitelist[code] = index
                self._blacklist.discard(variant)
                self._symbol_blacklist.discard(code)

    def blacklist(self, token: str) -> None:
        """Mark a token and its case variants as never resolving."""
        with self._lock:
            for variant in case_variants(str(token)):
                code = Code.of(variant)
                self._blacklist.add(variant)
                self._symbol_blacklist.add(code)
                self._whitelist.pop(variant, None)
                self._symbol_whitelist.pop(code, None)

    def stats(self) -> dict[str, int]:
        """Sizes of the four cache structures."""
        with self._lock:
            return {
                "whitelist": len(self._whitelist),
                "blacklist": len(self._blacklist),
                "symbol_whitelist": len(self._symbol_whitelist),
                "symbol_blacklist": len(self._symbol_blacklist),
            }
