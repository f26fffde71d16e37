"""Unit tests for ResolutionCache."""

from src.countries.core.cache import ResolutionCache
from src.countries.core.properties import Code


class TestResolutionCache:
    """Test suite for whitelist/blacklist bookkeeping."""

    def test_empty(self):
        cache = ResolutionCache()
        assert not cache.is_seeded
        assert cache.lookup("FR") is None
        assert cache.stats() == {
            "whitelist": 0,
            "blacklist": 0,
            "symbol_whitelist": 0,
            "symbol_blacklist": 0,
        }

    def test_seed_fills_both_whitelists(self):
        cache = ResolutionCache(seed={"FR": 1, "fr": 1})
        assert cache.is_seeded
        assert cache.lookup("fr") == 1
        assert cache.lookup_symbol(Code("FR")) == 1

    def test_whitelist_registers_case_variants(self):
        cache = ResolutionCache()
        cache.whitelist("Hexagone", 1)
        for variant in ("Hexagone", "hexagone", "HEXAGONE"):
            assert cache.lookup(variant) == 1
            assert cache.lookup_symbol(Code(variant)) == 1
        assert cache.lookup("hExAgOnE") is None

    def test_blacklist_registers_case_variants(self):
        cache = ResolutionCache()
        cache.blacklist("Atlantis")
        for variant in ("Atlantis", "atlantis", "ATLANTIS"):
            assert cache.is_blacklisted(variant)
            assert cache.is_symbol_blacklisted(Code(variant))

    def test_latest_override_wins(self):
        cache = ResolutionCache(seed={"FR": 1})
        cache.blacklist("FR")
        assert cache.lookup("FR") is None
        assert cache.is_blacklisted("fr")

        cache.whitelist("fr", 1)
        assert cache.lookup("FR") == 1
        assert not cache.is_blacklisted("FR")
        assert not cache.is_symbol_blacklisted(Code("fr"))

    def test_reset_restores_seed(self):
        cache = ResolutionCache(seed={"FR": 1})
        cache.whitelist("Hexagone", 1)
        cache.blacklist("FR")
        cache.reset()

        assert cache.lookup("FR") == 1
        assert cache.lookup_symbol(Code("FR")) == 1
        assert cache.lookup("Hexagone") is None
        assert not cache.is_blacklisted("FR")

    def test_symbol_keys_are_codes(self):
        cache = ResolutionCache()
        cache.whitelist("Gallia", 1)
        assert all(isinstance(k, Code) for k in cache._symbol_whitelist)

    def test_lock_is_reentrant(self):
        cache = ResolutionCache()
        with cache.lock:
            cache.whitelist("Gallia", 1)
            assert cache.lookup("gallia") == 1
