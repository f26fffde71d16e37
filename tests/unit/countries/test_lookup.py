"""Unit tests for the lookup table builder."""

import logging

import pytest

from src.countries.core.lookup import (
    PropertyLookup,
    build_global_mapping,
    build_int_mapping,
    build_property_mapping,
    case_variants,
)
from src.countries.exceptions import ConfigurationError, LookupCollisionError


class TestCaseVariants:
    def test_mixed_case(self):
        assert case_variants("France") == ("France", "france", "FRANCE")

    def test_duplicates_removed(self):
        assert case_variants("fr") == ("fr", "FR")
        assert case_variants("法国") == ("法国",)


class TestBuildPropertyMapping:
    """Test suite for per-property lookups."""

    def test_folds_case(self):
        lookup = build_property_mapping("name", ["France", "Germany"])
        assert lookup.get("France") == 0
        assert lookup.get("france") == 0
        assert lookup.get("FRANCE") == 0
        assert lookup.get("germany") == 1

    def test_without_case_folding(self):
        lookup = build_property_mapping("name", ["France"], fold_case=False)
        assert "France" in lookup
        assert "france" not in lookup

    def test_skips_null_values(self):
        lookup = build_property_mapping("name", ["", "France", ""])
        assert "" not in lookup
        assert len(lookup) == 3

    def test_same_row_reinsertion_is_not_a_collision(self):
        """Test that case variants of one value never collide with themselves."""
        lookup = build_property_mapping("code", ["GB"])
        assert lookup.collisions == []

    def test_collision_keeps_first_row(self, caplog):
        """Test that a clash is logged and recorded, and the first row wins."""
        with caplog.at_level(logging.ERROR):
            lookup = build_property_mapping("name", ["Congo", "congo", "Chad"])

        assert lookup.get("congo") == 0
        assert lookup.get("CONGO") == 0
        assert lookup.get("chad") == 2
        assert {c.key for c in lookup.collisions} == {"congo", "CONGO"}
        collision = lookup.collisions[0]
        assert collision.prop == "name"
        assert collision.kept_row == 0
        assert collision.dropped_row == 1
        assert "clash" in caplog.text

    def test_int_mapping(self):
        lookup = build_int_mapping("numeric", [826, 0, 250])
        assert lookup.get(826) == 0
        assert lookup.get(250) == 2
        assert lookup.get(0) is None

    def test_mapping_is_read_only(self):
        lookup = build_property_mapping("name", ["France"])
        with pytest.raises(TypeError):
            lookup.mapping["Atlantis"] = 0
        assert "Atlantis" not in lookup


class TestBuildGlobalMapping:
    """Test suite for merging identifier lookups."""

    def test_merges_agreeing_lookups(self):
        names = PropertyLookup("name", {"France": 1, "france": 1})
        codes = PropertyLookup("code", {"FR": 1, "fr": 1, "France": 1})
        merged = build_global_mapping([names, codes])
        assert merged == {"France": 1, "france": 1, "FR": 1, "fr": 1}

    def test_disagreement_is_fatal(self):
        names = PropertyLookup("official_name_en", {"Georgia": 80})
        other = PropertyLookup("cldr_name_en", {"Georgia": 233})
        with pytest.raises(LookupCollisionError) as exc_info:
            build_global_mapping([names, other])

        error = exc_info.value
        assert isinstance(error, ConfigurationError)
        assert error.key == "Georgia"
        assert error.properties == ("official_name_en", "cldr_name_en")
        assert error.rows == (80, 233)
        assert "LOOKUP_COLLISION" in str(error)

    def test_empty_input(self):
        assert build_global_mapping([]) == {}
