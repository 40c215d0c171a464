"""
Unit tests for the crime-type taxonomy translation table.

Pure lookups: no database access.
"""

from __future__ import annotations

import pytest

from core.taxonomy import (
    CATEGORY_UNITS,
    CRIME_TYPE_MAPPINGS,
    CrimeCategory,
    CrimeTypeMapper,
)


class TestTaxonomyTable:

    def test_table_size_and_categories(self):
        assert len(CRIME_TYPE_MAPPINGS) == 75
        assert {m.category for m in CRIME_TYPE_MAPPINGS} == set(CrimeCategory.values)

    def test_every_category_has_exactly_one_unit(self):
        assert set(CATEGORY_UNITS) == set(CrimeCategory.values)
        for mapping in CRIME_TYPE_MAPPINGS:
            assert mapping.unit == CATEGORY_UNITS[mapping.category]

    def test_keys_and_names_are_unique_case_insensitively(self):
        keys = [m.client_key.lower() for m in CRIME_TYPE_MAPPINGS]
        names = [m.display_name.lower() for m in CRIME_TYPE_MAPPINGS]
        assert len(set(keys)) == len(keys)
        assert len(set(names)) == len(names)

    @pytest.mark.parametrize("mapping", CRIME_TYPE_MAPPINGS, ids=lambda m: m.client_key)
    def test_round_trip(self, mapping):
        assert CrimeTypeMapper.to_display_name(CrimeTypeMapper.to_client_key(mapping.display_name)) == mapping.display_name
        assert CrimeTypeMapper.to_client_key(CrimeTypeMapper.to_display_name(mapping.client_key)) == mapping.client_key


class TestCrimeTypeMapper:

    def test_online_predatory_behavior(self):
        assert CrimeTypeMapper.to_display_name("onlinePredatoryBehavior") == "Online Predatory Behavior"
        assert CrimeTypeMapper.category("onlinePredatoryBehavior") == "Harassment & Exploitation"
        assert CrimeTypeMapper.unit("onlinePredatoryBehavior") == "Cyber Crime Against Women and Children"

    def test_lookups_are_case_insensitive(self):
        assert CrimeTypeMapper.to_display_name("PHISHING") == "Phishing"
        assert CrimeTypeMapper.to_client_key("  phishing ") == "phishing"
        assert CrimeTypeMapper.category("phishing") == CrimeTypeMapper.category("Phishing")

    def test_normalize_for_store_accepts_both_representations(self):
        assert CrimeTypeMapper.normalize_for_store("onlinePredatoryBehavior") == "Online Predatory Behavior"
        assert CrimeTypeMapper.normalize_for_store("online predatory behavior") == "Online Predatory Behavior"

    @pytest.mark.parametrize("mapping", CRIME_TYPE_MAPPINGS[:10], ids=lambda m: m.client_key)
    def test_normalize_for_store_is_idempotent(self, mapping):
        once = CrimeTypeMapper.normalize_for_store(mapping.display_name)
        assert once == mapping.display_name
        assert CrimeTypeMapper.normalize_for_store(once) == once

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["phishing"], "no-such-crime"])
    def test_invalid_input_never_raises(self, value):
        assert CrimeTypeMapper.to_display_name(value) is None
        assert CrimeTypeMapper.to_client_key(value) is None
        assert CrimeTypeMapper.category(value) is None
        assert CrimeTypeMapper.unit(value) is None
        assert CrimeTypeMapper.normalize_for_store(value) is None
        assert CrimeTypeMapper.is_valid(value) is False

    def test_find_candidates_matches_both_representations_in_table_order(self):
        candidates = CrimeTypeMapper.find_candidates("fraud")
        assert candidates
        assert all(
            "fraud" in m.client_key.lower() or "fraud" in m.display_name.lower()
            for m in candidates
        )
        order = list(CRIME_TYPE_MAPPINGS)
        assert [order.index(m) for m in candidates] == sorted(order.index(m) for m in candidates)

    def test_find_candidates_empty_input(self):
        assert CrimeTypeMapper.find_candidates("") == []
        assert CrimeTypeMapper.find_candidates(None) == []
        assert CrimeTypeMapper.find_candidates("zzzz-nothing") == []

    def test_category_and_unit_helpers(self):
        harassment = CrimeTypeMapper.crime_types_for_category("Harassment & Exploitation")
        assert any(m.client_key == "onlinePredatoryBehavior" for m in harassment)
        assert CrimeTypeMapper.crime_types_for_unit("Cyber Crime Against Women and Children") == harassment
        assert CrimeTypeMapper.unit_for_category("harassment & exploitation") == "Cyber Crime Against Women and Children"
        assert CrimeTypeMapper.unit_for_category("Unknown") is None
        assert len(CrimeTypeMapper.categories()) == 10
        assert len(CrimeTypeMapper.all_mappings()) == 75
