"""Tests for category, region and sport code resolution."""
import logging

import pytest

from identifiers.codes import (
    CATEGORY_CODES, STATE_CODES, category_for_code, derive_code,
    resolve_category, resolve_region, resolve_sport,
)
from identifiers.exceptions import InvalidCategory, MissingRegion


class TestResolveCategory:
    @pytest.mark.parametrize("category,code", [
        ("STUDENT", "a"),
        ("COACH", "c"),
        ("INSTITUTE", "i"),
        ("CLUB", "b"),
        ("EVENT_INCHARGE", "e"),
        ("EVENT", "EVT"),
    ])
    def test_known_categories(self, category, code):
        assert resolve_category(category) == code

    def test_lookup_is_case_insensitive_and_trimmed(self):
        assert resolve_category("  student ") == "a"
        assert resolve_category("Coach") == "c"

    @pytest.mark.parametrize("category", ["ADMIN", "PARENT", "", None, 42])
    def test_unknown_category_is_an_error(self, category):
        with pytest.raises(InvalidCategory):
            resolve_category(category)

    def test_category_for_code_reverses_lookup(self):
        for category, code in CATEGORY_CODES.items():
            assert category_for_code(code) == category
        assert category_for_code("z") is None


class TestResolveRegion:
    def test_state_table_has_every_state(self):
        assert len(STATE_CODES) == 36
        assert all(len(code) == 2 and code.isupper() for code in STATE_CODES.values())

    @pytest.mark.parametrize("name,code", [
        ("Delhi", "DL"),
        ("delhi", "DL"),
        ("  MAHARASHTRA ", "MH"),
        ("tamil   nadu", "TN"),
        ("Dadra and Nagar Haveli and Daman and Diu", "DD"),
        ("Bengaluru", "KA"),
        ("hyderabad", "TG"),
    ])
    def test_known_names(self, name, code):
        assert resolve_region(name) == code

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_missing_region_is_an_error(self, name):
        with pytest.raises(MissingRegion):
            resolve_region(name)

    def test_unknown_region_falls_back_to_first_letters(self):
        assert resolve_region("Unknown State") == "UN"

    def test_fallback_is_deterministic(self):
        results = {resolve_region("Atlantis") for _ in range(10)}
        assert results == {"AT"}

    @pytest.mark.parametrize("name", [
        "'; DROP TABLE users; --",
        "<script>alert(1)</script>",
        "12%_Zed",
        "-",
        "Ödisha",
        "x",
    ])
    def test_fallback_is_always_two_uppercase_letters(self, name):
        code = resolve_region(name)
        assert len(code) == 2
        assert code.isascii() and code.isalpha() and code.isupper()

    def test_fallback_skips_symbols(self):
        assert resolve_region("'; DROP TABLE") == "DR"
        assert resolve_region("12%_Zed") == "ZE"
        assert resolve_region("x") == "XX"

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="identifiers.codes"):
            resolve_region("Unknown State")
        assert "Unknown region" in caplog.text


class TestResolveSport:
    @pytest.mark.parametrize("name,code", [
        ("Football", "FB"),
        ("football", "FB"),
        ("Soccer", "FB"),
        ("Table Tennis", "TT"),
        ("Kick Boxing", "KX"),
        ("Other", "OT"),
    ])
    def test_known_sports(self, name, code):
        assert resolve_sport(name) == code

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_missing_sport_is_other(self, name):
        assert resolve_sport(name) == "OT"

    def test_unknown_sport_falls_back(self):
        assert resolve_sport("Quidditch") == "QU"
        assert resolve_sport("3x3 Padel") == "XP"


def test_derive_code_pads_short_input():
    assert derive_code("9") == "XX"
    assert derive_code("a1") == "AX"
