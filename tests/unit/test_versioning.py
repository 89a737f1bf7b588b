"""Tests for version tokens and status ranks."""

from __future__ import annotations

import itertools

import pytest

from addonforge.core.errors import ParseError
from addonforge.models.status import UNKNOWN_RANK, AddOnStatus, status_rank
from addonforge.models.versioning import Ordering, RuntimeVersion, Version, compare

SAMPLE_VERSIONS = ["1", "1.0.0", "1.0.1", "1.2", "1.10", "2.0.0", "2.7.0", "2.7.0.1", "10.0"]


class TestVersionParse:
    def test_components(self):
        assert Version.parse("2.4.0").components == (2, 4, 0)

    def test_text_preserved(self):
        assert str(Version.parse("3.2.10")) == "3.2.10"
        assert str(Version.parse("01.2")) == "01.2"

    def test_single_component(self):
        assert Version.parse("9").major == 9

    @pytest.mark.parametrize("text", ["", "1.", ".1", "2.0.alpha", "a.b", "1..2", "-1", " 1.0"])
    def test_invalid_raises(self, text):
        with pytest.raises(ParseError):
            Version.parse(text)

    def test_oversized_component_raises_parse_error(self):
        with pytest.raises(ParseError, match="too long"):
            Version.parse("1." + "9" * 5000)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Version.parse("beta")

    def test_from_file_version(self):
        assert str(Version.from_file_version(3)) == "3.0.0"

    def test_frozen(self):
        v = Version.parse("1.0")
        with pytest.raises(Exception):
            v.text = "2.0"

    def test_coerced_from_string_field(self):
        from addonforge.models.manifest import AddOnManifest

        m = AddOnManifest(version="1.2", status="beta")
        assert m.version == Version.parse("1.2.0")


class TestVersionOrdering:
    def test_missing_trailing_components_are_zero(self):
        assert Version.parse("1.0") == Version.parse("1.0.0")
        assert hash(Version.parse("1.0")) == hash(Version.parse("1"))

    def test_extra_component_is_greater(self):
        assert Version.parse("2.7.0.1") > Version.parse("2.7.0")

    def test_numeric_not_lexical(self):
        assert Version.parse("1.10") > Version.parse("1.9")

    def test_compare_function_accepts_text(self):
        assert compare("1.2", "1.3") is Ordering.LESS
        assert compare("1.3", Version.parse("1.2")) is Ordering.GREATER
        assert compare("1.3.0", "1.3") is Ordering.EQUAL

    @pytest.mark.parametrize("text", SAMPLE_VERSIONS)
    def test_reflexive(self, text):
        assert compare(text, text) is Ordering.EQUAL

    def test_antisymmetric(self):
        for a, b in itertools.product(SAMPLE_VERSIONS, repeat=2):
            assert compare(a, b) == -compare(b, a)

    def test_transitive(self):
        for a, b, c in itertools.product(SAMPLE_VERSIONS, repeat=3):
            if compare(a, b) is Ordering.LESS and compare(b, c) is Ordering.LESS:
                assert compare(a, c) is Ordering.LESS

    def test_sorting(self):
        ordered = sorted(Version.parse(t) for t in ["2.0", "1.10", "1.9", "1"])
        assert [str(v) for v in ordered] == ["1", "1.9", "1.10", "2.0"]


class TestRuntimeVersion:
    def test_legacy_prefix_collapses(self):
        assert RuntimeVersion.parse("1.8").components == (8,)
        assert RuntimeVersion.parse("1.8.0_151").components == (8, 0)

    def test_modern_versions(self):
        assert RuntimeVersion.parse("9").components == (9,)
        assert RuntimeVersion.parse("9.1.2").components == (9, 1, 2)

    def test_suffix_tolerated(self):
        assert RuntimeVersion.parse("11-ea").components == (11,)

    def test_no_leading_number_raises(self):
        with pytest.raises(ParseError):
            RuntimeVersion.parse("ea")

    def test_oversized_component_raises_parse_error(self):
        with pytest.raises(ParseError):
            RuntimeVersion.parse("9" * 5000)

    def test_ordering(self):
        assert RuntimeVersion.parse("9") >= RuntimeVersion.parse("1.8")
        assert RuntimeVersion.parse("9.1.2") < RuntimeVersion.parse("10")


class TestAddOnStatus:
    def test_values(self):
        assert AddOnStatus.ALPHA == "alpha"
        assert AddOnStatus.BETA == "beta"
        assert AddOnStatus.RELEASE == "release"

    def test_total_order(self):
        ranks = [s.rank for s in AddOnStatus]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)
        assert AddOnStatus.ALPHA.rank < AddOnStatus.BETA.rank < AddOnStatus.RELEASE.rank

    def test_parse_exact(self):
        assert AddOnStatus.parse("beta") is AddOnStatus.BETA

    @pytest.mark.parametrize("text", ["Beta", "RELEASE", "xxx", "", "unknown"])
    def test_parse_rejects(self, text):
        with pytest.raises(ParseError):
            AddOnStatus.parse(text)

    def test_unknown_ranks_lowest(self):
        assert status_rank(None) == UNKNOWN_RANK
        assert all(status_rank(None) < s.rank for s in AddOnStatus)
