"""Unit tests for word equivalence matching."""

from __future__ import annotations

import pytest

from murajaa.core.matcher import (
    DEFAULT_TABLE,
    EquivalenceMatcher,
    EquivalenceTable,
    strip_definite_article,
    strip_internal_alefs,
    words_match,
)


@pytest.mark.parametrize(
    ("expected", "candidate"),
    [
        ("الله", "الله"),  # exact
        ("الكتاب", "كتاب"),  # article dropped
        ("ناس", "الناس"),  # article added
        ("الرحمان", "الرحمن"),  # medial alef
        ("العالمين", "علمين"),  # article and medial alef
        ("الصلاه", "الصلوه"),  # whitelist
        ("السماء", "السما"),  # whitelist, dropped hamza
        ("قال", "فقال"),  # merged word
    ],
)
def test_words_match_accepts_equivalent_spellings(expected: str, candidate: str) -> None:
    assert words_match(expected, candidate)


@pytest.mark.parametrize(
    ("expected", "candidate"),
    [
        ("كتاب", "قلم"),
        ("من", "ومن"),  # containment needs three letters
        ("", "الله"),
        ("الله", ""),
    ],
)
def test_words_match_rejects_different_words(expected: str, candidate: str) -> None:
    assert not words_match(expected, candidate)


def test_whitelist_pairs_match_in_both_directions() -> None:
    pairs = list(DEFAULT_TABLE.pairs())

    assert pairs
    for canonical, variant in pairs:
        assert words_match(canonical, variant), (canonical, variant)
        assert words_match(variant, canonical), (variant, canonical)


def test_strip_definite_article() -> None:
    assert strip_definite_article("الكتاب") == "كتاب"
    assert strip_definite_article("كتاب") == "كتاب"


def test_strip_internal_alefs_keeps_initial_alef_and_short_words() -> None:
    assert strip_internal_alefs("الرحمان") == "الرحمن"
    assert strip_internal_alefs("اا") == "اا"


def test_equivalence_table_is_symmetric() -> None:
    table = EquivalenceTable({"foo": ("bar", "baz")})

    assert len(table) == 1
    assert "bar" in table
    assert table.canonical_keys("baz") == frozenset({"foo"})
    assert table.variants("foo") == frozenset({"foo", "bar", "baz"})
    assert table.are_equivalent("bar", "foo")
    assert table.are_equivalent("bar", "baz")
    assert not table.are_equivalent("bar", "qux")


def test_matcher_uses_its_own_table() -> None:
    custom = EquivalenceMatcher(EquivalenceTable({"foo": ("bar",)}))

    assert custom.matches("foo", "bar")
    assert custom("bar", "foo")
    assert not custom.matches("الصلاه", "الصلوه")
