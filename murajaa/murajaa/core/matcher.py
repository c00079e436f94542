"""
Word equivalence matching.

Decides whether an expected (Uthmani) word and a transcribed word denote the
same recitation unit. Inputs are expected to be normalized with
``normalize_arabic`` already.
"""

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from murajaa.core.arabic import ALEF, normalize_arabic
from murajaa.data.whitelist import UTHMANI_MODERN_WHITELIST


# Optional hamza-variant alef followed by lam
DEFINITE_ARTICLE_PATTERN = re.compile(r"^[اأإآ]?ل")

# Merged-word containment only counts for substrings at least this long
MIN_CONTAINED_LENGTH = 3


def strip_definite_article(word: str) -> str:
    """Remove a leading definite article (ال with an optional hamza variant)."""
    return DEFINITE_ARTICLE_PATTERN.sub("", word, count=1)


def strip_internal_alefs(word: str) -> str:
    """
    Remove every alef except an initial one.

    Uthmani spelling writes medial alefs (الرحمان) that modern spelling
    drops (الرحمن). Words of two letters or fewer are returned unchanged.
    """
    if len(word) <= 2:
        return word
    return word[0] + word[1:].replace(ALEF, "")


class EquivalenceTable:
    """
    Immutable whitelist of spelling variants with symmetric lookup.

    Each canonical key and its variants form one group; two words are
    equivalent when some group contains both. The reverse index (word ->
    groups containing it) is computed once at construction.
    """

    def __init__(self, entries: Mapping[str, Iterable[str]]) -> None:
        groups: dict[str, set[str]] = {}
        for canonical, variants in entries.items():
            key = normalize_arabic(canonical)
            forms = groups.setdefault(key, {key})
            forms.update(normalize_arabic(v) for v in variants)

        reverse: dict[str, set[str]] = {}
        for key, forms in groups.items():
            for form in forms:
                reverse.setdefault(form, set()).add(key)

        self._groups = MappingProxyType({k: frozenset(v) for k, v in groups.items()})
        self._reverse = MappingProxyType({k: frozenset(v) for k, v in reverse.items()})

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, word: object) -> bool:
        return word in self._reverse

    def variants(self, canonical: str) -> frozenset[str]:
        """Accepted forms for a canonical key (empty when unknown)."""
        return self._groups.get(canonical, frozenset())

    def canonical_keys(self, word: str) -> frozenset[str]:
        """Keys of every group that contains ``word``."""
        return self._reverse.get(word, frozenset())

    def are_equivalent(self, first: str, second: str) -> bool:
        """Whether both words belong to a common variant group."""
        return any(second in self._groups[key] for key in self.canonical_keys(first))

    def pairs(self) -> Iterable[tuple[str, str]]:
        """Every (canonical, variant) pair in the table."""
        for key, forms in self._groups.items():
            for form in forms:
                yield key, form


DEFAULT_TABLE = EquivalenceTable(UTHMANI_MODERN_WHITELIST)


class EquivalenceMatcher:
    """
    Structural and whitelist word matching.

    Rules are tried in order and the first one that holds wins:

    1. exact equality
    2. equality with the definite article stripped from either or both words
    3. equality with non-initial alefs stripped from either or both words
    4. equality with both transformations applied to both words
    5. whitelist equivalence, of the words or of their article-stripped forms
    6. the candidate contains the expected word (or its article-stripped
       form) of at least three letters, for words the speech engine merged

    Example:
        matcher = EquivalenceMatcher()
        matcher.matches("الرحمان", "الرحمن")  # True
    """

    def __init__(self, table: EquivalenceTable | None = None) -> None:
        self.table = table or DEFAULT_TABLE

    def matches(self, expected: str, candidate: str) -> bool:
        if not expected or not candidate:
            return False

        if expected == candidate:
            return True

        expected_no_al = strip_definite_article(expected)
        candidate_no_al = strip_definite_article(candidate)
        if (
            expected_no_al == candidate_no_al
            or expected == candidate_no_al
            or expected_no_al == candidate
        ):
            return True

        expected_no_alefs = strip_internal_alefs(expected)
        candidate_no_alefs = strip_internal_alefs(candidate)
        if (
            expected_no_alefs == candidate_no_alefs
            or expected == candidate_no_alefs
            or expected_no_alefs == candidate
        ):
            return True

        if strip_internal_alefs(expected_no_al) == strip_internal_alefs(candidate_no_al):
            return True

        if self.table.are_equivalent(expected, candidate):
            return True
        if self.table.are_equivalent(expected_no_al, candidate_no_al):
            return True

        if len(expected) >= MIN_CONTAINED_LENGTH and expected in candidate:
            return True
        if len(expected_no_al) >= MIN_CONTAINED_LENGTH and expected_no_al in candidate:
            return True

        return False

    __call__ = matches


_default_matcher = EquivalenceMatcher()


def words_match(expected: str, candidate: str) -> bool:
    """
    Check whether two normalized words match, using the default whitelist.

    Args:
        expected: Normalized expected word
        candidate: Normalized transcript word

    Returns:
        True if the words denote the same recitation unit

    Examples:
        >>> words_match("الرحمان", "الرحمن")
        True
        >>> words_match("الصلاه", "الصلوه")
        True
    """
    return _default_matcher.matches(expected, candidate)
