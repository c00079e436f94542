"""
Core modules for Murajaa library.

This package contains the core business logic for:
- Arabic text normalization
- Uthmani/modern word equivalence
- Greedy word alignment and scoring
- Verification with optional semantic refinement
"""

from murajaa.core.arabic import normalize_arabic, tokenize, is_marker_token, word_count
from murajaa.core.matcher import (
    DEFAULT_TABLE,
    EquivalenceMatcher,
    EquivalenceTable,
    strip_definite_article,
    strip_internal_alefs,
    words_match,
)
from murajaa.core.aligner import align_words, percent_score, strictness_window, STRICTNESS_WINDOWS
from murajaa.core.verifier import verify, verify_async

__all__ = [
    # Arabic
    "normalize_arabic",
    "tokenize",
    "is_marker_token",
    "word_count",
    # Matcher
    "DEFAULT_TABLE",
    "EquivalenceMatcher",
    "EquivalenceTable",
    "strip_definite_article",
    "strip_internal_alefs",
    "words_match",
    # Aligner
    "align_words",
    "percent_score",
    "strictness_window",
    "STRICTNESS_WINDOWS",
    # Verifier
    "verify",
    "verify_async",
]
