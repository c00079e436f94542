"""
Arabic text normalization utilities.

This module provides functions for normalizing Arabic text, which is essential
for comparing speech-to-text output (modern spelling) against the canonical
Uthmani Quran text.
"""

import re


# Tashkeel plus the Quranic annotation marks (small high letters, pause signs)
DIACRITICS_PATTERN = re.compile(
    r"[\u064B-\u065F\u0610-\u061A\u06D6-\u06DC\u06DF-\u06E4\u06E7\u06E8\u06EA-\u06ED]"
)

# Alef variants: madda, hamza above, hamza below, superscript alef, alef wasla
ALEF_VARIANTS_PATTERN = re.compile(r"[\u0622\u0623\u0625\u0670\u0671]")

# Hamza carried on waw / yeh
HAMZA_CARRIER_PATTERN = re.compile(r"[\u0624\u0626]")

ALEF = "ا"
HAMZA = "ء"
TEH_MARBUTA = "ة"
HEH = "ه"
ALEF_MAKSURA = "ى"
YEH = "ي"
TATWEEL = "\u0640"
VERSE_END_MARKER = "\u06DD"

# Verse-end marker and every digit script (Arabic-Indic, extended, ASCII)
MARKER_AND_DIGITS_PATTERN = re.compile(r"[\u06DD\u0660-\u0669\u06F0-\u06F90-9]")

# Arabic comma, semicolon, question mark, full stop, plus ASCII and quote marks
PUNCTUATION_PATTERN = re.compile(r"[\u060C\u061B\u061F\u06D4.,;:!?\"'\u00AB\u00BB()\[\]]")

WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_arabic(text: str | None) -> str:
    """
    Normalize Arabic text for comparison.

    Performs the following normalizations:
    - Remove tashkeel and Quranic annotation marks
    - Replace alef variants (madda, hamza above/below, superscript alef,
      alef wasla) with plain alef
    - Replace hamza carriers (on waw, on yeh) with bare hamza
    - Replace ta marbuta with ha, alef maqsura with ya
    - Remove tatweel, verse-end markers and digits of every script
    - Remove common punctuation and trim surrounding whitespace

    The function is pure and idempotent.

    Args:
        text: Arabic text to normalize

    Returns:
        Normalized text string

    Examples:
        >>> normalize_arabic("بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ")
        'بسم الله الرحمان الرحيم'
        >>> normalize_arabic("ٱلْحَمْدُ لِلَّهِ ۝٢")
        'الحمد لله'
    """
    if not text:
        return ""

    text = DIACRITICS_PATTERN.sub("", text)
    text = ALEF_VARIANTS_PATTERN.sub(ALEF, text)
    text = HAMZA_CARRIER_PATTERN.sub(HAMZA, text)
    text = text.replace(TEH_MARBUTA, HEH)
    text = text.replace(ALEF_MAKSURA, YEH)
    text = text.replace(TATWEEL, "")
    text = MARKER_AND_DIGITS_PATTERN.sub("", text)
    text = PUNCTUATION_PATTERN.sub("", text)

    return text.strip()


def tokenize(text: str | None) -> list[str]:
    """Split text on whitespace, dropping empty tokens."""
    if not text:
        return []
    return [token for token in WHITESPACE_PATTERN.split(text) if token]


def is_marker_token(raw: str, normalized: str | None = None) -> bool:
    """
    Check whether an expected word is a verse marker or a bare numeral.

    Such tokens (a verse-end sign, an ayah number) carry no recitable
    content; the aligner records them as correct and leaves them out of
    the score.

    Args:
        raw: The word as given
        normalized: Its normalized form (computed when omitted)
    """
    if raw.lstrip().startswith(VERSE_END_MARKER):
        return True
    if normalized is None:
        normalized = normalize_arabic(raw)
    return not normalized


def word_count(text: str) -> int:
    """
    Count recitable words in text.

    Args:
        text: Arabic text

    Returns:
        Number of words that survive normalization
    """
    return sum(1 for token in tokenize(text) if not is_marker_token(token))
