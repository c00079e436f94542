"""
Greedy word aligner for recitation checking.

Walks the expected words against the transcript tokens with a bounded
look-ahead window. The walk is single-pass and never moves the transcript
cursor backwards: a transcript whose adjacent words are swapped is scored as
a mismatch rather than realigned.
"""

from collections.abc import Mapping, Sequence

from murajaa.core.arabic import is_marker_token, normalize_arabic, tokenize
from murajaa.core.matcher import EquivalenceMatcher, words_match
from murajaa.exceptions import ConfigurationError
from murajaa.models import (
    AlignmentResult,
    ErrorType,
    MatchStatus,
    WordError,
    WordMatch,
)


# Hafz level -> transcript tokens examined per expected word
STRICTNESS_WINDOWS: dict[int, int] = {
    1: 5,  # lenient
    2: 3,  # medium
    3: 1,  # strict
}


def strictness_window(strictness: int) -> int:
    """
    Look-ahead window width for a strictness level.

    Raises:
        ConfigurationError: If strictness is not 1, 2 or 3
    """
    try:
        return STRICTNESS_WINDOWS[strictness]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Strictness must be 1, 2 or 3, got {strictness!r}",
            setting_name="strictness",
        ) from None


def percent_score(match_count: int, total: int) -> int:
    """round(match_count / total * 100) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (match_count * 200 + total) // (2 * total)


def align_words(
    expected_words: Sequence[str],
    transcript: str,
    strictness: int = 1,
    flagged: Mapping[str, ErrorType] | None = None,
    matcher: EquivalenceMatcher | None = None,
) -> AlignmentResult:
    """
    Align expected words against a transcript.

    For each expected word the next ``strictness_window(strictness)``
    transcript tokens are searched. A hit records the word as correct and
    moves the cursor past the matched token. A miss consumes one token as a
    wrong reading when tokens remain, otherwise records the word as missing.
    Verse markers and bare numerals are recorded as correct, do not move the
    cursor, and do not count toward the score.

    Args:
        expected_words: Expected words, in order, as given (Uthmani spelling)
        transcript: Speech-to-text output
        strictness: Hafz level 1 (lenient) to 3 (strict)
        flagged: Normalized expected words already reported as erroneous by a
            refinement pass, with the reported error type
        matcher: Word matcher (default whitelist when omitted)

    Returns:
        AlignmentResult with one WordMatch per expected word

    Raises:
        ConfigurationError: If strictness is not 1, 2 or 3

    Examples:
        >>> align_words(["الرحمان", "الرحيم"], "الرحمن الرحيم").score
        100
    """
    window = strictness_window(strictness)
    match = matcher.matches if matcher is not None else words_match
    flagged = flagged or {}

    # Transcript tokens that normalize to nothing (digits, punctuation) are dropped
    tokens: list[tuple[str, str]] = []
    for raw in tokenize(transcript):
        normalized = normalize_arabic(raw)
        if normalized:
            tokens.append((raw, normalized))

    matches: list[WordMatch] = []
    errors: list[WordError] = []
    match_count = 0
    valid_count = 0
    cursor = 0

    for position, expected in enumerate(expected_words):
        normalized = normalize_arabic(expected)

        if is_marker_token(expected, normalized):
            matches.append(WordMatch(position=position, status=MatchStatus.CORRECT, expected=expected))
            continue

        valid_count += 1
        flag = flagged.get(normalized)

        found = None
        for j in range(cursor, min(cursor + window, len(tokens))):
            if match(normalized, tokens[j][1]):
                found = j
                break

        if found is not None:
            actual = tokens[found][0]
            cursor = found + 1
            if flag is None or flag == ErrorType.EXTRA:
                match_count += 1
                status = MatchStatus.CORRECT
            elif flag == ErrorType.MISSING:
                status = MatchStatus.MISSING
            else:
                status = MatchStatus.WRONG
            matches.append(
                WordMatch(
                    position=position,
                    status=status,
                    expected=expected,
                    actual=None if status == MatchStatus.CORRECT else actual,
                )
            )
        elif flag == ErrorType.MISSING or cursor >= len(tokens):
            matches.append(WordMatch(position=position, status=MatchStatus.MISSING, expected=expected))
        else:
            matches.append(
                WordMatch(
                    position=position,
                    status=MatchStatus.WRONG,
                    expected=expected,
                    actual=tokens[cursor][0],
                )
            )
            cursor += 1

        last = matches[-1]
        if last.status != MatchStatus.CORRECT:
            errors.append(
                WordError(
                    word=expected,
                    position=position,
                    type=ErrorType(last.status.value),
                )
            )

    return AlignmentResult(
        score=percent_score(match_count, valid_count),
        errors=errors,
        matches=matches,
        match_count=match_count,
        valid_word_count=valid_count,
    )
