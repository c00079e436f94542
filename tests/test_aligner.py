"""Unit tests for the greedy word aligner."""

from __future__ import annotations

import pytest

from murajaa.core.aligner import align_words, percent_score, strictness_window
from murajaa.exceptions import ConfigurationError
from murajaa.models import ErrorType, MatchStatus, WordError

IKHLAS = ["قل", "هو", "الله", "احد"]
BASMALA = ["بسم", "الله", "الرحمن", "الرحيم"]


def test_uthmani_spelling_scores_full_marks() -> None:
    result = align_words(["الرحمان", "الرحيم"], "الرحمن الرحيم")

    assert result.score == 100
    assert result.errors == []
    assert [m.status for m in result.matches] == [MatchStatus.CORRECT, MatchStatus.CORRECT]


def test_tashkeel_in_expected_words_is_ignored() -> None:
    words = ["بِسْمِ", "اللَّهِ", "الرَّحْمَ" + chr(0x0670) + "نِ", "الرَّحِيمِ"]

    assert align_words(words, "بسم الله الرحمن الرحيم").score == 100


@pytest.mark.parametrize("count", [2, 3, 4])
def test_missing_last_word_is_reported_once(count: int) -> None:
    words = BASMALA[:count]
    transcript = " ".join(words[:-1])

    result = align_words(words, transcript)

    assert result.errors == [WordError(word=words[-1], position=count - 1, type=ErrorType.MISSING)]
    assert result.score == round((count - 1) / count * 100)
    assert result.matches[-1].status == MatchStatus.MISSING


def test_unmatched_word_consumes_one_token_as_wrong() -> None:
    result = align_words(IKHLAS, "قل هو الرحمن احد")

    assert result.score == 75
    assert result.errors == [WordError(word="الله", position=2, type=ErrorType.WRONG)]
    assert result.matches[2].actual == "الرحمن"
    assert result.matches[3].status == MatchStatus.CORRECT


@pytest.mark.parametrize(("strictness", "score"), [(1, 100), (2, 100), (3, 25)])
def test_window_width_follows_strictness(strictness: int, score: int) -> None:
    result = align_words(IKHLAS, "قل اعوذ برب هو الله احد", strictness=strictness)

    assert result.score == score


def test_strict_level_reports_each_displaced_word() -> None:
    result = align_words(IKHLAS, "قل اعوذ برب هو الله احد", strictness=3)

    assert [e.type for e in result.errors] == [ErrorType.WRONG] * 3
    assert [e.position for e in result.errors] == [1, 2, 3]


def test_verse_markers_are_correct_and_unscored() -> None:
    result = align_words(["بسم", "۝١", "الله", "١"], "بسم الله")

    assert result.score == 100
    assert result.valid_word_count == 2
    assert len(result.matches) == 4
    assert result.matches[1].status == MatchStatus.CORRECT


def test_only_markers_gives_degenerate_result() -> None:
    result = align_words(["۝١", "۝٢"], "بسم")

    assert result.is_degenerate
    assert result.score == 0
    assert result.errors == []
    assert len(result.matches) == 2


def test_empty_transcript_marks_everything_missing() -> None:
    result = align_words(["بسم", "الله"], "")

    assert result.score == 0
    assert [e.type for e in result.errors] == [ErrorType.MISSING, ErrorType.MISSING]


def test_punctuation_tokens_in_transcript_are_skipped() -> None:
    assert align_words(["بسم", "الله"], "بسم ، الله").score == 100


def test_alignment_is_deterministic() -> None:
    first = align_words(IKHLAS, "قل هو الرحمن احد", strictness=2)
    second = align_words(IKHLAS, "قل هو الرحمن احد", strictness=2)

    assert first == second


def test_flagged_words_override_a_match() -> None:
    wrong = align_words(["بسم", "الله"], "بسم الله", flagged={"الله": ErrorType.WRONG})
    missing = align_words(["بسم", "الله"], "بسم الله", flagged={"الله": ErrorType.MISSING})

    assert wrong.matches[1].status == MatchStatus.WRONG
    assert wrong.matches[1].actual == "الله"
    assert wrong.score == 50
    assert missing.matches[1].status == MatchStatus.MISSING


@pytest.mark.parametrize("strictness", [0, 4, "2", None])
def test_invalid_strictness_raises(strictness) -> None:
    with pytest.raises(ConfigurationError, match="Strictness"):
        align_words(IKHLAS, "قل هو", strictness=strictness)


def test_strictness_window_values() -> None:
    assert [strictness_window(level) for level in (1, 2, 3)] == [5, 3, 1]


@pytest.mark.parametrize(
    ("matched", "total", "expected"),
    [(0, 0, 0), (1, 2, 50), (1, 8, 13), (2, 3, 67), (1, 3, 33)],
)
def test_percent_score_rounds_half_up(matched: int, total: int, expected: int) -> None:
    assert percent_score(matched, total) == expected
