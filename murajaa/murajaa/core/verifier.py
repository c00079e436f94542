"""
Recitation verification.

Runs the word alignment and, when enabled, a semantic refinement pass whose
score replaces the alignment score. A refinement that is unavailable or
malformed never fails the call: the raw alignment result is returned.
"""

from collections.abc import Sequence
from typing import Optional

from murajaa._logging import log_refinement_fallback, log_verification_complete
from murajaa.config import MurajaaSettings, get_settings
from murajaa.core.aligner import align_words, strictness_window
from murajaa.core.arabic import normalize_arabic
from murajaa.models import (
    AlignmentResult,
    ErrorType,
    RefinementOk,
    RefinementOutcome,
    VerificationResult,
    WordError,
)
from murajaa.refinement.base import BaseAnalyzer


def _refined_errors(outcome: RefinementOk) -> list[WordError]:
    errors = []
    for index, error in enumerate(outcome.errors):
        errors.append(
            WordError(
                word=error.word,
                position=error.position if error.position is not None else index,
                # Surplus words have no expected position to mark
                type=ErrorType.WRONG if error.type == ErrorType.EXTRA else error.type,
                issue=error.issue,
            )
        )
    return errors


def _apply_outcome(
    raw: AlignmentResult,
    outcome: Optional[RefinementOutcome],
    expected_words: Sequence[str],
    transcript: str,
    strictness: int,
    pass_threshold: int,
) -> VerificationResult:
    if isinstance(outcome, RefinementOk):
        errors = _refined_errors(outcome)
        # Surplus words do not mark an expected word
        flagged = {
            normalize_arabic(e.word): e.type
            for e in outcome.errors
            if e.type != ErrorType.EXTRA
        }
        realigned = align_words(expected_words, transcript, strictness, flagged=flagged)
        result = VerificationResult(
            score=outcome.score,
            errors=errors,
            matches=realigned.matches,
            transcript=transcript,
            raw_score=raw.score,
            refined=True,
            analysis=outcome.analysis,
            passed=outcome.score >= pass_threshold,
        )
    else:
        if outcome is not None:
            log_refinement_fallback(outcome.reason, outcome.kind)
        result = VerificationResult(
            score=raw.score,
            errors=raw.errors,
            matches=raw.matches,
            transcript=transcript,
            raw_score=raw.score,
            passed=raw.score >= pass_threshold,
        )

    log_verification_complete(result.score, len(result.errors), strictness, result.refined)
    return result


def _resolve(
    strictness: Optional[int],
    use_refinement: Optional[bool],
    pass_threshold: Optional[int],
    settings: Optional[MurajaaSettings],
) -> tuple[int, bool, int]:
    settings = settings or get_settings()
    strictness = settings.default_strictness if strictness is None else strictness
    strictness_window(strictness)
    return (
        strictness,
        settings.refinement_enabled if use_refinement is None else use_refinement,
        settings.pass_threshold if pass_threshold is None else pass_threshold,
    )


def verify(
    transcript: str,
    expected_words: Sequence[str],
    expected_text: Optional[str] = None,
    strictness: Optional[int] = None,
    use_refinement: Optional[bool] = None,
    analyzer: Optional[BaseAnalyzer] = None,
    pass_threshold: Optional[int] = None,
    context: Optional[str] = None,
    settings: Optional[MurajaaSettings] = None,
) -> VerificationResult:
    """
    Verify a recitation transcript against the expected words.

    Args:
        transcript: Speech-to-text output
        expected_words: Expected words in order (Uthmani spelling)
        expected_text: Expected text for the analyzer (joined words when omitted)
        strictness: Hafz level 1-3 (settings default when omitted)
        use_refinement: Ask the analyzer for a semantic score (settings default when omitted)
        analyzer: Semantic analyzer; refinement is skipped without one
        pass_threshold: Minimum passing score (settings default when omitted)
        context: Extra context passed to the analyzer
        settings: Settings to read defaults from (cached environment settings when omitted)

    Returns:
        VerificationResult; ``score`` is the refined score when refinement
        succeeded, otherwise the alignment score

    Raises:
        ConfigurationError: If strictness is not 1, 2 or 3

    Example:
        >>> result = verify("الحمد لله رب العلمين", ["الْحَمْدُ", "لِلَّهِ", "رَبِّ", "الْعَالَمِينَ"])
        >>> result.score
        100
    """
    strictness, use_refinement, pass_threshold = _resolve(
        strictness, use_refinement, pass_threshold, settings
    )
    raw = align_words(expected_words, transcript, strictness)

    outcome = None
    if use_refinement and analyzer is not None and raw.score < 100:
        outcome = analyzer.analyze(
            transcript,
            expected_text if expected_text is not None else " ".join(expected_words),
            strictness,
            context,
        )

    return _apply_outcome(raw, outcome, expected_words, transcript, strictness, pass_threshold)


async def verify_async(
    transcript: str,
    expected_words: Sequence[str],
    expected_text: Optional[str] = None,
    strictness: Optional[int] = None,
    use_refinement: Optional[bool] = None,
    analyzer: Optional[BaseAnalyzer] = None,
    pass_threshold: Optional[int] = None,
    context: Optional[str] = None,
    settings: Optional[MurajaaSettings] = None,
) -> VerificationResult:
    """Asynchronous ``verify``; awaits the analyzer's async path."""
    strictness, use_refinement, pass_threshold = _resolve(
        strictness, use_refinement, pass_threshold, settings
    )
    raw = align_words(expected_words, transcript, strictness)

    outcome = None
    if use_refinement and analyzer is not None and raw.score < 100:
        outcome = await analyzer.analyze_async(
            transcript,
            expected_text if expected_text is not None else " ".join(expected_words),
            strictness,
            context,
        )

    return _apply_outcome(raw, outcome, expected_words, transcript, strictness, pass_threshold)
