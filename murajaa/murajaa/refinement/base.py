"""
Abstract base class for semantic recitation analyzers.

This module defines the interface that all refinement implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional

from murajaa.models import RefinementOutcome


STRICTNESS_DESCRIPTIONS: dict[int, str] = {
    1: "lenient (small deviations are acceptable)",
    2: "medium",
    3: "strict (exact correspondence is required)",
}


def describe_strictness(strictness: int) -> str:
    """Human-readable strictness description for the analyzer prompt."""
    return STRICTNESS_DESCRIPTIONS.get(strictness, STRICTNESS_DESCRIPTIONS[1])


class BaseAnalyzer(ABC):
    """
    Abstract interface for semantic refinement of a recitation check.

    Implementations must never raise for remote failures: they return
    ``RefinementUnavailable`` or ``RefinementMalformed`` instead, so that
    verification can fall back to the raw alignment.

    Example:
        class MyAnalyzer(BaseAnalyzer):
            def analyze(self, transcript, expected_text, strictness=1, context=None):
                ...
    """

    @abstractmethod
    def analyze(
        self,
        transcript: str,
        expected_text: str,
        strictness: int = 1,
        context: Optional[str] = None,
    ) -> RefinementOutcome:
        """
        Compare a transcript with the expected text.

        Args:
            transcript: Speech-to-text output
            expected_text: Expected Quran text (Uthmani)
            strictness: Hafz level 1-3
            context: Optional extra context (surah name, page)

        Returns:
            A tagged refinement outcome
        """
        pass

    @abstractmethod
    async def analyze_async(
        self,
        transcript: str,
        expected_text: str,
        strictness: int = 1,
        context: Optional[str] = None,
    ) -> RefinementOutcome:
        """Asynchronously compare a transcript with the expected text."""
        pass

    def open(self) -> None:
        """Acquire resources (HTTP clients). Default: nothing to do."""

    def close(self) -> None:
        """Release resources. Default: nothing to do."""

    def __enter__(self) -> "BaseAnalyzer":
        """Context manager entry - opens the analyzer."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the analyzer."""
        self.close()
