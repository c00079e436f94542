"""
Verification data models.

Word-level verdicts and the results of aligning a transcript against the
expected Quran words.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class MatchStatus(str, Enum):
    """Verdict for a single expected word."""

    CORRECT = "correct"
    WRONG = "wrong"
    MISSING = "missing"


class ErrorType(str, Enum):
    """Kind of recitation error."""

    MISSING = "missing"
    WRONG = "wrong"
    EXTRA = "extra"


class WordMatch(BaseModel):
    """
    Verdict for one position of the expected word sequence.

    Attributes:
        position: 0-based index into the expected words
        status: Correct, wrong or missing
        expected: The expected word as given (Uthmani spelling)
        actual: The transcript token consumed for this position, if any
    """

    position: int = Field(..., ge=0, description="0-based index into the expected words")
    status: MatchStatus = Field(..., description="Verdict for this word")
    expected: str = Field(..., description="Expected word as given")
    actual: Optional[str] = Field(default=None, description="Transcript token, if any")

    model_config = {"frozen": True}


class WordError(BaseModel):
    """A recitation error reported to the learner."""

    word: str = Field(..., description="The expected (or surplus) word")
    position: int = Field(..., ge=0, description="Position in the expected words")
    type: ErrorType = Field(..., description="Error kind")
    issue: Optional[str] = Field(default=None, description="Short explanation, if any")

    model_config = {"frozen": True}


class AlignmentResult(BaseModel):
    """
    Result of the greedy word alignment.

    Attributes:
        score: round(match_count / valid_word_count * 100), 0 when nothing is scorable
        errors: Wrong and missing words
        matches: One WordMatch per expected word
        match_count: Number of expected words matched correctly
        valid_word_count: Expected words that count toward the score
    """

    score: int = Field(..., ge=0, le=100)
    errors: list[WordError] = Field(default_factory=list)
    matches: list[WordMatch] = Field(default_factory=list)
    match_count: int = Field(default=0, ge=0)
    valid_word_count: int = Field(default=0, ge=0)

    @computed_field
    @property
    def is_degenerate(self) -> bool:
        """Whether the expected words contained nothing scorable."""
        return self.valid_word_count == 0

    def __str__(self) -> str:
        return (
            f"AlignmentResult(score={self.score}, "
            f"matched={self.match_count}/{self.valid_word_count}, "
            f"errors={len(self.errors)})"
        )


class VerificationResult(BaseModel):
    """
    Output of a verification call.

    ``raw_score`` is always the alignment score; ``score`` is the refined score
    when refinement succeeded and the raw score otherwise.
    """

    score: int = Field(..., ge=0, le=100)
    errors: list[WordError] = Field(default_factory=list)
    matches: list[WordMatch] = Field(default_factory=list)
    transcript: str = Field(default="")
    raw_score: int = Field(..., ge=0, le=100)
    refined: bool = Field(default=False, description="Whether a refinement result was applied")
    analysis: Optional[str] = Field(default=None, description="Free-text rationale from refinement")
    passed: bool = Field(default=False, description="score >= pass threshold")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "score": 100,
                    "errors": [],
                    "matches": [
                        {"position": 0, "status": "correct", "expected": "الرَّحْمَٰنِ"},
                        {"position": 1, "status": "correct", "expected": "الرَّحِيمِ"},
                    ],
                    "transcript": "الرحمن الرحيم",
                    "raw_score": 100,
                    "refined": False,
                    "passed": True,
                }
            ]
        }
    }

    def __str__(self) -> str:
        source = "refined" if self.refined else "raw"
        return f"VerificationResult(score={self.score} [{source}], errors={len(self.errors)})"
