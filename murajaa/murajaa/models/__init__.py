"""
Pydantic data models for Murajaa library.

These models represent the core data structures used throughout the library:
- WordMatch / WordError: word-level verdicts of a recitation check
- AlignmentResult: result of the greedy word alignment
- VerificationResult: output of a verification call
- Refinement outcomes: tagged results of semantic refinement
- LearnerPosition, Task and friends: stage progression state
"""

from murajaa.models.verification import (
    AlignmentResult,
    ErrorType,
    MatchStatus,
    VerificationResult,
    WordError,
    WordMatch,
)
from murajaa.models.refinement import (
    RefinedError,
    RefinementMalformed,
    RefinementOk,
    RefinementOutcome,
    RefinementUnavailable,
    RefinementUsage,
)
from murajaa.models.progression import (
    AdvanceResult,
    LearnerPosition,
    StageCompletion,
    StageHours,
    StageId,
    Task,
    TaskProgress,
    TaskStatus,
)

__all__ = [
    "AlignmentResult",
    "ErrorType",
    "MatchStatus",
    "VerificationResult",
    "WordError",
    "WordMatch",
    "RefinedError",
    "RefinementMalformed",
    "RefinementOk",
    "RefinementOutcome",
    "RefinementUnavailable",
    "RefinementUsage",
    "AdvanceResult",
    "LearnerPosition",
    "StageCompletion",
    "StageHours",
    "StageId",
    "Task",
    "TaskProgress",
    "TaskStatus",
]
