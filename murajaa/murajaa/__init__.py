"""
مراجعة (Murajaa) - A Python library for checking Quran recitations and tracking memorisation progress.

Usage:
    from murajaa.core import verify
    from murajaa.progression import advance, create_task
    from murajaa.models import LearnerPosition, StageId

    # Check a recitation
    result = verify("بسم الله الرحمن الرحيم", ["بِسْمِ", "اللَّهِ", "الرَّحْمَٰنِ", "الرَّحِيمِ"])
    print(result.score, result.passed)

    # Track progress
    position = LearnerPosition(page=3, line=1, stage=StageId.LEARN_1)
    task = create_task(position, level=1, total_lines=15)
"""

from murajaa.models import (
    AdvanceResult,
    AlignmentResult,
    ErrorType,
    LearnerPosition,
    MatchStatus,
    StageCompletion,
    StageId,
    Task,
    TaskStatus,
    VerificationResult,
    WordError,
    WordMatch,
)
from murajaa.config import MurajaaSettings, get_settings, configure
from murajaa.exceptions import (
    MurajaaError,
    ConfigurationError,
    RefinementError,
    ProgressionError,
)

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "AdvanceResult",
    "AlignmentResult",
    "ErrorType",
    "LearnerPosition",
    "MatchStatus",
    "StageCompletion",
    "StageId",
    "Task",
    "TaskStatus",
    "VerificationResult",
    "WordError",
    "WordMatch",
    # Config
    "MurajaaSettings",
    "get_settings",
    "configure",
    # Exceptions
    "MurajaaError",
    "ConfigurationError",
    "RefinementError",
    "ProgressionError",
]
