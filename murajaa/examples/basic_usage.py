"""
Basic usage example for Murajaa library.

This example demonstrates the core workflow:
1. Verify a recitation transcript against the expected words
2. Record the review on the learner's task
3. Advance the learner once the task is complete
"""

import json

from murajaa.core import verify
from murajaa.data import get_lines_per_page, is_last_page
from murajaa.models import LearnerPosition, StageId
from murajaa.progression import advance, check_progress, create_task, record_review, stage_label


# Al-Fatiha 1:1-1:2, as printed in the Mushaf
EXPECTED_WORDS = [
    "بِسْمِ", "اللَّهِ", "الرَّحْمَٰنِ", "الرَّحِيمِ", "۝١",
    "الْحَمْدُ", "لِلَّهِ", "رَبِّ", "الْعَالَمِينَ", "۝٢",
]


def check_recitation(transcript: str, strictness: int = 1):
    """
    Verify one recitation and print the verdict.

    Args:
        transcript: Speech-to-text output
        strictness: Hafz level 1-3

    Returns:
        VerificationResult
    """
    print(f"Checking: {transcript}")
    print("=" * 50)

    result = verify(transcript, EXPECTED_WORDS, strictness=strictness)

    verdict = "✅ passed" if result.passed else "❌ failed"
    print(f"   Score: {result.score} ({verdict})")
    for error in result.errors:
        print(f"   - {error.type.value}: {error.word} (position {error.position})")

    return result


def simulate_task(page: int = 1, level: int = 1):
    """Walk the first task of a page to completion and advance the learner."""
    total_lines = get_lines_per_page(page)
    position = LearnerPosition(page=page, line=1, stage=StageId.LEARN_1)

    print(f"\n📖 {stage_label(position.stage)} - page {page}, {total_lines} lines")

    task = create_task(position, level=level, total_lines=total_lines, repetition_count=3)
    print(f"   Created {task}")

    for passed in (True, False, True, True):
        task = record_review(task, passed)
        progress = check_progress(task)
        print(f"   Review {'passed' if passed else 'failed'}: {progress.remaining_count} remaining")

    if task.is_complete:
        outcome = advance(position, task.completion, total_lines, is_last_page(page))
        print(f"   ➡️  Now at {outcome.position}")
        return outcome

    return None


# Example usage
if __name__ == "__main__":
    good = check_recitation("بسم الله الرحمن الرحيم الحمد لله رب العلمين")
    weak = check_recitation("بسم الله الرحيم الحمد لله", strictness=2)

    simulate_task()

    print("\n📄 JSON output:")
    print(json.dumps(weak.model_dump(mode="json"), ensure_ascii=False, indent=2))

    print("\n🎉 Done!")
