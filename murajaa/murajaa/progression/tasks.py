"""
Task lifecycle.

A task is created when a learner enters a stage (or, in a unit stage, a
line batch). Each reviewed recitation is recorded as passed or failed; a
pass recorded while failures are outstanding is a resubmission and replaces
one failure. The task is complete when all required repetitions passed and
no failure is outstanding.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from murajaa._logging import log_warning
from murajaa.config import MurajaaSettings, get_settings
from murajaa.exceptions import ConfigurationError
from murajaa.models import LearnerPosition, StageHours, StageId, Task, TaskProgress, TaskStatus
from murajaa.progression.stages import is_unit_stage, stage_line_range, validate_position


# Group level -> lines per batch in unit stages
LEVEL_BATCH_SIZES: dict[int, int] = {
    1: 1,
    2: 3,
    3: 7,
}


def lines_per_batch(level: int = 1) -> int:
    """
    Lines learned together per task in unit stages.

    Raises:
        ConfigurationError: If level is not 1, 2 or 3
    """
    try:
        return LEVEL_BATCH_SIZES[level]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Group level must be 1, 2 or 3, got {level!r}",
            setting_name="level",
        ) from None


def task_line_range(stage: StageId, current_line: int, level: int, total_lines: int) -> tuple[int, int]:
    """
    Inclusive line range of the task for a position.

    Unit stages cover a batch starting at the current line, capped at the
    stage's last line; bulk stages cover their whole range.
    """
    if not is_unit_stage(stage):
        return stage_line_range(stage, total_lines)

    _, stage_end = stage_line_range(stage, total_lines)
    return current_line, min(current_line + lines_per_batch(level) - 1, stage_end)


def required_repetitions(
    stage: StageId,
    repetition_count: int,
    unit_repetition_count: Optional[int] = None,
) -> int:
    """
    Repetitions required for a task in ``stage``.

    Bulk stages always use the lesson's repetition count, regardless of how
    many lines they cover. Unit stages use ``unit_repetition_count`` when it
    is set.
    """
    if is_unit_stage(stage) and unit_repetition_count is not None:
        return unit_repetition_count
    return repetition_count


def compute_deadline(stage: StageId, hours: StageHours, now: datetime) -> datetime:
    """Deadline of a task created at ``now``."""
    return now + timedelta(hours=hours.for_stage(stage))


def create_task(
    position: LearnerPosition,
    level: int,
    total_lines: int,
    hours: Optional[StageHours] = None,
    repetition_count: Optional[int] = None,
    now: Optional[datetime] = None,
    unit_repetition_count: Optional[int] = None,
    settings: Optional[MurajaaSettings] = None,
) -> Task:
    """
    Create the task for a learner position.

    Args:
        position: Learner position the task is for
        level: Group level 1-3 (lines per batch in unit stages)
        total_lines: Number of lines on the page
        hours: Deadline windows (settings when omitted)
        repetition_count: Lesson repetition count (settings when omitted)
        now: Creation time (current UTC time when omitted)
        unit_repetition_count: Override for unit stages (settings when omitted)
        settings: Settings to read defaults from

    Raises:
        ConfigurationError: If level is invalid
        ProgressionError: If the position is not valid for the page
    """
    validate_position(position, total_lines)

    if hours is None or repetition_count is None or unit_repetition_count is None:
        settings = settings or get_settings()
        if hours is None:
            hours = settings.stage_hours()
        if repetition_count is None:
            repetition_count = settings.repetition_count
        if unit_repetition_count is None:
            unit_repetition_count = settings.unit_repetition_count

    now = now or datetime.now(timezone.utc)
    start_line, end_line = task_line_range(position.stage, position.line, level, total_lines)

    return Task(
        stage=position.stage,
        page=position.page,
        start_line=start_line,
        end_line=end_line,
        required_count=required_repetitions(position.stage, repetition_count, unit_repetition_count),
        deadline=compute_deadline(position.stage, hours, now),
    )


def is_complete(task: Task) -> bool:
    """All repetitions passed with no failure outstanding."""
    return task.is_complete


def record_review(task: Task, passed: bool) -> Task:
    """
    Record one reviewed recitation.

    Returns a new task; the input is not modified. A pass while failures are
    outstanding is a resubmission: one failure is cleared and the pass is
    counted. A task that is already complete is returned unchanged.

    Example:
        >>> task = Task(stage=StageId.JOIN_1, page=3, start_line=1, end_line=7,
        ...             required_count=80, passed_count=79, failed_count=1)
        >>> record_review(task, passed=True).is_complete
        True
    """
    if task.is_complete:
        log_warning("Review recorded for a completed task", task=str(task))
        return task

    if passed and task.failed_count > 0:
        passed_count = task.passed_count + 1
        failed_count = task.failed_count - 1
    elif passed:
        passed_count = task.passed_count + 1
        failed_count = task.failed_count
    else:
        passed_count = task.passed_count
        failed_count = task.failed_count + 1

    complete = passed_count >= task.required_count and failed_count == 0
    status = TaskStatus.PASSED if complete else TaskStatus.IN_PROGRESS

    return task.model_copy(
        update={
            "passed_count": passed_count,
            "failed_count": failed_count,
            "status": status,
        }
    )


def check_progress(task: Task) -> TaskProgress:
    """
    Whether a task may progress and how many repetitions remain.

    Until enough recitations were submitted the remainder is the number still
    to submit; after that it is the number of failures to redo.
    """
    submitted = task.passed_count + task.failed_count

    if submitted < task.required_count:
        return TaskProgress(should_progress=False, remaining_count=task.required_count - submitted)

    if task.is_complete:
        return TaskProgress(should_progress=True, remaining_count=0)

    return TaskProgress(should_progress=False, remaining_count=task.failed_count)


def expire_if_overdue(task: Task, now: datetime) -> Task:
    """Mark an overdue incomplete task as failed; other tasks are returned unchanged."""
    if task.status == TaskStatus.IN_PROGRESS and task.is_overdue(now):
        return task.model_copy(update={"status": TaskStatus.FAILED})
    return task
