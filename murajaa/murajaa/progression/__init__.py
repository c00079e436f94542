"""
Progression module for Murajaa library.

Stage transitions, task lifecycle and a guard against double-applied
completions.
"""

from murajaa.progression.stages import (
    STAGE_LABELS,
    advance,
    is_bulk_stage,
    is_unit_stage,
    next_stage,
    stage_label,
    stage_line_range,
    stage_order,
    validate_position,
)
from murajaa.progression.tasks import (
    LEVEL_BATCH_SIZES,
    check_progress,
    compute_deadline,
    create_task,
    expire_if_overdue,
    is_complete,
    lines_per_batch,
    record_review,
    required_repetitions,
    task_line_range,
)
from murajaa.progression.guard import TaskAdvanceGuard

__all__ = [
    # Stages
    "STAGE_LABELS",
    "advance",
    "is_bulk_stage",
    "is_unit_stage",
    "next_stage",
    "stage_label",
    "stage_line_range",
    "stage_order",
    "validate_position",
    # Tasks
    "LEVEL_BATCH_SIZES",
    "check_progress",
    "compute_deadline",
    "create_task",
    "expire_if_overdue",
    "is_complete",
    "lines_per_batch",
    "record_review",
    "required_repetitions",
    "task_line_range",
    # Guard
    "TaskAdvanceGuard",
]
