"""
Stage progression engine.

A page is memorised in up to five stages. Lines 1-7 are learned one batch
at a time (LEARN_1) and then joined (JOIN_1); lines 8 to the end of the page
are learned (LEARN_2) and joined (JOIN_2); finally the whole page is recited
(FULL_PAGE). Pages of seven lines or fewer go from LEARN_1 straight to
FULL_PAGE.
"""

from typing import Optional

from murajaa._logging import log_stage_advanced, log_stale_completion
from murajaa.data.pages import is_simple_page
from murajaa.exceptions import ProgressionError
from murajaa.models import AdvanceResult, LearnerPosition, StageCompletion, StageId


# Last line of the first half of a page
FIRST_HALF_END = 7

STANDARD_STAGE_ORDER: tuple[StageId, ...] = (
    StageId.LEARN_1,
    StageId.JOIN_1,
    StageId.LEARN_2,
    StageId.JOIN_2,
    StageId.FULL_PAGE,
)

SIMPLE_STAGE_ORDER: tuple[StageId, ...] = (
    StageId.LEARN_1,
    StageId.FULL_PAGE,
)

STAGE_LABELS: dict[StageId, str] = {
    StageId.LEARN_1: "Stage 1.1 - Learning lines 1-7",
    StageId.JOIN_1: "Stage 1.2 - Joining lines 1-7",
    StageId.LEARN_2: "Stage 2.1 - Learning lines 8-15",
    StageId.JOIN_2: "Stage 2.2 - Joining lines 8-15",
    StageId.FULL_PAGE: "Stage 3 - Full page",
}


def stage_label(stage: StageId) -> str:
    """Human-readable stage name."""
    return STAGE_LABELS.get(stage, stage.value)


def is_unit_stage(stage: StageId) -> bool:
    """Whether the stage is learned one line batch at a time."""
    return stage in (StageId.LEARN_1, StageId.LEARN_2)


def is_bulk_stage(stage: StageId) -> bool:
    """Whether the stage repeats a fixed line range as a whole."""
    return not is_unit_stage(stage)


def stage_order(total_lines: int) -> tuple[StageId, ...]:
    """Stages a page of ``total_lines`` lines goes through, in order."""
    return SIMPLE_STAGE_ORDER if is_simple_page(total_lines) else STANDARD_STAGE_ORDER


def next_stage(stage: StageId, total_lines: int) -> Optional[StageId]:
    """Stage following ``stage`` on the same page, or None after the last one."""
    order = stage_order(total_lines)
    if stage not in order:
        return None
    index = order.index(stage)
    return order[index + 1] if index + 1 < len(order) else None


def stage_line_range(stage: StageId, total_lines: int) -> tuple[int, int]:
    """
    Inclusive (start_line, end_line) covered by a stage.

    Examples:
        >>> stage_line_range(StageId.LEARN_2, 15)
        (8, 15)
        >>> stage_line_range(StageId.LEARN_1, 6)
        (1, 6)
    """
    if is_simple_page(total_lines) or stage == StageId.FULL_PAGE:
        return 1, total_lines
    if stage in (StageId.LEARN_1, StageId.JOIN_1):
        return 1, FIRST_HALF_END
    return FIRST_HALF_END + 1, total_lines


def validate_position(position: LearnerPosition, total_lines: int) -> None:
    """
    Check that a position exists on a page of ``total_lines`` lines.

    Raises:
        ProgressionError: If the stage does not occur on the page or the line
            is outside the stage's line range
    """
    if total_lines < 1:
        raise ProgressionError(
            f"Page must have at least one line, got {total_lines}",
            page=position.page,
        )

    if position.stage not in stage_order(total_lines):
        raise ProgressionError(
            f"Stage {position.stage.value} does not occur on a page of {total_lines} lines",
            page=position.page,
            line=position.line,
        )

    start, end = stage_line_range(position.stage, total_lines)
    if not start <= position.line <= end:
        raise ProgressionError(
            f"Line {position.line} is outside {position.stage.value} range {start}-{end}",
            page=position.page,
            line=position.line,
        )


def _rejected(position: LearnerPosition, reason: str, completion: StageCompletion) -> AdvanceResult:
    log_stale_completion(
        reason,
        position=str(position),
        stage=completion.stage.value,
        line=completion.line,
    )
    return AdvanceResult(position=position, advanced=False, reason=reason)


def advance(
    position: LearnerPosition,
    completion: StageCompletion,
    total_lines: int,
    is_last_page: bool = False,
) -> AdvanceResult:
    """
    Apply a task completion to a learner position.

    The completion must name exactly the current stage and line (and page,
    when it carries one); anything else is a stale or duplicate signal and
    is rejected without changing the position. Unit stages move forward one
    line per completed task; bulk stages move to the next stage.

    Args:
        position: Current learner position
        completion: Stage and start line of the completed task
        total_lines: Number of lines on the current page
        is_last_page: Whether the current page is the last one

    Returns:
        AdvanceResult with the new position. Completing FULL_PAGE on the last
        page leaves the position unchanged with ``finished=True``.

    Raises:
        ProgressionError: If the current position is not valid for the page

    Example:
        >>> pos = LearnerPosition(page=3, line=7, stage=StageId.LEARN_1)
        >>> advance(pos, StageCompletion(stage=StageId.LEARN_1, line=7), 15).position.stage
        <StageId.JOIN_1: 'join_1'>
    """
    validate_position(position, total_lines)

    if completion.page is not None and completion.page != position.page:
        return _rejected(position, f"completion is for page {completion.page}", completion)
    if completion.stage != position.stage:
        return _rejected(position, f"completion is for stage {completion.stage.value}", completion)
    if completion.line != position.line:
        return _rejected(position, f"completion is for line {completion.line}", completion)

    stage, line, page = position.stage, position.line, position.page
    _, stage_end = stage_line_range(stage, total_lines)

    if is_unit_stage(stage) and line < stage_end:
        new_position = LearnerPosition(page=page, line=line + 1, stage=stage)
    else:
        following = next_stage(stage, total_lines)
        if following is not None:
            start, _ = stage_line_range(following, total_lines)
            new_position = LearnerPosition(page=page, line=start, stage=following)
        elif is_last_page:
            return AdvanceResult(position=position, advanced=False, finished=True)
        else:
            new_position = LearnerPosition(page=page + 1, line=1, stage=StageId.LEARN_1)

    log_stage_advanced(
        page,
        stage.value,
        new_position.page,
        new_position.stage.value,
        new_position.line,
    )
    return AdvanceResult(position=new_position, advanced=True)
