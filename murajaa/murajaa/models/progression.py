"""
Stage progression data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator


class StageId(str, Enum):
    """
    The five memorisation stages of a page.

    LEARN_1 and LEARN_2 are unit stages (lines learned one batch at a time);
    JOIN_1, JOIN_2 and FULL_PAGE are bulk stages (a fixed line range
    repeated a fixed number of times).
    """

    LEARN_1 = "learn_1"
    JOIN_1 = "join_1"
    LEARN_2 = "learn_2"
    JOIN_2 = "join_2"
    FULL_PAGE = "full_page"


class TaskStatus(str, Enum):
    """Status of a memorisation task."""

    IN_PROGRESS = "in_progress"
    PASSED = "passed"
    FAILED = "failed"


class LearnerPosition(BaseModel):
    """Where a learner currently is: page, line and stage."""

    page: int = Field(..., ge=1, description="Mushaf page number")
    line: int = Field(..., ge=1, description="Line on the page")
    stage: StageId = Field(..., description="Current stage")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"page {self.page} line {self.line} ({self.stage.value})"


class StageCompletion(BaseModel):
    """
    Completion signal for a finished task.

    Carries the stage and start line the task was created for, and the page
    when known; a signal naming another page is treated as stale.
    """

    stage: StageId
    line: int = Field(..., ge=1)
    page: Optional[int] = Field(default=None, ge=1)

    model_config = {"frozen": True}


class AdvanceResult(BaseModel):
    """
    Outcome of a stage-advance call.

    Attributes:
        position: The new position (unchanged when not advanced)
        advanced: Whether a transition was applied
        finished: Whether the learner completed the last page
        reason: Why the signal was not applied, if it was not
    """

    position: LearnerPosition
    advanced: bool
    finished: bool = False
    reason: Optional[str] = None


class StageHours(BaseModel):
    """Deadline windows (hours) per stage group."""

    stage1: float = Field(default=24.0, gt=0, description="LEARN_1")
    stage2: float = Field(default=48.0, gt=0, description="JOIN_1, LEARN_2, JOIN_2")
    stage3: float = Field(default=48.0, gt=0, description="FULL_PAGE")

    def for_stage(self, stage: StageId) -> float:
        if stage == StageId.LEARN_1:
            return self.stage1
        if stage == StageId.FULL_PAGE:
            return self.stage3
        return self.stage2


class Task(BaseModel):
    """
    A repetition task created when a learner enters a stage (or a line batch).

    The task is complete only when every required repetition passed and no
    failed repetition is outstanding.
    """

    stage: StageId
    page: int = Field(..., ge=1)
    start_line: int = Field(..., ge=1)
    end_line: int = Field(..., ge=1)
    required_count: int = Field(..., ge=1)
    passed_count: int = Field(default=0, ge=0)
    failed_count: int = Field(default=0, ge=0)
    status: TaskStatus = TaskStatus.IN_PROGRESS
    deadline: Optional[datetime] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_line_range(self) -> "Task":
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not precede start_line ({self.start_line})"
            )
        return self

    @computed_field
    @property
    def is_complete(self) -> bool:
        """All repetitions passed with no failure outstanding."""
        return self.passed_count >= self.required_count and self.failed_count == 0

    @property
    def completion(self) -> StageCompletion:
        """The completion signal this task produces."""
        return StageCompletion(stage=self.stage, line=self.start_line, page=self.page)

    def is_overdue(self, now: datetime) -> bool:
        """Whether the deadline has passed without completion."""
        return self.deadline is not None and not self.is_complete and now > self.deadline

    def __str__(self) -> str:
        lines = (
            f"line {self.start_line}"
            if self.start_line == self.end_line
            else f"lines {self.start_line}-{self.end_line}"
        )
        return (
            f"Task(page {self.page} {lines}, {self.stage.value}, "
            f"{self.passed_count}/{self.required_count}, failed={self.failed_count})"
        )


class TaskProgress(BaseModel):
    """Whether a task may progress, and how many repetitions remain."""

    should_progress: bool
    remaining_count: int = Field(..., ge=0)
