"""
Semantic refinement outcome models.

A refinement call either succeeds with a replacement score and error list,
or reports why it could not: the remote analyzer was unavailable, or it
answered with something that is not a usable result. Callers branch on
``kind`` (or ``is_ok``) so the fallback path cannot be forgotten.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from murajaa.models.verification import ErrorType


class RefinedError(BaseModel):
    """An error as reported by the analyzer (position is optional there)."""

    word: str
    position: Optional[int] = Field(default=None, ge=0)
    type: ErrorType
    issue: Optional[str] = None


class RefinementUsage(BaseModel):
    """Token usage and estimated cost of one refinement request."""

    model: str
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    cost_usd: float = Field(default=0.0, ge=0.0)


class RefinementOk(BaseModel):
    """The analyzer returned a structurally valid result."""

    kind: Literal["ok"] = "ok"
    score: int = Field(..., ge=0, le=100)
    errors: list[RefinedError] = Field(default_factory=list)
    analysis: Optional[str] = None
    usage: Optional[RefinementUsage] = None

    @property
    def is_ok(self) -> bool:
        return True


class RefinementUnavailable(BaseModel):
    """The analyzer could not be reached or is not configured."""

    kind: Literal["unavailable"] = "unavailable"
    reason: str

    @property
    def is_ok(self) -> bool:
        return False


class RefinementMalformed(BaseModel):
    """The analyzer answered, but not with a usable result."""

    kind: Literal["malformed"] = "malformed"
    reason: str
    raw: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return False


RefinementOutcome = Annotated[
    Union[RefinementOk, RefinementUnavailable, RefinementMalformed],
    Field(discriminator="kind"),
]
