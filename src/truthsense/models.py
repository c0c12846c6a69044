from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

HeadlineLabel = Literal["fake", "trustworthy"]
DecisionBranch = Literal["empty", "override", "fake", "trustworthy", "borderline"]


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: HeadlineLabel
    confidence: int = Field(..., ge=0, le=100)
    explanation: str = Field(..., min_length=1)


class HeadlineAnalysis(BaseModel):
    """Classification plus the score breakdown that produced it."""

    model_config = ConfigDict(frozen=True)

    result: ClassificationResult
    branch: DecisionBranch
    fake_score: float = 0.0
    trust_score: float = 0.0
    total_score: float = 0.0
    signals: tuple[str, ...] = ()
