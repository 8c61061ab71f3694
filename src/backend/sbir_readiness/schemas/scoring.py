"""
Schemas for the external section scoring pass-through.
"""

from pydantic import BaseModel, Field


class RubricItem(BaseModel):
    """One criterion of the generic rubric sent to the scorer."""

    key: str
    weight: float
    guidance: str | None = None


class ScoreRequest(BaseModel):
    text: str = Field(default="", description="Raw proposal section text")


class ScoredItem(BaseModel):
    """Shape the scorer is instructed to return for each criterion."""

    criterion_key: str
    score: float
    rationale: str


class ScoreResponse(BaseModel):
    items: list[ScoredItem]


class ScoreFailure(BaseModel):
    error: str
    items: list[ScoredItem] = Field(default_factory=list)
