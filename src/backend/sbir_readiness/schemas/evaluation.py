"""
Schemas for derived evaluation results.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from sbir_readiness.schemas.proposal import MilestoneEntry, ProposalMetadata, Rating
from sbir_readiness.schemas.solicitation import SolicitationMeta

MilestoneFlag = Literal["Strong", "Needs Work"]


class GateEvaluation(BaseModel):
    """Mandatory gate outcome."""

    results: dict[str, bool] = Field(description="Mandatory criterion id -> satisfied")
    advisory: dict[str, bool] = Field(
        default_factory=dict,
        description="Additional (soft) criterion id -> satisfied; never disqualifies",
    )
    disqualified: bool
    passing: int
    total: int


class CategoryScore(BaseModel):
    id: str
    label: str
    weight: float
    subtotal: float = Field(description="Clamped 0-1 weighted rating sum of the category")
    contribution: float = Field(description="subtotal x category weight")


class ScoreBreakdown(BaseModel):
    overall: float = Field(description="Weighted overall score, one decimal")
    categories: list[CategoryScore]


class MilestoneAssessment(BaseModel):
    id: str
    title: str
    flag: MilestoneFlag
    timeline_issues: list[str] = Field(default_factory=list)


class EvaluationResponse(BaseModel):
    gate: GateEvaluation
    score: ScoreBreakdown
    milestones: list[MilestoneAssessment]


class WorkspaceResponse(BaseModel):
    """Full state of the evaluator workspace plus its derived values."""

    config_meta: SolicitationMeta
    catalog_version: str
    phase: str
    metadata: ProposalMetadata
    ratings: dict[str, Rating]
    milestones: list[MilestoneEntry]
    evaluation: EvaluationResponse


class TagRequest(BaseModel):
    text: str = ""


class TagResponse(BaseModel):
    catalog_version: str
    areas: list[dict[str, Any]]
