"""
Pydantic schemas for configuration documents and API request/response validation.
"""

from sbir_readiness.schemas.common import (
    BaseSchema,
    DocumentSchema,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    SuccessResponse,
)
from sbir_readiness.schemas.evaluation import (
    CategoryScore,
    EvaluationResponse,
    GateEvaluation,
    MilestoneAssessment,
    ScoreBreakdown,
    TagRequest,
    TagResponse,
    WorkspaceResponse,
)
from sbir_readiness.schemas.project import (
    DraftUpdate,
    ProjectIntake,
    ProjectListItem,
    ProjectResponse,
)
from sbir_readiness.schemas.proposal import (
    MilestoneEntry,
    MilestoneUpdate,
    PhaseUpdate,
    ProposalMetadata,
    ProposalMetadataUpdate,
    Rating,
    RatingUpdate,
)
from sbir_readiness.schemas.scoring import (
    RubricItem,
    ScoredItem,
    ScoreFailure,
    ScoreRequest,
    ScoreResponse,
)
from sbir_readiness.schemas.solicitation import (
    Category,
    CriterionLimit,
    GateRule,
    MandatoryCriterion,
    RubricCriterion,
    SolicitationConfig,
    SolicitationMeta,
    TechnologyArea,
    TechnologyAreaCatalog,
)

__all__ = [
    # Common
    "BaseSchema",
    "DocumentSchema",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "SuccessResponse",
    # Solicitation
    "Category",
    "CriterionLimit",
    "GateRule",
    "MandatoryCriterion",
    "RubricCriterion",
    "SolicitationConfig",
    "SolicitationMeta",
    "TechnologyArea",
    "TechnologyAreaCatalog",
    # Proposal
    "MilestoneEntry",
    "MilestoneUpdate",
    "PhaseUpdate",
    "ProposalMetadata",
    "ProposalMetadataUpdate",
    "Rating",
    "RatingUpdate",
    # Evaluation
    "CategoryScore",
    "EvaluationResponse",
    "GateEvaluation",
    "MilestoneAssessment",
    "ScoreBreakdown",
    "TagRequest",
    "TagResponse",
    "WorkspaceResponse",
    # Projects
    "DraftUpdate",
    "ProjectIntake",
    "ProjectListItem",
    "ProjectResponse",
    # Scoring
    "RubricItem",
    "ScoredItem",
    "ScoreFailure",
    "ScoreRequest",
    "ScoreResponse",
]
