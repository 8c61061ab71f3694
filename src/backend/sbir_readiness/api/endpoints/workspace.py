"""
Evaluator workspace endpoints.

Proposal setup, criterion ratings, milestones, the derived evaluation and
the readiness snapshot download.
"""

import json
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response, status

from sbir_readiness.core.logging import get_logger
from sbir_readiness.schemas.common import SuccessResponse
from sbir_readiness.schemas.evaluation import EvaluationResponse, WorkspaceResponse
from sbir_readiness.schemas.proposal import (
    MilestoneEntry,
    MilestoneUpdate,
    PhaseUpdate,
    ProposalMetadata,
    ProposalMetadataUpdate,
    RatingUpdate,
)
from sbir_readiness.services.workspace import Workspace, get_workspace

logger = get_logger(__name__)
router = APIRouter()

WS = Annotated[Workspace, Depends(get_workspace)]


@router.get("", response_model=WorkspaceResponse)
async def get_workspace_state(workspace: WS) -> WorkspaceResponse:
    """Current inputs together with the gate, score and milestone results."""
    return workspace.state()


@router.put("/phase", response_model=WorkspaceResponse)
async def set_phase(data: PhaseUpdate, workspace: WS) -> WorkspaceResponse:
    workspace.set_phase(data.phase)
    return workspace.state()


@router.patch("/metadata", response_model=ProposalMetadata)
async def update_metadata(data: ProposalMetadataUpdate, workspace: WS) -> ProposalMetadata:
    """Update only the provided proposal facts."""
    return workspace.update_metadata(data)


@router.put("/ratings/{criterion_id}", response_model=EvaluationResponse)
async def set_rating(criterion_id: str, data: RatingUpdate, workspace: WS) -> EvaluationResponse:
    workspace.set_rating(criterion_id, data.rating)
    return workspace.evaluate()


@router.post("/milestones", response_model=MilestoneEntry, status_code=status.HTTP_201_CREATED)
async def add_milestone(workspace: WS) -> MilestoneEntry:
    milestone = workspace.add_milestone()
    logger.info("Milestone added", milestone_id=milestone.id)
    return milestone


@router.patch("/milestones/{milestone_id}", response_model=MilestoneEntry)
async def update_milestone(milestone_id: str, data: MilestoneUpdate, workspace: WS) -> MilestoneEntry:
    return workspace.update_milestone(milestone_id, data)


@router.get("/evaluation", response_model=EvaluationResponse)
async def get_evaluation(workspace: WS) -> EvaluationResponse:
    return workspace.evaluate()


@router.get("/export")
async def export_snapshot(workspace: WS) -> Response:
    """Download the readiness snapshot as a JSON file."""
    filename = workspace.snapshot_filename()
    fallback = filename.encode("ascii", "ignore").decode().replace('"', "")
    snapshot = workspace.snapshot()

    logger.info("Readiness snapshot exported", filename=filename, disqualified=snapshot["disqualified"])

    return Response(
        content=json.dumps(snapshot, indent=2),
        media_type="application/json",
        headers={
            "Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}",
        },
    )


@router.post("/reset", response_model=SuccessResponse)
async def reset_workspace(workspace: WS) -> SuccessResponse:
    workspace.reset()
    logger.info("Workspace reset to defaults")
    return SuccessResponse(message="Workspace reset to built-in defaults")
