"""
Project endpoints: intake, dashboard listing and the draft editor.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sbir_readiness.api.endpoints.scoring import Scorer, score_or_error
from sbir_readiness.core.logging import get_logger
from sbir_readiness.schemas.project import (
    DraftUpdate,
    ProjectIntake,
    ProjectListItem,
    ProjectResponse,
)
from sbir_readiness.schemas.scoring import ScoreFailure, ScoreResponse
from sbir_readiness.services.projects import ProjectStore, get_project_store

logger = get_logger(__name__)
router = APIRouter()

Store = Annotated[ProjectStore, Depends(get_project_store)]


@router.get("", response_model=list[ProjectListItem])
async def list_projects(store: Store) -> list[ProjectListItem]:
    """Dashboard listing, newest first."""
    return [ProjectListItem.model_validate(p) for p in store.list_projects()]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(data: ProjectIntake, store: Store) -> ProjectResponse:
    """Create a project from the intake form."""
    return ProjectResponse.model_validate(store.create(data))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: UUID, store: Store) -> ProjectResponse:
    return ProjectResponse.model_validate(store.get(project_id))


@router.put("/{project_id}/draft", response_model=ProjectResponse)
async def update_draft(project_id: UUID, data: DraftUpdate, store: Store) -> ProjectResponse:
    return ProjectResponse.model_validate(store.update_draft(project_id, data.text))


@router.post(
    "/{project_id}/score",
    response_model=ScoreResponse,
    responses={409: {"model": ScoreFailure}, 500: {"model": ScoreFailure}},
)
async def score_project(project_id: UUID, store: Store, scorer: Scorer) -> JSONResponse:
    """
    Score the project's stored draft against the generic rubric.

    The returned items are also kept on the project. Items that do not
    match the scored-item shape are a failure and nothing is recorded.
    """
    project = store.get(project_id)
    result, error = await score_or_error(scorer, project.draft)
    if error is not None:
        return error
    try:
        scored = ScoreResponse.model_validate({"items": result.get("items") or []})
    except ValidationError as e:
        logger.error("Malformed scoring items", project_id=str(project_id), errors=e.error_count())
        return JSONResponse(status_code=500, content={"error": "Malformed scoring response", "items": []})
    store.record_scores(project_id, [item.model_dump() for item in scored.items])
    return JSONResponse(content=result)
