"""
Main API router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from sbir_readiness.api.endpoints import catalog, projects, scoring, solicitation, workspace
from sbir_readiness.schemas.common import ErrorResponse

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    solicitation.router,
    prefix="/solicitation",
    tags=["Solicitation"],
)

api_router.include_router(
    catalog.router,
    prefix="/catalog",
    tags=["Technology Areas"],
)

api_router.include_router(
    workspace.router,
    prefix="/workspace",
    tags=["Evaluator Workspace"],
    responses={404: {"model": ErrorResponse}},
)

api_router.include_router(
    projects.router,
    prefix="/projects",
    tags=["Projects"],
    responses={404: {"model": ErrorResponse}},
)

api_router.include_router(
    scoring.router,
    tags=["Scoring"],
)
