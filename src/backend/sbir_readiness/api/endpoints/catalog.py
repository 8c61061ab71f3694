"""
Technology-area catalog endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from sbir_readiness.schemas.common import ErrorResponse
from sbir_readiness.schemas.evaluation import TagRequest, TagResponse
from sbir_readiness.schemas.solicitation import TechnologyAreaCatalog
from sbir_readiness.services.evaluation import match_technology_areas
from sbir_readiness.services.workspace import Workspace, decode_document, get_workspace

router = APIRouter()

WS = Annotated[Workspace, Depends(get_workspace)]


@router.get("", response_model=TechnologyAreaCatalog)
async def get_catalog(workspace: WS) -> TechnologyAreaCatalog:
    return workspace.catalog


@router.put("", response_model=TechnologyAreaCatalog, responses={422: {"model": ErrorResponse}})
async def load_catalog(request: Request, workspace: WS) -> TechnologyAreaCatalog:
    """Replace the catalog; on a parse error the previous one stays active."""
    body = await request.body()
    return workspace.load_catalog(decode_document(body, "technology area catalog"))


@router.post("/tags", response_model=TagResponse)
async def tag_text(data: TagRequest, workspace: WS) -> TagResponse:
    """Suggest technology areas whose label or keywords appear in the text."""
    return TagResponse(
        catalog_version=workspace.catalog.version,
        areas=match_technology_areas(workspace.catalog, data.text),
    )
