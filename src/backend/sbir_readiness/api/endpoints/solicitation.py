"""
Solicitation rulepack endpoints.

A new release of the solicitation instructions is loaded by sending the
rulepack JSON; the whole document replaces the active one.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from sbir_readiness.core.logging import get_logger
from sbir_readiness.schemas.common import ErrorResponse
from sbir_readiness.schemas.solicitation import SolicitationConfig
from sbir_readiness.services.workspace import Workspace, decode_document, get_workspace

logger = get_logger(__name__)
router = APIRouter()

WS = Annotated[Workspace, Depends(get_workspace)]


@router.get("", response_model=SolicitationConfig)
async def get_solicitation(workspace: WS) -> SolicitationConfig:
    """Get the active solicitation rulepack."""
    return workspace.config


@router.put("", response_model=SolicitationConfig, responses={422: {"model": ErrorResponse}})
async def load_solicitation(request: Request, workspace: WS) -> SolicitationConfig:
    """
    Replace the active rulepack with the JSON document in the request body.

    Malformed or invalid documents are rejected with 422 and the previous
    rulepack stays active.
    """
    body = await request.body()
    logger.debug("Rulepack upload received", size=len(body))
    return workspace.load_config(decode_document(body, "solicitation"))
