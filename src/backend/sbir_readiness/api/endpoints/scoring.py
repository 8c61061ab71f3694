"""
Section scoring endpoint.

Forwards section text to the external scoring model. Failures are
reported as {"error": ..., "items": []} instead of the usual error body.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sbir_readiness.core.exceptions import AIServiceException, ScoringInProgressException
from sbir_readiness.schemas.scoring import ScoreFailure, ScoreRequest, ScoreResponse
from sbir_readiness.services.scoring import ScoringService, get_scoring_service

router = APIRouter()

Scorer = Annotated[ScoringService, Depends(get_scoring_service)]


async def score_or_error(scorer: ScoringService, text: str) -> tuple[dict[str, Any] | None, JSONResponse | None]:
    """Run a scoring call, returning either its result or the error response to send."""
    try:
        return await scorer.score_section(text), None
    except ScoringInProgressException as e:
        return None, JSONResponse(status_code=e.status_code, content={"error": e.message, "items": []})
    except AIServiceException as e:
        return None, JSONResponse(status_code=500, content={"error": e.reason, "items": []})


@router.post(
    "/score-demo",
    response_model=ScoreResponse,
    responses={409: {"model": ScoreFailure}, 500: {"model": ScoreFailure}},
)
async def score_demo(data: ScoreRequest, scorer: Scorer) -> JSONResponse:
    """Score a proposal section against the generic rubric."""
    result, error = await score_or_error(scorer, data.text)
    if error is not None:
        return error
    return JSONResponse(content=result)
