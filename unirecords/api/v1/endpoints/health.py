"""Health check endpoints for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from unirecords.api.v1.dependencies import get_index_manager
from unirecords.application.search.index_manager import IndexManager
from unirecords.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Some search index is not built", "model": ReadinessErrorResponse}},
)
def readiness_check(
    index_manager: Annotated[IndexManager, Depends(get_index_manager)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 once every entity type's index has been built at least once; 503 otherwise."""
    if index_manager.is_ready:
        return ReadinessResponse()
    missing = [s.entity_type.value for s in index_manager.status() if not s.built]
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message=f"Search indexes not built: {', '.join(missing)}",
        ).model_dump(),
    )
