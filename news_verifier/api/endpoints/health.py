"""Health check endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...domain.services.analysis_service import AnalysisService
from ...infrastructure.dependencies import get_analysis_service

router = APIRouter(tags=["health"])

API_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    analysis_delay: float
    active_sessions: int
    pending_analyses: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> HealthResponse:
    """Check service health.

    Returns:
        Service status and analyzer statistics
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        analysis_delay=analysis_service.delay_seconds,
        active_sessions=analysis_service.active_session_count,
        pending_analyses=analysis_service.pending_analysis_count,
    )
