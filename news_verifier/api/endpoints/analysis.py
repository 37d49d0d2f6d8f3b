"""Article analysis API endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from ...domain.models.analysis_session import AnalysisSession
from ...domain.services.analysis_service import AnalysisService
from ...infrastructure.dependencies import get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


class ArticleRequest(BaseModel):
    """Request carrying article text."""

    text: str = Field(..., description="Article content to analyze")


class AnalysisSessionResponse(BaseModel):
    """Response for analyzer session operations."""

    session_id: str
    article_text: str
    status: str
    generation: int
    created_at: str
    updated_at: str
    result: Optional[Dict[str, Any]] = None


def _session_response(session: AnalysisSession) -> AnalysisSessionResponse:
    return AnalysisSessionResponse(**session.to_dict())


def _session_not_found(error: KeyError) -> HTTPException:
    logger.warning(f"⚠️ {error.args[0]}")
    return HTTPException(status_code=404, detail=error.args[0])


@router.post("/analyze", response_model=None)
async def analyze_article(
    request: ArticleRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> Dict[str, Any] | Response:
    """Analyze an article in one call.

    Args:
        request: Article to analyze

    Returns:
        Analysis result, or 204 No Content for blank text
    """
    logger.info(f"Starting analysis for text: {request.text[:100]}...")

    try:
        result = await analysis_service.analyze(request.text)
    except Exception as e:
        logger.error(f"Error in analysis: {type(e).__name__}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"{type(e).__name__}: {str(e)}")

    if result is None:
        return Response(status_code=204)
    return result.to_dict()


@router.post("/analyzer/sessions", response_model=AnalysisSessionResponse, status_code=201)
async def create_session(
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> AnalysisSessionResponse:
    """Open a new analyzer session with empty input."""
    return _session_response(analysis_service.create_session())


@router.get("/analyzer/sessions/{session_id}", response_model=AnalysisSessionResponse)
async def get_session(
    session_id: str,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> AnalysisSessionResponse:
    """Get a session with its latest result."""
    try:
        return _session_response(analysis_service.get_session(session_id))
    except KeyError as e:
        raise _session_not_found(e)


@router.put("/analyzer/sessions/{session_id}/input", response_model=AnalysisSessionResponse)
async def update_input(
    session_id: str,
    request: ArticleRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> AnalysisSessionResponse:
    """Replace the session's article text.

    Any previous result is dropped and an in-flight analysis is cancelled.
    """
    try:
        session = await analysis_service.update_input(session_id, request.text)
    except KeyError as e:
        raise _session_not_found(e)
    return _session_response(session)


@router.post("/analyzer/sessions/{session_id}/analyze", response_model=AnalysisSessionResponse)
async def start_analysis(
    session_id: str,
    wait: bool = False,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> AnalysisSessionResponse:
    """Analyze the session's current input.

    Args:
        session_id: ID of the session
        wait: Block until the result is available instead of returning immediately

    Returns:
        The session; blank input leaves it unchanged
    """
    try:
        session = await analysis_service.start_analysis(session_id)
        if wait:
            await analysis_service.wait_for_result(session_id)
    except KeyError as e:
        raise _session_not_found(e)
    except Exception as e:
        logger.error(f"Error in session analysis: {type(e).__name__}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"{type(e).__name__}: {str(e)}")

    return _session_response(session)


@router.delete("/analyzer/sessions/{session_id}/analysis", response_model=AnalysisSessionResponse)
async def cancel_analysis(
    session_id: str,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> AnalysisSessionResponse:
    """Cancel the session's in-flight analysis."""
    try:
        session = await analysis_service.cancel_analysis(session_id)
    except KeyError as e:
        raise _session_not_found(e)
    return _session_response(session)


@router.delete("/analyzer/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    analysis_service: AnalysisService = Depends(get_analysis_service)
) -> Response:
    """Close a session."""
    try:
        await analysis_service.close_session(session_id)
    except KeyError as e:
        raise _session_not_found(e)
    return Response(status_code=204)
