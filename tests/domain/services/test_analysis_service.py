"""Tests for the analysis service."""

import asyncio
from unittest.mock import MagicMock

import pytest

from news_verifier.domain.models.analysis_result import CredibilityLevel
from news_verifier.domain.models.analysis_session import SessionStatus
from news_verifier.domain.services.analysis_service import AnalysisService
from news_verifier.domain.services.claim_scorer import ClaimScorer

ECONOMY_ARTICLE = "The economy has experienced unprecedented growth this quarter."
VACCINE_ARTICLE = "New COVID-19 vaccines have been proven to be 100% effective against all variants."


@pytest.mark.parametrize("delay", [-1, float("nan"), float("inf")])
def test_invalid_delay_rejected(claim_scorer: ClaimScorer, delay: float):
    """Test that negative or non-finite delays are refused."""
    with pytest.raises(ValueError):
        AnalysisService(claim_scorer, delay_seconds=delay)


@pytest.mark.asyncio
async def test_analyze(analysis_service: AnalysisService):
    """Test one-shot analysis."""
    result = await analysis_service.analyze(ECONOMY_ARTICLE)

    assert result.overall_score == 43
    assert result.credibility_level == CredibilityLevel.LOW


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_analyze_blank_text(slow_analysis_service: AnalysisService, text: str):
    """Test that blank text returns immediately with no result."""
    result = await asyncio.wait_for(slow_analysis_service.analyze(text), timeout=1)

    assert result is None


@pytest.mark.asyncio
async def test_analyze_waits_for_delay(claim_scorer: ClaimScorer):
    """Test that the result is only produced after the simulated delay."""
    service = AnalysisService(claim_scorer, delay_seconds=0.05)
    loop = asyncio.get_running_loop()

    started = loop.time()
    result = await service.analyze(ECONOMY_ARTICLE)

    assert result is not None
    assert loop.time() - started >= 0.04


@pytest.mark.asyncio
async def test_session_analysis(analysis_service: AnalysisService):
    """Test the input, analyze, result cycle of a session."""
    session = analysis_service.create_session()
    assert session.status == SessionStatus.IDLE

    await analysis_service.update_input(session.session_id, VACCINE_ARTICLE)
    await analysis_service.start_analysis(session.session_id)
    assert session.status == SessionStatus.ANALYZING

    result = await analysis_service.wait_for_result(session.session_id)

    assert session.status == SessionStatus.COMPLETED
    assert session.result is result
    assert [claim.id for claim in result.claims] == ["4"]
    assert result.overall_score == 41


@pytest.mark.asyncio
async def test_start_analysis_blank_input(slow_analysis_service: AnalysisService):
    """Test that analyzing blank input is a no-op."""
    session = slow_analysis_service.create_session()
    await slow_analysis_service.update_input(session.session_id, "   ")
    generation = session.generation

    await slow_analysis_service.start_analysis(session.session_id)

    assert session.status == SessionStatus.IDLE
    assert session.generation == generation
    assert slow_analysis_service.pending_analysis_count == 0
    assert await slow_analysis_service.wait_for_result(session.session_id) is None


@pytest.mark.asyncio
async def test_input_edit_cancels_analysis(slow_analysis_service: AnalysisService):
    """Test that editing the input cancels the in-flight analysis and drops the result."""
    session = slow_analysis_service.create_session()
    await slow_analysis_service.update_input(session.session_id, ECONOMY_ARTICLE)
    await slow_analysis_service.start_analysis(session.session_id)
    assert slow_analysis_service.pending_analysis_count == 1

    await slow_analysis_service.update_input(session.session_id, VACCINE_ARTICLE)

    assert slow_analysis_service.pending_analysis_count == 0
    assert session.status == SessionStatus.IDLE
    assert session.result is None
    assert session.article_text == VACCINE_ARTICLE


@pytest.mark.asyncio
async def test_new_analysis_supersedes_previous(claim_scorer: ClaimScorer):
    """Test that starting again cancels the previous run and only the latest result lands."""
    service = AnalysisService(claim_scorer, delay_seconds=0.05)
    session = service.create_session()
    await service.update_input(session.session_id, ECONOMY_ARTICLE)

    await service.start_analysis(session.session_id)
    first_generation = session.generation
    await service.start_analysis(session.session_id)

    result = await service.wait_for_result(session.session_id)

    assert session.generation == first_generation + 1
    assert session.status == SessionStatus.COMPLETED
    assert result.overall_score == 43
    await service.shutdown()


@pytest.mark.asyncio
async def test_stale_run_discarded(analysis_service: AnalysisService):
    """Test that a run finishing after the input changed does not store its result."""
    session = analysis_service.create_session()
    session.update_input(ECONOMY_ARTICLE)
    generation = session.mark_analyzing()
    session.update_input(VACCINE_ARTICLE)

    result = await analysis_service._run_analysis(session, generation, ECONOMY_ARTICLE)

    assert result is None
    assert session.result is None
    assert session.status == SessionStatus.IDLE


@pytest.mark.asyncio
async def test_cancel_analysis(slow_analysis_service: AnalysisService):
    """Test cancelling an in-flight analysis."""
    session = slow_analysis_service.create_session()
    await slow_analysis_service.update_input(session.session_id, ECONOMY_ARTICLE)
    await slow_analysis_service.start_analysis(session.session_id)

    await slow_analysis_service.cancel_analysis(session.session_id)

    assert session.status == SessionStatus.CANCELLED
    assert session.result is None
    assert await slow_analysis_service.wait_for_result(session.session_id) is None


@pytest.mark.asyncio
async def test_cancelled_waiter_leaves_analysis_running(claim_scorer: ClaimScorer):
    """Test that cancelling a caller waiting for the result does not cancel the analysis."""
    service = AnalysisService(claim_scorer, delay_seconds=0.05)
    session = service.create_session()
    await service.update_input(session.session_id, ECONOMY_ARTICLE)
    await service.start_analysis(session.session_id)

    waiter = asyncio.create_task(service.wait_for_result(session.session_id))
    await asyncio.sleep(0)
    waiter.cancel()

    with pytest.raises(asyncio.CancelledError):
        await waiter
    assert waiter.cancelled()
    assert session.status == SessionStatus.ANALYZING
    assert service.pending_analysis_count == 1

    result = await service.wait_for_result(session.session_id)

    assert session.status == SessionStatus.COMPLETED
    assert result.overall_score == 43
    await service.shutdown()


@pytest.mark.asyncio
async def test_waiter_sees_superseded_run(slow_analysis_service: AnalysisService):
    """Test that a caller waiting on a run cancelled by an input edit gets no result."""
    session = slow_analysis_service.create_session()
    await slow_analysis_service.update_input(session.session_id, ECONOMY_ARTICLE)
    await slow_analysis_service.start_analysis(session.session_id)

    waiter = asyncio.create_task(slow_analysis_service.wait_for_result(session.session_id))
    await asyncio.sleep(0)
    await slow_analysis_service.update_input(session.session_id, VACCINE_ARTICLE)

    assert await waiter is None
    assert not waiter.cancelled()
    assert session.status == SessionStatus.IDLE


@pytest.mark.asyncio
async def test_cancel_without_analysis(analysis_service: AnalysisService):
    """Test that cancelling with nothing in flight leaves the session alone."""
    session = analysis_service.create_session()

    await analysis_service.cancel_analysis(session.session_id)

    assert session.status == SessionStatus.IDLE


@pytest.mark.asyncio
async def test_unknown_session(analysis_service: AnalysisService):
    """Test error handling for unknown sessions."""
    with pytest.raises(KeyError):
        analysis_service.get_session("missing")
    with pytest.raises(KeyError):
        await analysis_service.update_input("missing", ECONOMY_ARTICLE)
    with pytest.raises(KeyError):
        await analysis_service.start_analysis("missing")
    with pytest.raises(KeyError):
        await analysis_service.close_session("missing")


@pytest.mark.asyncio
async def test_close_session(slow_analysis_service: AnalysisService):
    """Test closing a session with an analysis in flight."""
    session = slow_analysis_service.create_session()
    await slow_analysis_service.update_input(session.session_id, ECONOMY_ARTICLE)
    await slow_analysis_service.start_analysis(session.session_id)

    await slow_analysis_service.close_session(session.session_id)

    assert slow_analysis_service.active_session_count == 0
    assert slow_analysis_service.pending_analysis_count == 0
    assert session.session_id not in slow_analysis_service.list_sessions()


@pytest.mark.asyncio
async def test_shutdown_cancels_pending(claim_scorer: ClaimScorer):
    """Test that shutdown cancels every analysis in flight."""
    service = AnalysisService(claim_scorer, delay_seconds=10)
    for text in (ECONOMY_ARTICLE, VACCINE_ARTICLE):
        session = service.create_session()
        await service.update_input(session.session_id, text)
        await service.start_analysis(session.session_id)
    assert service.pending_analysis_count == 2

    await service.shutdown()

    assert service.pending_analysis_count == 0
    assert service.active_session_count == 0


@pytest.mark.asyncio
async def test_scorer_failure_surfaces():
    """Test that a scorer failure reaches the caller waiting for the result."""
    scorer = MagicMock(spec=ClaimScorer)
    scorer.analyze.side_effect = RuntimeError("scorer exploded")
    service = AnalysisService(scorer, delay_seconds=0)
    session = service.create_session()
    await service.update_input(session.session_id, ECONOMY_ARTICLE)
    await service.start_analysis(session.session_id)

    with pytest.raises(RuntimeError, match="scorer exploded"):
        await service.wait_for_result(session.session_id)

    assert session.result is None
    assert session.status == SessionStatus.ANALYZING
