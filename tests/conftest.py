"""Test configuration and common fixtures."""

import random
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from news_verifier.domain.services.analysis_service import AnalysisService
from news_verifier.domain.services.claim_scorer import ClaimScorer


@pytest.fixture
def seeded_random() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def claim_scorer(seeded_random: random.Random) -> ClaimScorer:
    """Provide a claim scorer with a seeded random source."""
    return ClaimScorer(random_source=seeded_random)


@pytest_asyncio.fixture
async def analysis_service(claim_scorer: ClaimScorer) -> AsyncGenerator[AnalysisService, None]:
    """Provide an analysis service without simulated delay."""
    service = AnalysisService(claim_scorer, delay_seconds=0)
    yield service
    await service.shutdown()


@pytest_asyncio.fixture
async def slow_analysis_service(claim_scorer: ClaimScorer) -> AsyncGenerator[AnalysisService, None]:
    """Provide an analysis service whose analyses stay in flight during a test."""
    service = AnalysisService(claim_scorer, delay_seconds=10)
    yield service
    await service.shutdown()
