"""Dependency injection configuration for hexagonal architecture."""

import logging
import random
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.services.analysis_service import AnalysisService
from ..domain.services.claim_scorer import ClaimScorer
from .config import AnalyzerConfig

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        """Initialize service container.

        Args:
            config: Analyzer configuration, read from the environment when omitted
        """
        self.config = config or AnalyzerConfig.from_env()
        self._services: Dict[str, Any] = {}
        self._setup_services()

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        random_source = random.Random(self.config.random_seed)
        claim_scorer = ClaimScorer(random_source=random_source)
        analysis_service = AnalysisService(
            claim_scorer,
            delay_seconds=self.config.analysis_delay
        )

        self._services = {
            'claim_scorer': claim_scorer,
            'analysis_service': analysis_service,
        }

        logger.info("✅ Service container setup completed")

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_claim_scorer(self) -> ClaimScorer:
        """Get claim scorer."""
        return self.get('claim_scorer')

    def get_analysis_service(self) -> AnalysisService:
        """Get analysis service."""
        return self.get('analysis_service')

    async def shutdown(self) -> None:
        """Shutdown services that hold pending work."""
        await self.get_analysis_service().shutdown()


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_claim_scorer() -> ClaimScorer:
    """FastAPI dependency for claim scorer."""
    return get_service_container().get_claim_scorer()


def get_analysis_service() -> AnalysisService:
    """FastAPI dependency for analysis service."""
    return get_service_container().get_analysis_service()
