"""Analyzer configuration management."""

import logging
import math
import os
from typing import Optional

from pydantic import BaseModel, Field

from ..domain.services.analysis_service import DEFAULT_ANALYSIS_DELAY

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnalyzerConfig(BaseModel):
    """Configuration for the news analyzer."""

    analysis_delay: float = Field(DEFAULT_ANALYSIS_DELAY, ge=0, allow_inf_nan=False)
    random_seed: Optional[int] = None  # unseeded when None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """Create configuration from environment variables."""
        analysis_delay = DEFAULT_ANALYSIS_DELAY
        raw_delay = os.getenv('NEWS_VERIFIER_ANALYSIS_DELAY')
        if raw_delay:
            try:
                analysis_delay = float(raw_delay)
                if not math.isfinite(analysis_delay) or analysis_delay < 0:
                    raise ValueError("delay must be a finite, non-negative number")
            except ValueError:
                logger.warning(f"⚠️ Invalid NEWS_VERIFIER_ANALYSIS_DELAY '{raw_delay}' - using {DEFAULT_ANALYSIS_DELAY}s")
                analysis_delay = DEFAULT_ANALYSIS_DELAY

        random_seed = None
        raw_seed = os.getenv('NEWS_VERIFIER_RANDOM_SEED')
        if raw_seed:
            try:
                random_seed = int(raw_seed)
                logger.info(f"🎲 Fallback claims seeded with {random_seed}")
            except ValueError:
                logger.warning(f"⚠️ Invalid NEWS_VERIFIER_RANDOM_SEED '{raw_seed}' - fallback claims unseeded")

        log_level = os.getenv('NEWS_VERIFIER_LOG_LEVEL', 'INFO').upper()
        if log_level not in VALID_LOG_LEVELS:
            logger.warning(f"⚠️ Invalid NEWS_VERIFIER_LOG_LEVEL '{log_level}' - using INFO")
            log_level = 'INFO'

        return cls(
            analysis_delay=analysis_delay,
            random_seed=random_seed,
            log_level=log_level
        )

    @property
    def logging_level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level)
