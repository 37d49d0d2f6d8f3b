"""Service for extracting claims from article text and scoring credibility."""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from ..models.analysis_result import AnalysisResult, CredibilityLevel
from ..models.claim import Claim, ClaimStatus
from ..models.reference import STATIC_REFERENCES
from ..ports.random_source import RandomSource

logger = logging.getLogger(__name__)

BASE_SCORE = 85
TRUE_CLAIM_BONUS = 5
NO_PENALTIES_MESSAGE = "No significant penalties applied."

# Checked in order; several topics can match the same article.
TOPIC_CLAIMS: Tuple[Tuple[Tuple[str, ...], Claim], ...] = (
    (
        ("economy", "economic"),
        Claim(
            id="1",
            text="Economic growth has reached record highs this quarter",
            status=ClaimStatus.FALSE,
            confidence=85,
            explanation="Official GDP data shows growth at 2.1%, which is below historical averages.",
            correct_information=(
                "Current economic growth is 2.1%, which is moderate but not record-breaking. "
                "The highest quarterly growth in recent years was 4.9% in Q3 2020."
            ),
        ),
    ),
    (
        ("unemployment", "jobs"),
        Claim(
            id="2",
            text="Unemployment has dropped to historic lows",
            status=ClaimStatus.MISLEADING,
            confidence=72,
            explanation="While unemployment is low, it's not at historic levels when compared to pre-pandemic data.",
            correct_information=(
                "Current unemployment rate is 3.7%. The historic low was 3.5% in 2019, "
                "and rates were consistently lower in the 1950s."
            ),
        ),
    ),
    (
        ("climate", "temperature"),
        Claim(
            id="3",
            text="Global temperatures have increased by 3 degrees in the past decade",
            status=ClaimStatus.FALSE,
            confidence=92,
            explanation="Scientific data shows global temperature increase is approximately 1.1°C since pre-industrial times.",
            correct_information=(
                "Global average temperature has increased by approximately 1.1°C (2°F) since the late 1800s, "
                "with most warming occurring in the past 40 years."
            ),
        ),
    ),
    (
        ("vaccine", "covid"),
        Claim(
            id="4",
            text="COVID-19 vaccines are 100% effective against all variants",
            status=ClaimStatus.FALSE,
            confidence=88,
            explanation="No vaccine provides 100% protection, and effectiveness varies by variant.",
            correct_information=(
                "COVID-19 vaccines are highly effective but not 100%. Effectiveness ranges from 70-95% "
                "depending on the vaccine type and variant, with boosters improving protection."
            ),
        ),
    ),
)

FALLBACK_CLAIM_TEXT = "Main statistical claim in the article"
FALLBACK_EXPLANATION = "Cross-referenced with official statistical databases and government sources."
FALLBACK_CORRECTION = "Verified data shows different figures than those presented in the article."
FALLBACK_TRUE_THRESHOLD = 0.6
FALLBACK_CONFIDENCE_RANGE = (70, 99)


def credibility_level_for(score: int) -> CredibilityLevel:
    """Convert an overall score (0-100) to its credibility band."""
    return CredibilityLevel.from_score(score)


class ClaimScorer:
    """Detects known claims in article text and scores the article's credibility.

    Everything is deterministic except the fallback claim emitted when no
    known topic is mentioned, which draws its verdict and confidence from the
    injected random source.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        """Initialize the scorer.

        Args:
            random_source: Source of randomness for the fallback claim.
                Defaults to a fresh, unseeded ``random.Random``.
        """
        self._random = random_source if random_source is not None else random.Random()

    def extract_claims(self, article_text: str) -> List[Claim]:
        """Find the known claims an article makes.

        Args:
            article_text: Raw article text

        Returns:
            Claims in topic order, or a single fallback claim if no topic matched
        """
        content = article_text.lower()
        claims = [
            claim
            for keywords, claim in TOPIC_CLAIMS
            if any(keyword in content for keyword in keywords)
        ]

        if not claims:
            claims.append(self._fallback_claim())

        logger.info(f"📝 Extracted {len(claims)} claims: {[claim.id for claim in claims]}")
        return claims

    def _fallback_claim(self) -> Claim:
        """Build the generic claim used when no known topic is mentioned."""
        status = (
            ClaimStatus.TRUE
            if self._random.random() > FALLBACK_TRUE_THRESHOLD
            else ClaimStatus.FALSE
        )
        confidence = self._random.randint(*FALLBACK_CONFIDENCE_RANGE)
        logger.debug(f"🎲 Fallback claim sampled: status={status.value}, confidence={confidence}")

        return Claim(
            id="1",
            text=FALLBACK_CLAIM_TEXT,
            status=status,
            confidence=confidence,
            explanation=FALLBACK_EXPLANATION,
            # Only corrections carry correct information.
            correct_information=FALLBACK_CORRECTION if status != ClaimStatus.TRUE else None,
        )

    def score(self, claims: Sequence[Claim]) -> Tuple[int, str]:
        """Score a list of claims.

        Args:
            claims: Claims in detection order

        Returns:
            Overall score clamped to [0, 100] and the penalty details text
        """
        score = BASE_SCORE
        penalty_details = ""

        for claim in claims:
            if claim.status == ClaimStatus.FALSE and claim.confidence > 70:
                penalty = claim.confidence // 2
                score -= penalty
                penalty_details += (
                    f"{penalty} points deducted for false claim with {claim.confidence}% confidence. "
                )
            elif claim.status == ClaimStatus.MISLEADING and claim.confidence > 60:
                penalty = claim.confidence // 4
                score -= penalty
                penalty_details += (
                    f"{penalty} points deducted for misleading claim with {claim.confidence}% confidence. "
                )
            elif claim.status == ClaimStatus.TRUE and claim.confidence > 80:
                score += TRUE_CLAIM_BONUS

        score = max(0, min(score, 100))
        logger.info(f"📊 Overall score: {score}")
        return score, penalty_details or NO_PENALTIES_MESSAGE

    def build_result(self, claims: Sequence[Claim], score: int, penalty_details: str) -> AnalysisResult:
        """Assemble the analysis result from scored claims.

        Args:
            claims: Claims in detection order
            score: Overall score from ``score``
            penalty_details: Penalty details from ``score``

        Returns:
            Analysis result
        """
        fact_corrections = [claim for claim in claims if claim.is_correction]
        lead = (
            "significant credibility issues" if fact_corrections
            else "generally reliable information"
        )
        summary = (
            f"Fact-checking analysis reveals {lead}. "
            "Score heavily weighted toward claim validation rather than presentation quality. "
            f"{penalty_details}"
        )

        return AnalysisResult(
            overall_score=score,
            credibility_level=credibility_level_for(score),
            claims=list(claims),
            fact_corrections=fact_corrections,
            references=STATIC_REFERENCES,
            summary=summary,
            penalty_details=penalty_details,
        )

    def analyze(self, article_text: str) -> AnalysisResult:
        """Extract claims from an article, score them and build the result.

        Args:
            article_text: Raw article text

        Returns:
            Analysis result
        """
        logger.info(f"🔍 Analyzing article: {article_text[:100]}...")
        claims = self.extract_claims(article_text)
        score, penalty_details = self.score(claims)
        result = self.build_result(claims, score, penalty_details)
        logger.info(f"✅ Analysis complete: {result.overall_score}/100 ({result.credibility_level.value})")
        return result
