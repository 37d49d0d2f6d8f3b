"""Domain model for article analysis results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Sequence

from .claim import Claim
from .reference import Reference


class CredibilityLevel(str, Enum):
    """Coarse banding of the overall credibility score."""

    HIGH = "high"  # 80-100
    MEDIUM = "medium"  # 60-79
    LOW = "low"  # 40-59
    VERY_LOW = "very-low"  # <40

    @classmethod
    def from_score(cls, score: int) -> "CredibilityLevel":
        """Band a score; lower bounds are inclusive."""
        if score >= 80:
            return cls.HIGH
        elif score >= 60:
            return cls.MEDIUM
        elif score >= 40:
            return cls.LOW
        else:
            return cls.VERY_LOW


@dataclass
class AnalysisResult:
    """Result of analysing one article."""

    overall_score: int
    credibility_level: CredibilityLevel
    claims: List[Claim]
    fact_corrections: List[Claim]
    references: Sequence[Reference]
    summary: str
    penalty_details: str
    analyzed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate the result."""
        if not 0 <= self.overall_score <= 100:
            raise ValueError("Overall score must be between 0 and 100")

        if self.credibility_level != CredibilityLevel.from_score(self.overall_score):
            raise ValueError(
                f"Credibility level {self.credibility_level.value} does not match score {self.overall_score}"
            )

        if not self.claims:
            raise ValueError("An analysis must contain at least one claim")

        claim_ids = [claim.id for claim in self.claims]
        if len(set(claim_ids)) != len(claim_ids):
            raise ValueError("Claim ids must be unique within an analysis")

        for correction in self.fact_corrections:
            if correction not in self.claims:
                raise ValueError(f"Fact correction {correction.id} is not one of the claims")
            if not correction.is_correction:
                raise ValueError(f"Claim {correction.id} is not a fact correction")

        expected = [claim for claim in self.claims if claim.is_correction]
        if self.fact_corrections != expected:
            raise ValueError("Fact corrections must list every correctable claim in claim order")

    @property
    def has_issues(self) -> bool:
        """Whether any claim needed correcting."""
        return bool(self.fact_corrections)

    def to_dict(self) -> Dict[str, Any]:
        """Convert AnalysisResult to dictionary format for API responses."""
        return {
            'overallScore': self.overall_score,
            'credibilityLevel': self.credibility_level.value,
            'claims': [claim.model_dump(mode="json", by_alias=True, exclude_none=True) for claim in self.claims],
            'factCorrections': [
                claim.model_dump(mode="json", by_alias=True, exclude_none=True) for claim in self.fact_corrections
            ],
            'references': [reference.model_dump(mode="json") for reference in self.references],
            'summary': self.summary,
            'penaltyDetails': self.penalty_details,
            'analyzedAt': self.analyzed_at.isoformat()
        }
