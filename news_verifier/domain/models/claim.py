"""Domain model for factual claims found in an article."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ClaimStatus(str, Enum):
    """Verdict assigned to a claim."""

    TRUE = "true"
    FALSE = "false"
    MISLEADING = "misleading"


class Claim(BaseModel):
    """Represents a single factual assertion checked against known data."""

    id: str = Field(..., description="Identifier, unique within one analysis")
    text: str = Field(..., description="The assertion being checked")
    status: ClaimStatus = Field(..., description="Verdict for the assertion")
    confidence: int = Field(..., ge=0, le=100, description="Certainty of the verdict in percent")
    explanation: str = Field(..., description="Rationale for the verdict")
    correct_information: Optional[str] = Field(
        None, description="Accurate information, present for false or misleading claims"
    )

    @property
    def is_correction(self) -> bool:
        """Whether this claim belongs in the fact-correction list."""
        return self.status != ClaimStatus.TRUE and bool(self.correct_information)

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "3",
                "text": "Global temperatures have increased by 3 degrees in the past decade",
                "status": "false",
                "confidence": 92,
                "explanation": "Scientific data shows global temperature increase is approximately 1.1°C since pre-industrial times.",
                "correctInformation": "Global average temperature has increased by approximately 1.1°C (2°F) since the late 1800s."
            }
        }
