"""Domain model for reference sources shown alongside an analysis."""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, Field


class ReliabilityLevel(str, Enum):
    """How much a reference source can be trusted."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Reference(BaseModel):
    """A source the reader can consult to check the article."""

    title: str = Field(..., description="Title of the reference")
    source: str = Field(..., description="Organisation publishing the reference")
    url: str = Field(..., description="Where the reference can be found")
    reliability: ReliabilityLevel = Field(..., description="Reliability of the source")

    class Config:
        """Pydantic model configuration."""
        frozen = True


STATIC_REFERENCES: Tuple[Reference, ...] = (
    Reference(
        title="Bureau of Labor Statistics",
        source="U.S. Department of Labor",
        url="https://bls.gov",
        reliability=ReliabilityLevel.HIGH,
    ),
    Reference(
        title="Federal Reserve Economic Data",
        source="Federal Reserve Bank of St. Louis",
        url="https://fred.stlouisfed.org",
        reliability=ReliabilityLevel.HIGH,
    ),
    Reference(
        title="Climate Change Indicators",
        source="EPA",
        url="https://epa.gov/climate-indicators",
        reliability=ReliabilityLevel.HIGH,
    ),
    Reference(
        title="CDC Vaccine Effectiveness",
        source="Centers for Disease Control",
        url="https://cdc.gov/vaccines",
        reliability=ReliabilityLevel.HIGH,
    ),
)
