"""Domain model for analyzer sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .analysis_result import AnalysisResult


class SessionStatus(Enum):
    """Status of an analyzer session."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class AnalysisSession:
    """Holds the article being edited and the latest analysis of it.

    The session owns a single result slot. Editing the input clears it, and
    every analysis run is tagged with a generation number so a run that was
    superseded can be recognised when it finishes.
    """

    session_id: str
    article_text: str = ""
    status: SessionStatus = SessionStatus.IDLE
    result: Optional[AnalysisResult] = None
    generation: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def has_input(self) -> bool:
        """Check if the session holds non-blank article text."""
        return bool(self.article_text.strip())

    @property
    def is_analyzing(self) -> bool:
        """Check if an analysis is in flight."""
        return self.status == SessionStatus.ANALYZING

    def update_input(self, article_text: str) -> None:
        """Replace the article text and invalidate the previous result."""
        self.article_text = article_text
        self.invalidate()

    def invalidate(self) -> None:
        """Drop the current result and orphan any in-flight run."""
        self.result = None
        self.status = SessionStatus.IDLE
        self.generation += 1
        self.updated_at = datetime.now()

    def mark_analyzing(self) -> int:
        """Mark session as analyzing and return the generation of the new run."""
        self.generation += 1
        self.status = SessionStatus.ANALYZING
        self.updated_at = datetime.now()
        return self.generation

    def mark_completed(self, result: AnalysisResult) -> None:
        """Store the result of the current run."""
        self.result = result
        self.status = SessionStatus.COMPLETED
        self.updated_at = datetime.now()

    def mark_cancelled(self) -> None:
        """Mark the current run as cancelled."""
        self.status = SessionStatus.CANCELLED
        self.updated_at = datetime.now()

    def is_current(self, generation: int) -> bool:
        """Check if a run with the given generation is still the latest one."""
        return generation == self.generation

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary for API responses."""
        return {
            'session_id': self.session_id,
            'article_text': self.article_text,
            'status': self.status.value,
            'generation': self.generation,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'result': self.result.to_dict() if self.result else None
        }
