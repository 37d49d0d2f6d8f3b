"""Domain service for running article analyses behind a simulated delay."""

import asyncio
import logging
import math
from typing import Dict, Optional
from uuid import uuid4

from ..models.analysis_result import AnalysisResult
from ..models.analysis_session import AnalysisSession
from .claim_scorer import ClaimScorer

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_DELAY = 3.0


class AnalysisService:
    """Domain service for article analysis.

    Each analysis waits ``delay_seconds`` before the scorer runs, standing in
    for the latency of a verification backend. The wait lives in an
    ``asyncio.Task`` per session so that editing the input, or starting a new
    analysis, cancels the stale one instead of racing it.
    """

    def __init__(self, scorer: ClaimScorer, delay_seconds: float = DEFAULT_ANALYSIS_DELAY):
        """Initialize service with a claim scorer.

        Args:
            scorer: Claim scorer used to produce results
            delay_seconds: Simulated latency before each result is produced
        """
        if not math.isfinite(delay_seconds) or delay_seconds < 0:
            raise ValueError("Analysis delay must be a finite, non-negative number")

        self._scorer = scorer
        self._delay = delay_seconds
        self._sessions: Dict[str, AnalysisSession] = {}
        self._tasks: Dict[str, asyncio.Task] = {}
        logger.info(f"🔧 AnalysisService initialized (delay={delay_seconds}s)")

    async def analyze(self, article_text: str) -> Optional[AnalysisResult]:
        """Analyze an article after the simulated delay.

        Args:
            article_text: Raw article text

        Returns:
            Analysis result, or None if the text is blank
        """
        if not article_text.strip():
            logger.debug("Blank article text - nothing to analyze")
            return None

        await asyncio.sleep(self._delay)
        return self._scorer.analyze(article_text)

    def create_session(self) -> AnalysisSession:
        """Create a new analyzer session with empty input."""
        session = AnalysisSession(session_id=uuid4().hex)
        self._sessions[session.session_id] = session
        logger.info(f"🆕 Analyzer session created: {session.session_id}")
        return session

    def get_session(self, session_id: str) -> AnalysisSession:
        """Get a session by ID.

        Raises:
            KeyError: If the session does not exist
        """
        if session_id not in self._sessions:
            raise KeyError(f"Session '{session_id}' not found")
        return self._sessions[session_id]

    def list_sessions(self) -> Dict[str, AnalysisSession]:
        """List all sessions."""
        return self._sessions.copy()

    async def update_input(self, session_id: str, article_text: str) -> AnalysisSession:
        """Replace a session's article text, dropping its result and any in-flight analysis.

        Args:
            session_id: ID of the session
            article_text: New article text

        Returns:
            Updated session
        """
        session = self.get_session(session_id)
        await self._cancel_task(session_id)
        session.update_input(article_text)
        logger.info(f"✏️ Input updated for session {session_id}: {len(article_text)} chars")
        return session

    async def start_analysis(self, session_id: str) -> AnalysisSession:
        """Start analyzing a session's current input.

        Blank input is a no-op. A previous analysis still in flight is cancelled.

        Args:
            session_id: ID of the session

        Returns:
            The session, marked as analyzing unless its input was blank
        """
        session = self.get_session(session_id)

        if not session.has_input:
            logger.info(f"⏭️ Session {session_id} has no input - analysis not started")
            return session

        if await self._cancel_task(session_id):
            logger.info(f"🔁 Superseding in-flight analysis for session {session_id}")

        generation = session.mark_analyzing()
        self._tasks[session_id] = asyncio.create_task(
            self._run_analysis(session, generation, session.article_text)
        )

        logger.info(f"🚀 Analysis started for session {session_id} (generation {generation})")
        return session

    async def wait_for_result(self, session_id: str) -> Optional[AnalysisResult]:
        """Wait for a session's in-flight analysis, if any, and return its latest result.

        Returns:
            Latest result, or None if there is none (blank input, cancelled or invalidated)
        """
        session = self.get_session(session_id)
        task = self._tasks.get(session_id)

        if task is not None:
            try:
                # Cancelling the waiter must not cancel the analysis itself.
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not (task.done() and task.cancelled()):
                    raise

        return session.result

    async def cancel_analysis(self, session_id: str) -> AnalysisSession:
        """Cancel a session's in-flight analysis.

        Returns:
            The session, marked cancelled if an analysis was running
        """
        session = self.get_session(session_id)
        if await self._cancel_task(session_id):
            session.mark_cancelled()
            logger.info(f"🛑 Analysis cancelled for session {session_id}")
        return session

    async def close_session(self, session_id: str) -> AnalysisSession:
        """Close a session, cancelling its in-flight analysis."""
        session = self.get_session(session_id)
        await self._cancel_task(session_id)
        self._sessions.pop(session_id, None)
        logger.info(f"👋 Analyzer session closed: {session_id}")
        return session

    async def _run_analysis(
        self,
        session: AnalysisSession,
        generation: int,
        article_text: str
    ) -> Optional[AnalysisResult]:
        """Run one analysis and store it if it is still the latest run."""
        try:
            result = await self.analyze(article_text)
        except asyncio.CancelledError:
            logger.info(f"🛑 Analysis task cancelled: session {session.session_id} (generation {generation})")
            raise
        except Exception as e:
            logger.error(f"❌ Analysis failed for session {session.session_id}: {e}")
            raise

        if not session.is_current(generation):
            logger.warning(
                f"⚠️ Discarding stale result for session {session.session_id}: "
                f"generation {generation}, current {session.generation}"
            )
            return None

        session.mark_completed(result)
        return result

    async def _cancel_task(self, session_id: str) -> bool:
        """Cancel and forget a session's task.

        Returns:
            True if a running task was cancelled
        """
        task = self._tasks.pop(session_id, None)
        if task is None or task.done():
            return False

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return True

    async def shutdown(self) -> None:
        """Shutdown the analysis service."""
        logger.info("🔄 Shutting down analysis service...")

        for task in self._tasks.values():
            if not task.done():
                task.cancel()

        if self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

        self._tasks.clear()
        self._sessions.clear()

        logger.info("✅ Analysis service shutdown completed")

    @property
    def delay_seconds(self) -> float:
        """Simulated latency before each result."""
        return self._delay

    @property
    def active_session_count(self) -> int:
        """Get number of open sessions."""
        return len(self._sessions)

    @property
    def pending_analysis_count(self) -> int:
        """Get number of analyses still in flight."""
        return sum(1 for task in self._tasks.values() if not task.done())
