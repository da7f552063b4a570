"""Session wiring: one cache, one backend client, one AI service per user session."""

import uuid
from typing import Optional

import httpx

from fitgenius.services.ai_panels import CoachPanel, InsightPanel, ReportPanel
from fitgenius.services.ai_service import AIContentService, LlmProvider
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.cache import ResultCache, SessionStore, build_session_store
from fitgenius.services.llm_factory import get_llm
from fitgenius.services.log_book import LogBook
from fitgenius.services.profile_book import ProfileBook
from fitgenius.services.workout_entry import WorkoutEntry
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class FitGeniusSession:
    """Everything a signed-in user works with.

    The result cache is created with the session and cleared when it closes;
    it is passed explicitly to the services that need it.

        async with FitGeniusSession() as session:
            await session.backend.login("ana", "s3cretpass")
            await session.start()
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        store: Optional[SessionStore] = None,
        backend: Optional[BackendClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        llm_provider: LlmProvider = get_llm,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.cache = ResultCache(store if store is not None else build_session_store(self.session_id))
        self.backend = backend or BackendClient(transport=transport)
        self.ai = AIContentService(self.cache, llm_provider=llm_provider)
        self.logs = LogBook(self.backend)
        self.profile = ProfileBook(self.backend)

    async def start(self) -> None:
        """Load profile and logs after authentication."""
        await self.profile.load()
        await self.logs.load()
        logger.info(f"Session {self.session_id} started")

    def new_entry(self) -> WorkoutEntry:
        return WorkoutEntry(body_weight=self.profile.profile.weight)

    def report_panel(self) -> ReportPanel:
        return ReportPanel(self.ai)

    def insight_panel(self) -> InsightPanel:
        return InsightPanel(self.ai)

    def coach_panel(self) -> CoachPanel:
        return CoachPanel(self.ai, self.backend)

    async def close(self) -> None:
        try:
            await self.cache.clear()
            await self.cache.close()
        finally:
            await self.backend.aclose()
        logger.info(f"Session {self.session_id} closed")

    async def __aenter__(self) -> "FitGeniusSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
