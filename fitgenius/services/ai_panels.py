"""Consumers of AI content: report, exercise insight and coach panels.

Each panel owns its own single-flight guard, so repeated refreshes of the
same panel never stack up model calls, while different panels run
independently. Failures become a user-facing message on the panel state.
"""

from typing import Any, Awaitable, Callable, Optional, Sequence, Type

from pydantic import BaseModel

from fitgenius.schemas.ai_outputs import AIAdvice, ExerciseInsight, TrainingReport
from fitgenius.schemas.plan import WorkoutPlan
from fitgenius.schemas.user import UserProfile
from fitgenius.schemas.workout_log import WorkoutLog
from fitgenius.services.ai_service import AIContentService, model_codec
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.errors import RateLimited, Unauthorized, ValidationFailure
from fitgenius.services.single_flight import SingleFlightGuard
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests: the AI quota is used up, please try again in a minute."
VALIDATION_MESSAGE = "Generation failed, please retry."
UNAUTHORIZED_MESSAGE = "Your session has expired, please sign in again."
UNAVAILABLE_MESSAGE = "The analysis service is temporarily unavailable, please try again later."


def error_message(error: BaseException) -> str:
    if isinstance(error, RateLimited):
        return RATE_LIMIT_MESSAGE
    if isinstance(error, ValidationFailure):
        return VALIDATION_MESSAGE
    if isinstance(error, Unauthorized):
        return UNAUTHORIZED_MESSAGE
    return UNAVAILABLE_MESSAGE


class PanelState(BaseModel):
    result: Any = None
    loading: bool = False
    error: Optional[str] = None


class GuardedPanel:
    """Base for panels that load one cached AI result at a time."""

    def __init__(self, service: AIContentService, schema: Type[BaseModel]):
        self.service = service
        encode, decode = model_codec(schema)
        self.guard = SingleFlightGuard(service.cache, encode, decode)
        self.state = PanelState()

    async def _load(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Optional[Any]:
        self.state.loading = True
        generation = self.guard.generation
        try:
            result = await self.guard.run(key, fetch)
        except Exception as e:
            logger.error(f"{type(self).__name__} request failed: {e}", exc_info=not isinstance(e, RateLimited))
            # Errors from a flight that outlived a reset are logged only.
            if generation == self.guard.generation:
                self.state.error = error_message(e)
            return None
        finally:
            self.state.loading = self.guard.busy

        # A result from a flight that outlived a reset is cached but not shown.
        if result is not None and generation == self.guard.generation and self.guard.last_key == key:
            self.state.result = result
            self.state.error = None
        return result

    def reset(self) -> None:
        self.guard.reset()
        self.state = PanelState()


class ReportPanel(GuardedPanel):
    """Training report, refetched only when log count, latest date, age or goal change."""

    def __init__(self, service: AIContentService):
        super().__init__(service, TrainingReport)

    async def refresh(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> Optional[TrainingReport]:
        if not logs:
            return None
        key = self.service.report_key(logs, profile)
        return await self._load(key, lambda: self.service.fetch_report(logs, profile))


class InsightPanel(GuardedPanel):
    """Technique insight for the selected exercise."""

    def __init__(self, service: AIContentService):
        super().__init__(service, ExerciseInsight)
        self.selected: Optional[str] = None

    async def select(self, exercise_name: str) -> Optional[ExerciseInsight]:
        if not exercise_name:
            return None
        if exercise_name != self.selected:
            self.reset()
            self.selected = exercise_name
        key = self.service.insight_key(exercise_name)
        return await self._load(key, lambda: self.service.fetch_insight(exercise_name))


class CoachPanel(GuardedPanel):
    """Plan drafting and history analysis.

    A generated plan stays a draft until confirmed; confirming saves it as
    the active plan on the backend.
    """

    def __init__(self, service: AIContentService, backend: BackendClient):
        super().__init__(service, AIAdvice)
        self.backend = backend
        self.current_plan: Optional[WorkoutPlan] = None
        self.draft_plan: Optional[WorkoutPlan] = None
        self.plan_error: Optional[str] = None

    async def load_active_plan(self) -> Optional[WorkoutPlan]:
        self.current_plan = await self.backend.get_plan()
        return self.current_plan

    async def generate_draft(self, profile: UserProfile, refresh: bool = True) -> Optional[WorkoutPlan]:
        try:
            self.draft_plan = await self.service.generate_plan(profile, refresh=refresh)
            self.plan_error = None
        except Exception as e:
            logger.error(f"Plan generation failed: {e}", exc_info=not isinstance(e, RateLimited))
            self.plan_error = error_message(e)
            return None
        return self.draft_plan

    async def confirm_draft(self) -> Optional[WorkoutPlan]:
        if self.draft_plan is None:
            return None
        await self.backend.save_plan(self.draft_plan)
        self.current_plan, self.draft_plan = self.draft_plan, None
        return self.current_plan

    def discard_draft(self) -> None:
        self.draft_plan = None

    async def analyze(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> Optional[AIAdvice]:
        if not logs:
            return None
        key = self.service.advice_key(logs, profile)
        return await self._load(key, lambda: self.service.fetch_advice(logs, profile))
