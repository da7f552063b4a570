"""AI content requests: plans, history advice, training reports and exercise insights.

Every request builds its cache key first, runs the model call under the
rate-limit retry policy, validates the structured output and caches the
parsed result as JSON.
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple, Type, TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from pydantic import BaseModel, ValidationError

from fitgenius.config.agent_config import AGENT_CONFIG
from fitgenius.prompts import ADVICE_PROMPT, INSIGHT_PROMPT, PLAN_PROMPT, REPORT_PROMPT
from fitgenius.schemas.ai_outputs import AIAdvice, ExerciseInsight, TrainingReport
from fitgenius.schemas.plan import PlanDraft, WorkoutPlan
from fitgenius.schemas.user import UserProfile
from fitgenius.schemas.workout_log import WorkoutLog
from fitgenius.services.cache import ResultCache
from fitgenius.services.errors import ValidationFailure
from fitgenius.services.llm_factory import get_llm
from fitgenius.services.retry import call_with_retry
from fitgenius.services.stable_key import stable_key
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

M = TypeVar("M", bound=BaseModel)

LlmProvider = Callable[[str, Type[BaseModel]], Runnable]

ADVICE_LOG_WINDOW = 8
REPORT_LOG_WINDOW = 10


def model_codec(schema: Type[M]) -> Tuple[Callable[[M], Any], Callable[[Any], M]]:
    """(encode, decode) pair for caching ``schema`` instances as JSON."""
    return (lambda value: value.model_dump(mode="json")), schema.model_validate


def _last_date(logs: Sequence[WorkoutLog]) -> str:
    return logs[0].date.isoformat() if logs else ""


class AIContentService:
    """Requests structured content from the language model."""

    def __init__(
        self,
        cache: ResultCache,
        llm_provider: LlmProvider = get_llm,
        max_attempts: Optional[int] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.cache = cache
        self.llm_provider = llm_provider
        self.max_attempts = max_attempts
        self._sleep = sleep

    # -- cache keys -----------------------------------------------------

    @staticmethod
    def plan_key(profile: UserProfile) -> str:
        return stable_key("plan", {
            "age": profile.age,
            "weight": profile.weight,
            "height": profile.height,
            "goal": profile.goal,
            "fitness_level": profile.fitness_level,
        })

    @staticmethod
    def advice_key(logs: Sequence[WorkoutLog], profile: UserProfile) -> str:
        return stable_key("advice", {
            "log_count": len(logs),
            "last_date": _last_date(logs),
            "goal": profile.goal,
            "fitness_level": profile.fitness_level,
        })

    @staticmethod
    def report_key(logs: Sequence[WorkoutLog], profile: UserProfile) -> str:
        return stable_key("report", {
            "log_count": len(logs),
            "last_date": _last_date(logs),
            "age": profile.age,
            "goal": profile.goal,
        })

    @staticmethod
    def insight_key(exercise_name: str) -> str:
        return stable_key("insight", {"exercise_name": exercise_name.strip()})

    # -- model calls ----------------------------------------------------

    @staticmethod
    def _validate(kind: str, schema: Type[M], raw: Any) -> M:
        if raw is None:
            raise ValidationFailure(kind, "empty response")
        if isinstance(raw, schema):
            return raw
        if isinstance(raw, BaseModel):
            raw = raw.model_dump()
        try:
            if isinstance(raw, str):
                raw = json.loads(raw)
            return schema.model_validate(raw)
        except (ValidationError, ValueError) as e:
            raise ValidationFailure(kind, str(e)) from e

    async def _invoke(self, kind: str, schema: Type[M], prompt: ChatPromptTemplate, **variables: Any) -> M:
        messages = prompt.format_messages(system_prompt=AGENT_CONFIG[kind]["system_prompt"], **variables)
        llm = self.llm_provider(kind, schema)

        async def attempt() -> Any:
            return await llm.ainvoke(messages)

        try:
            raw = await call_with_retry(attempt, self.max_attempts, sleep=self._sleep)
        except OutputParserException as e:
            raise ValidationFailure(kind, str(e)) from e
        result = self._validate(kind, schema, raw)
        logger.info(f"Generated {kind} content")
        return result

    async def fetch_plan(self, profile: UserProfile) -> WorkoutPlan:
        draft = await self._invoke(
            "plan", PlanDraft, PLAN_PROMPT,
            age=profile.age,
            weight=profile.weight,
            height=profile.height,
            goal=profile.goal.value,
            fitness_level=profile.fitness_level.value,
        )
        return WorkoutPlan(**draft.model_dump(), goal=profile.goal)

    async def fetch_advice(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> AIAdvice:
        summary = [
            {
                "date": log.date.isoformat(),
                "title": log.title,
                "exercises": [{"name": e.name, "sets": len(e.sets)} for e in log.exercises],
            }
            for log in logs[:ADVICE_LOG_WINDOW]
        ]
        return await self._invoke(
            "advice", AIAdvice, ADVICE_PROMPT,
            goal=profile.goal.value,
            fitness_level=profile.fitness_level.value,
            logs=json.dumps(summary, ensure_ascii=False),
        )

    async def fetch_report(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> TrainingReport:
        summary = [
            {"title": log.title, "exercises": [e.name for e in log.exercises]}
            for log in logs[:REPORT_LOG_WINDOW]
        ]
        return await self._invoke(
            "report", TrainingReport, REPORT_PROMPT,
            profile=profile.model_dump_json(exclude={"weight_history"}),
            logs=json.dumps(summary, ensure_ascii=False),
        )

    async def fetch_insight(self, exercise_name: str) -> ExerciseInsight:
        return await self._invoke("insight", ExerciseInsight, INSIGHT_PROMPT, exercise_name=exercise_name)

    # -- cached requests ------------------------------------------------

    async def _read_through(
        self,
        key: str,
        schema: Type[M],
        fetch: Callable[[], Awaitable[M]],
        refresh: bool = False,
    ) -> M:
        encode, decode = model_codec(schema)
        if not refresh:
            cached = await self.cache.get(key)
            if cached is not None:
                try:
                    return decode(cached)
                except ValidationError:
                    logger.warning(f"Cached {key} no longer matches {schema.__name__}, regenerating")
        value = await fetch()
        await self.cache.set(key, encode(value))
        return value

    async def generate_plan(self, profile: UserProfile, refresh: bool = False) -> WorkoutPlan:
        """Weekly plan for ``profile``; ``refresh`` skips the cached draft."""
        return await self._read_through(
            self.plan_key(profile), WorkoutPlan, lambda: self.fetch_plan(profile), refresh
        )

    async def analyze_history(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> Optional[AIAdvice]:
        if not logs:
            return None
        return await self._read_through(
            self.advice_key(logs, profile), AIAdvice, lambda: self.fetch_advice(logs, profile)
        )

    async def generate_report(self, logs: Sequence[WorkoutLog], profile: UserProfile) -> Optional[TrainingReport]:
        if not logs:
            return None
        return await self._read_through(
            self.report_key(logs, profile), TrainingReport, lambda: self.fetch_report(logs, profile)
        )

    async def get_exercise_insight(self, exercise_name: str) -> ExerciseInsight:
        return await self._read_through(
            self.insight_key(exercise_name), ExerciseInsight, lambda: self.fetch_insight(exercise_name)
        )
