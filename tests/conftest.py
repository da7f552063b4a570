"""Shared fixtures: fake language models, sample records, backend app client."""

import asyncio
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fitgenius.api.main import app
from fitgenius.api.store import store
from fitgenius.schemas import ExerciseLog, ExerciseSet, ExerciseType, UserProfile, WorkoutLog
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.cache import MemorySessionStore, ResultCache

transport = ASGITransport(app=app)


class FakeRateLimitError(Exception):
    """Looks like an SDK error carrying HTTP 429."""
    status_code = 429


class FakeLLM:
    """Structured-output runnable stand-in returning queued responses.

    A queued exception is raised instead of returned; the last response
    repeats once the queue is exhausted. With ``gated`` each call waits for
    ``release`` to be set.
    """

    def __init__(self, *responses, gated=False):
        self.responses = list(responses)
        self.calls = 0
        self.messages = []
        self.release = asyncio.Event()
        if not gated:
            self.release.set()

    async def ainvoke(self, messages):
        index = min(self.calls, len(self.responses) - 1)
        self.calls += 1
        self.messages.append(messages)
        await self.release.wait()
        item = self.responses[index]
        if isinstance(item, BaseException):
            raise item
        return item


class FakeProvider:
    """``llm_provider`` that hands out one FakeLLM per request kind."""

    def __init__(self, **llms):
        self.llms = llms
        self.requested = []

    def __call__(self, kind, schema):
        self.requested.append((kind, schema))
        return self.llms[kind]


async def no_sleep(seconds):
    return None


def report_payload(**overrides):
    payload = {
        "score": 82,
        "level": "good",
        "metrics": {"consistency": 80, "variety": 70, "overload": 65, "execution": 75},
        "muscle_balance": {"push": 30, "pull": 25, "legs": 30, "core": 15},
        "physiological_analysis": {
            "current_phase": "hypertrophy",
            "current_phase_desc": "Volume is driving muscle growth.",
            "future_projection": "strength",
            "future_projection_desc": "Heavier, lower-rep work next.",
        },
        "recommendations": ["Add a second pull session"],
    }
    payload.update(overrides)
    return payload


def advice_payload():
    return {
        "summary": "Consistent upper body work.",
        "strengths": ["Regular sessions"],
        "improvements": ["More leg volume"],
        "next_step": "Squat on Thursday.",
    }


def insight_payload(name="Deadlift"):
    return {
        "exercise_name": name,
        "target_muscles": ["hamstrings", "glutes", "erectors"],
        "technical_points": ["Brace", "Bar over midfoot", "Hips and shoulders rise together", "Lock out with glutes"],
        "physiological_principle": "Heavy hip hinge loading recruits high-threshold motor units.",
    }


def plan_payload():
    return {
        "title": "Hypertrophy week",
        "schedule": [
            {
                "day": "Monday",
                "focus": "Chest",
                "exercises": ["Bench press 4x8", "Dips 3x10"],
                "duration": 60,
                "notes": "Leave one rep in reserve",
            }
        ],
    }


def make_log(day, duration=30, calories=200, notes="", exercises=None, log_id=None, title="Session"):
    return WorkoutLog(
        id=log_id or f"log-{day.isoformat()}",
        date=day,
        title=title,
        duration=duration,
        calories=calories,
        notes=notes,
        exercises=exercises or [],
    )


def strength(name, weight=60.0, sets=3, reps=10):
    return ExerciseLog(
        name=name,
        type=ExerciseType.STRENGTH,
        sets=[ExerciseSet(weight=weight, reps=reps) for _ in range(sets)],
    )


@pytest.fixture
def profile():
    return UserProfile(name="Ana", age=30, weight=70, height=168)


@pytest.fixture
def logs():
    return [
        make_log(datetime(2024, 3, 3, 18, 0), exercises=[strength("Deadlift", 100)], log_id="c"),
        make_log(datetime(2024, 3, 2, 18, 0), exercises=[strength("Squat", 80)], log_id="b"),
        make_log(datetime(2024, 3, 1, 18, 0), exercises=[strength("Bench Press", 60)], log_id="a"),
    ]


@pytest.fixture
def cache():
    return ResultCache(MemorySessionStore())


@pytest.fixture(autouse=True)
def clear_store():
    store.clear()
    yield
    store.clear()


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def backend():
    backend_client = BackendClient(base_url="http://test", transport=transport)
    yield backend_client
    await backend_client.aclose()
