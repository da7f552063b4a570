"""Local mirror of the user's workout logs."""

import asyncio
import random
from datetime import datetime, timedelta
from typing import List, Optional

from fitgenius.schemas.enums import ExerciseType
from fitgenius.schemas.workout_log import ExerciseLog, ExerciseSet, WorkoutLog
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.metrics import merge_log_into
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

# Demo templates: name and the working weight for early, middle and late days.
DEMO_EXERCISES = [
    ("Barbell Bench Press", (60, 62.5, 65)),
    ("Barbell Back Squat", (80, 85, 90)),
    ("Deadlift", (100, 105, 110)),
    ("Pull-up", (0, 0, 5)),
    ("Standing Overhead Press", (40, 42.5, 45)),
]
DEMO_DAYS = 7
DEMO_EXERCISES_PER_DAY = 3


class LogBook:
    """Most-recent-first logs, kept in step with the backend.

    Additions go to the backend first and are then merged locally by
    calendar day. They are serialized so the local merge never races itself.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logs: List[WorkoutLog] = []
        self._lock = asyncio.Lock()

    async def load(self) -> List[WorkoutLog]:
        self.logs = await self.backend.get_logs()
        logger.info(f"Loaded {len(self.logs)} workout logs")
        return self.logs

    async def add(self, log: WorkoutLog) -> List[WorkoutLog]:
        async with self._lock:
            await self.backend.add_log(log)
            self.logs = merge_log_into(self.logs, log)
        return self.logs

    async def simulate_week(self, rng: Optional[random.Random] = None, now: Optional[datetime] = None) -> List[WorkoutLog]:
        """Generate and store a week of demo strength sessions, one per day."""
        rng = rng or random.Random()
        now = now or datetime.now()
        generated = []
        for days_ago in range(DEMO_DAYS - 1, -1, -1):
            stage = min(days_ago // 2, 2)
            exercises = []
            for offset in range(DEMO_EXERCISES_PER_DAY):
                name, weights = DEMO_EXERCISES[(days_ago + offset) % len(DEMO_EXERCISES)]
                weight = weights[stage]
                exercises.append(ExerciseLog(
                    name=name,
                    type=ExerciseType.STRENGTH,
                    sets=[
                        ExerciseSet(weight=weight, reps=10),
                        ExerciseSet(weight=weight, reps=10),
                        ExerciseSet(weight=weight, reps=8),
                    ],
                ))
            generated.append(WorkoutLog(
                id=f"sim-{days_ago}-{int(now.timestamp())}",
                date=now - timedelta(days=days_ago),
                title="Upper body strength" if days_ago % 2 == 0 else "Lower body power",
                duration=45 + rng.randint(0, 14),
                calories=300 + rng.randint(0, 199),
                notes="Demo data",
                exercises=exercises,
            ))

        for log in generated:
            await self.add(log)
        logger.info(f"Simulated {len(generated)} workout logs")
        return self.logs
