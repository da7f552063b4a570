"""Workout entry session: exercise collection and auto calorie estimation."""

from datetime import date, datetime
from typing import List, Optional

from fitgenius.config.settings import settings
from fitgenius.schemas.enums import CardioCategory, ExerciseType
from fitgenius.schemas.workout_log import ExerciseLog, ExerciseSet, WorkoutLog
from fitgenius.services.metrics import estimate_calories
from fitgenius.utils.debounce import Debouncer
from fitgenius.utils.helpers import to_number
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class WorkoutEntry:
    """State of one "log a workout" form.

    Any change to duration, body weight, exercises or the selected tab
    schedules a debounced calorie estimate. Once the user types calories by
    hand, estimation is off for the rest of this entry.
    """

    def __init__(
        self,
        body_weight: float = 75.0,
        day: Optional[date] = None,
        debounce_seconds: Optional[float] = None,
    ):
        self.body_weight = body_weight
        self.day = day or date.today()
        self.title = ""
        self.duration: float = 0.0
        self.calories: int = 0
        self.notes = ""
        self.exercise_type = ExerciseType.STRENGTH
        self.exercises: List[ExerciseLog] = []
        self.manual_calories = False
        delay = settings.calorie_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(self._apply_estimate, delay)

    # -- inputs ---------------------------------------------------------

    def set_duration(self, minutes) -> None:
        self.duration = max(0.0, to_number(minutes))
        self._schedule_estimate()

    def set_body_weight(self, kg) -> None:
        self.body_weight = max(0.0, to_number(kg))
        self._schedule_estimate()

    def select_type(self, exercise_type: ExerciseType) -> None:
        self.exercise_type = ExerciseType(exercise_type)
        self._schedule_estimate()

    def set_calories(self, kcal) -> None:
        """Manual calorie entry; permanently overrides estimation for this entry."""
        self.manual_calories = True
        self._debouncer.cancel()
        self.calories = max(0, int(to_number(kcal)))

    def add_strength(self, name: str, sets: int, reps: int, weight: float = 0.0) -> ExerciseLog:
        if not name:
            raise ValueError("Exercise name is required")
        sets, reps = int(to_number(sets)), int(to_number(reps))
        if sets <= 0 or reps <= 0:
            raise ValueError("Strength exercises need at least one set of one rep")
        exercise = ExerciseLog(
            name=name,
            type=ExerciseType.STRENGTH,
            sets=[ExerciseSet(weight=weight, reps=reps) for _ in range(sets)],
        )
        self.exercises.append(exercise)
        self._schedule_estimate()
        return exercise

    def add_cardio(
        self,
        name: str,
        minutes: float,
        category: Optional[CardioCategory] = None,
        speed: Optional[float] = None,
        incline: Optional[float] = None,
        level: Optional[float] = None,
        resistance: Optional[float] = None,
    ) -> ExerciseLog:
        """Add a cardio block; its minutes are added to the session duration."""
        if not name:
            raise ValueError("Exercise name is required")
        minutes = to_number(minutes)
        if minutes <= 0:
            raise ValueError("Cardio exercises need a positive duration")
        exercise = ExerciseLog(
            name=name,
            type=ExerciseType.CARDIO,
            category=category,
            sets=[
                ExerciseSet(
                    duration=minutes,
                    speed=speed,
                    incline=incline,
                    level=level,
                    resistance=resistance,
                )
            ],
        )
        self.exercises.append(exercise)
        self.duration += minutes
        self._schedule_estimate()
        return exercise

    # -- estimation -----------------------------------------------------

    @property
    def estimate_pending(self) -> bool:
        return self._debouncer.pending

    def estimate(self) -> int:
        return estimate_calories(self.duration, self.body_weight, self.exercises, self.exercise_type)

    def _apply_estimate(self) -> None:
        if self.manual_calories or self.duration <= 0:
            return
        self.calories = self.estimate()
        logger.debug(f"Estimated {self.calories} kcal for {self.duration} min")

    def _schedule_estimate(self) -> None:
        if self.manual_calories:
            return
        try:
            self._debouncer.schedule()
        except RuntimeError:
            # No running event loop: estimate synchronously.
            self._apply_estimate()

    def flush(self) -> None:
        """Apply a pending estimate now instead of waiting for the debounce."""
        if self._debouncer.pending:
            self._debouncer.cancel()
            self._apply_estimate()

    # -- output ---------------------------------------------------------

    def build_log(self, now: Optional[datetime] = None) -> WorkoutLog:
        """Create the log; the entry's day combined with the current time of day."""
        if not self.title or self.duration <= 0:
            raise ValueError("A workout needs a title and a positive duration")
        self.flush()
        now = now or datetime.now()
        return WorkoutLog(
            date=datetime.combine(self.day, now.time()),
            title=self.title,
            duration=self.duration,
            calories=self.calories,
            notes=self.notes,
            exercises=list(self.exercises),
        )

    def close(self) -> None:
        self._debouncer.cancel()
