"""Derived workout metrics: calorie estimation, same-day merge, weight trend.

Everything here is pure and synchronous. Inputs may be schema models or
plain dicts straight from the backend; missing or non-numeric values count as
zero instead of raising.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from fitgenius.schemas.enums import CardioCategory, ExerciseType, GoalType
from fitgenius.schemas.workout_log import WorkoutLog
from fitgenius.utils.helpers import get_field, local_day, parse_datetime, round_half_up, to_number

STRENGTH_MET = 4.5
CARDIO_MET = 8.0
REST_MET = 2.5
MIN_MET = 1.0
STRENGTH_SET_MINUTES = 1.5
NOTES_SEPARATOR = " | "

# Base MET per cardio modality, before intensity adjustments.
CARDIO_BASE_METS = {
    CardioCategory.RUNNING: 8.0,
    CardioCategory.INCLINE_WALK: 5.0,
    CardioCategory.STAIRMASTER: 8.0,
    CardioCategory.CYCLING: 6.8,
    CardioCategory.ELLIPTICAL: 5.0,
    CardioCategory.ROWING: 7.0,
    CardioCategory.SWIMMING: 7.0,
    CardioCategory.JUMP_ROPE: 10.0,
}

RUNNING_REFERENCE_SPEED = 8.0  # km/h


def _kcal(met: float, body_weight: float, minutes: float) -> float:
    return met * body_weight * (minutes / 60)


def _category(value: Any) -> Optional[CardioCategory]:
    if value is None:
        return None
    try:
        return CardioCategory(get_field(value, "value", value))
    except ValueError:
        return None


def _exercise_type(value: Any) -> ExerciseType:
    try:
        return ExerciseType(get_field(value, "value", value))
    except ValueError:
        return ExerciseType.STRENGTH


def base_met(exercise_type: Any) -> float:
    """MET for a session with nothing logged yet, from the selected tab."""
    return CARDIO_MET if _exercise_type(exercise_type) == ExerciseType.CARDIO else STRENGTH_MET


def cardio_met(category: Any, exercise_set: Any) -> float:
    """MET for one cardio set, adjusted by the modality's intensity parameter."""
    cat = _category(category)
    met = CARDIO_BASE_METS.get(cat, CARDIO_MET)

    if cat == CardioCategory.RUNNING:
        speed = get_field(exercise_set, "speed")
        if speed is not None:
            met += (to_number(speed) - RUNNING_REFERENCE_SPEED) * 0.5
    elif cat == CardioCategory.INCLINE_WALK:
        met += to_number(get_field(exercise_set, "incline")) * 0.4
    elif cat == CardioCategory.STAIRMASTER:
        met += to_number(get_field(exercise_set, "level")) * 0.3
    elif cat == CardioCategory.CYCLING:
        met += to_number(get_field(exercise_set, "resistance")) * 0.3
    elif cat == CardioCategory.ELLIPTICAL:
        met += to_number(get_field(exercise_set, "resistance")) * 0.2

    return max(MIN_MET, met)


def estimate_calories(
    duration: Any,
    body_weight: Any,
    exercises: Optional[Sequence[Any]] = None,
    exercise_type: Any = ExerciseType.STRENGTH,
) -> int:
    """Estimate kcal for a session.

    Without exercises the whole duration is charged at the tab's base MET.
    With exercises, cardio sets and strength sets (1.5 active minutes each)
    form the active time; whatever remains of ``duration`` is rest at MET 2.5.
    """
    minutes = max(0.0, to_number(duration))
    weight = max(0.0, to_number(body_weight))
    exercises = list(exercises or [])

    if not exercises:
        return round_half_up(_kcal(base_met(exercise_type), weight, minutes))

    active_minutes = 0.0
    total = 0.0
    for exercise in exercises:
        sets = get_field(exercise, "sets") or []
        if _exercise_type(get_field(exercise, "type")) == ExerciseType.CARDIO:
            category = get_field(exercise, "category")
            for exercise_set in sets:
                set_minutes = max(0.0, to_number(get_field(exercise_set, "duration")))
                active_minutes += set_minutes
                total += _kcal(cardio_met(category, exercise_set), weight, set_minutes)
        else:
            set_minutes = len(sets) * STRENGTH_SET_MINUTES
            active_minutes += set_minutes
            total += _kcal(STRENGTH_MET, weight, set_minutes)

    rest_minutes = max(0.0, minutes - active_minutes)
    total += _kcal(REST_MET, weight, rest_minutes)
    return round_half_up(total)


def same_day(first: Any, second: Any) -> bool:
    """Whether two timestamps fall on the same local calendar day."""
    a, b = local_day(first), local_day(second)
    return a is not None and a == b


def merge_logs(existing: WorkoutLog, incoming: WorkoutLog) -> WorkoutLog:
    """Fold ``incoming`` into ``existing``; id, title and date stay from ``existing``."""
    notes = existing.notes
    if incoming.notes:
        notes = f"{notes}{NOTES_SEPARATOR}{incoming.notes}"
    return existing.model_copy(
        update={
            "duration": existing.duration + incoming.duration,
            "calories": existing.calories + incoming.calories,
            "exercises": [*existing.exercises, *incoming.exercises],
            "notes": notes,
        }
    )


def merge_log_into(logs: Sequence[WorkoutLog], incoming: WorkoutLog) -> List[WorkoutLog]:
    """Return a new most-recent-first list with ``incoming`` merged or prepended."""
    updated = list(logs)
    for index, existing in enumerate(updated):
        if same_day(existing.date, incoming.date):
            updated[index] = merge_logs(existing, incoming)
            return updated
    return [incoming, *updated]


class WeightTrend(BaseModel):
    """Change of body weight against the earliest recorded sample."""
    model_config = ConfigDict(frozen=True)

    baseline: float
    current: float
    delta: float

    @property
    def formatted(self) -> str:
        return f"{self.delta:+.1f}"

    def is_favorable(self, goal: Optional[GoalType] = None) -> bool:
        """Display framing: a gain is favorable for muscle gain, a loss otherwise."""
        if goal == GoalType.MUSCLE_GAIN:
            return self.delta >= 0
        return self.delta <= 0


def _sample_date(entry: Any) -> datetime:
    parsed = parse_datetime(get_field(entry, "date"))
    if parsed is None:
        return datetime.min
    # Compare aware and naive samples on one axis.
    return parsed.replace(tzinfo=None) if parsed.tzinfo is None else parsed.astimezone().replace(tzinfo=None)


def sorted_history(history: Optional[Iterable[Any]]) -> List[Any]:
    """Weight samples in ascending date order."""
    return sorted(history or [], key=_sample_date)


def weight_trend(history: Optional[Iterable[Any]], current_weight: Any) -> WeightTrend:
    """Delta between ``current_weight`` and the earliest sample (zero without history)."""
    current = to_number(current_weight)
    samples = sorted_history(history)
    baseline = to_number(get_field(samples[0], "weight")) if samples else current
    delta = round(current - baseline, 1) + 0.0  # normalizes -0.0
    return WeightTrend(baseline=baseline, current=current, delta=delta)
