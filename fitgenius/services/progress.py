"""Dashboard and per-exercise progress aggregation over workout logs."""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from fitgenius.schemas.enums import ExerciseType
from fitgenius.utils.helpers import get_field, parse_datetime, to_number

DAILY_CALORIE_GOAL = 500
DAILY_DURATION_GOAL = 60
CHART_WINDOW = 7


class ChartPoint(BaseModel):
    date: Optional[str]
    calories: float
    minutes: float


class DashboardSummary(BaseModel):
    total_workouts: int
    total_minutes: float
    total_calories: float
    latest_calories: float
    latest_minutes: float
    calorie_progress: float
    duration_progress: float
    chart: List[ChartPoint] = Field(default_factory=list)


class ProgressPoint(BaseModel):
    date: Optional[str]
    value: float
    unit: str


def _percent(value: float, goal: float) -> float:
    if goal <= 0:
        return 0.0
    return min(value / goal * 100, 100.0)


def _iso_date(value: Any) -> Optional[str]:
    parsed = parse_datetime(value)
    return parsed.date().isoformat() if parsed else None


def _is_cardio(exercise: Any) -> bool:
    kind = get_field(exercise, "type")
    return get_field(kind, "value", kind) == ExerciseType.CARDIO.value


def summarize(logs: Optional[Sequence[Any]]) -> DashboardSummary:
    """Totals plus today-style rings from the most recent log (logs are newest first)."""
    logs = list(logs or [])
    total_minutes = sum(to_number(get_field(log, "duration")) for log in logs)
    total_calories = sum(to_number(get_field(log, "calories")) for log in logs)

    latest_calories = to_number(get_field(logs[0], "calories")) if logs else 0.0
    latest_minutes = to_number(get_field(logs[0], "duration")) if logs else 0.0

    chart = [
        ChartPoint(
            date=_iso_date(get_field(log, "date")),
            calories=to_number(get_field(log, "calories")),
            minutes=to_number(get_field(log, "duration")),
        )
        for log in reversed(logs[:CHART_WINDOW])
    ]

    return DashboardSummary(
        total_workouts=len(logs),
        total_minutes=total_minutes,
        total_calories=total_calories,
        latest_calories=latest_calories,
        latest_minutes=latest_minutes,
        calorie_progress=_percent(latest_calories, DAILY_CALORIE_GOAL),
        duration_progress=_percent(latest_minutes, DAILY_DURATION_GOAL),
        chart=chart,
    )


def exercise_names(logs: Optional[Sequence[Any]]) -> List[str]:
    """Distinct exercise names in first-seen order."""
    seen = []
    for log in logs or []:
        for exercise in get_field(log, "exercises") or []:
            name = get_field(exercise, "name")
            if name and name not in seen:
                seen.append(name)
    return seen


def is_mainly_cardio(logs: Optional[Sequence[Any]], name: str) -> bool:
    instances = [
        exercise
        for log in logs or []
        for exercise in get_field(log, "exercises") or []
        if get_field(exercise, "name") == name
    ]
    cardio = sum(1 for exercise in instances if _is_cardio(exercise))
    return cardio > len(instances) / 2


def exercise_history(logs: Optional[Sequence[Any]], name: str) -> List[ProgressPoint]:
    """Progress of one exercise, oldest first.

    Strength entries report the heaviest set; cardio entries report the
    first set's duration.
    """
    points = []
    for log in logs or []:
        exercise = next(
            (e for e in get_field(log, "exercises") or [] if get_field(e, "name") == name),
            None,
        )
        if exercise is None:
            continue
        sets = get_field(exercise, "sets") or []
        if _is_cardio(exercise):
            value = to_number(get_field(sets[0], "duration")) if sets else 0.0
            unit = "min"
        else:
            value = max((to_number(get_field(s, "weight")) for s in sets), default=0.0)
            unit = "kg"
        points.append(ProgressPoint(date=_iso_date(get_field(log, "date")), value=value, unit=unit))
    points.reverse()
    return points
