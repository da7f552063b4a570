"""Tests for calorie estimation, same-day merging and weight trend."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from conftest import make_log, strength
from fitgenius.schemas import ExerciseLog, ExerciseSet, ExerciseType, GoalType, WeightEntry
from fitgenius.schemas.enums import CardioCategory
from fitgenius.services.metrics import (
    WeightTrend,
    cardio_met,
    estimate_calories,
    merge_log_into,
    merge_logs,
    same_day,
    sorted_history,
    weight_trend,
)


def cardio(category, minutes, **intensity):
    return ExerciseLog(
        name=category.value,
        type=ExerciseType.CARDIO,
        category=category,
        sets=[ExerciseSet(duration=minutes, **intensity)],
    )


class TestEstimateCalories:
    def test_strength_tab_without_exercises(self):
        assert estimate_calories(60, 70) == 315

    def test_cardio_tab_without_exercises(self):
        assert estimate_calories(30, 70, exercise_type=ExerciseType.CARDIO) == 280

    def test_strength_sets_plus_rest(self):
        # 3 sets = 4.5 active minutes at MET 4.5, 55.5 rest minutes at MET 2.5
        assert estimate_calories(60, 80, [strength("Squat", sets=3)]) == 212

    def test_running_speed_raises_met(self):
        run = cardio(CardioCategory.RUNNING, 30, speed=10)
        assert estimate_calories(30, 70, [run]) == 315

    def test_stairmaster_level(self):
        climb = cardio(CardioCategory.STAIRMASTER, 20, level=5)
        assert estimate_calories(20, 60, [climb]) == 190

    def test_accepts_plain_dicts(self):
        exercises = [{"name": "Row", "type": "strength", "sets": [{"weight": 40, "reps": 10}] * 3}]
        assert estimate_calories("60", "80", exercises) == 212

    def test_monotonic_in_duration(self):
        exercises = [strength("Bench", sets=4)]
        previous = -1
        for minutes in range(0, 120, 5):
            value = estimate_calories(minutes, 75, exercises)
            assert value >= previous
            previous = value

    def test_monotonic_in_body_weight(self):
        assert estimate_calories(45, 60) <= estimate_calories(45, 90)

    @pytest.mark.parametrize("duration, weight", [
        (None, 70), ("abc", 70), (30, None), (float("nan"), 70), (-10, 70),
    ])
    def test_malformed_inputs_give_zero(self, duration, weight):
        assert estimate_calories(duration, weight) == 0

    def test_active_time_beyond_duration_charges_no_rest(self):
        assert estimate_calories(0, 80, [strength("Squat", sets=2)]) == 18


class TestCardioMet:
    def test_met_never_drops_below_one(self):
        assert cardio_met(CardioCategory.RUNNING, {"speed": 0}) == 4.0
        assert cardio_met(CardioCategory.RUNNING, {"speed": -20}) == 1.0

    def test_running_without_speed_uses_base(self):
        assert cardio_met("running", {}) == 8.0

    def test_unknown_category_uses_cardio_default(self):
        assert cardio_met("trampoline", {}) == 8.0

    def test_incline_walk(self):
        assert cardio_met(CardioCategory.INCLINE_WALK, {"incline": 10}) == pytest.approx(9.0)


class TestMerge:
    def test_same_day_logs_merge(self):
        day = datetime(2024, 1, 1, 9, 0)
        existing = make_log(day, duration=30, calories=200, notes="x",
                            exercises=[strength("A")], log_id="first")
        incoming = make_log(day.replace(hour=18), duration=20, calories=100, notes="y",
                            exercises=[strength("B")], log_id="second")

        merged = merge_log_into([existing], incoming)

        assert len(merged) == 1
        log = merged[0]
        assert log.id == "first"
        assert log.duration == 50
        assert log.calories == 300
        assert [e.name for e in log.exercises] == ["A", "B"]
        assert log.notes == "x | y"

    def test_different_day_is_prepended(self):
        existing = make_log(datetime(2024, 1, 1, 9, 0), log_id="old")
        incoming = make_log(datetime(2024, 1, 2, 9, 0), log_id="new")
        merged = merge_log_into([existing], incoming)
        assert [log.id for log in merged] == ["new", "old"]

    def test_empty_incoming_notes_keep_existing(self):
        day = datetime(2024, 1, 1, 9, 0)
        log = merge_logs(make_log(day, notes="x"), make_log(day, notes=""))
        assert log.notes == "x"

    def test_empty_existing_notes_still_joined(self):
        day = datetime(2024, 1, 1, 9, 0)
        log = merge_logs(make_log(day, notes=""), make_log(day, notes="y"))
        assert log.notes == " | y"

    def test_input_list_is_not_mutated(self):
        day = datetime(2024, 1, 1, 9, 0)
        logs = [make_log(day, duration=30)]
        merge_log_into(logs, make_log(day, duration=10))
        assert logs[0].duration == 30

    def test_merge_into_empty_list(self):
        incoming = make_log(datetime(2024, 1, 1))
        assert merge_log_into([], incoming) == [incoming]

    def test_same_day_uses_local_time(self):
        noon_utc = datetime(2024, 5, 5, 12, 0, tzinfo=timezone.utc)
        assert same_day(noon_utc, noon_utc.astimezone().replace(tzinfo=None))
        assert not same_day(datetime(2024, 5, 5), datetime(2024, 5, 6))
        assert not same_day(None, None)


class TestWeightTrend:
    def test_delta_against_earliest_sample(self):
        history = [
            WeightEntry(date=datetime(2024, 2, 1), weight=78),
            WeightEntry(date=datetime(2024, 1, 1), weight=80),
        ]
        trend = weight_trend(history, 77)
        assert trend.baseline == 80
        assert trend.delta == -3.0
        assert trend.formatted == "-3.0"
        assert trend.is_favorable(GoalType.WEIGHT_LOSS)
        assert not trend.is_favorable(GoalType.MUSCLE_GAIN)

    def test_no_history_means_no_change(self):
        trend = weight_trend([], 72.5)
        assert trend.delta == 0.0
        assert trend.formatted == "+0.0"

    def test_gain_formats_with_plus_sign(self):
        history = [{"date": "2024-01-01T08:00:00Z", "weight": 70}]
        trend = weight_trend(history, 71.26)
        assert trend.formatted == "+1.3"
        assert trend.is_favorable(GoalType.MUSCLE_GAIN)

    def test_sorted_history_orders_by_date(self):
        start = datetime(2024, 1, 1)
        history = [{"date": start + timedelta(days=d), "weight": w} for d, w in [(3, 70), (0, 72), (1, 71)]]
        assert [entry["weight"] for entry in sorted_history(history)] == [72, 71, 70]

    def test_trend_is_immutable(self):
        trend = WeightTrend(baseline=80, current=79, delta=-1.0)
        with pytest.raises(ValidationError):
            trend.delta = 0
