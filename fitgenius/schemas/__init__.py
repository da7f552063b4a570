"""Schemas for profile, logs, plans and AI outputs."""

from fitgenius.schemas.enums import CardioCategory, ExerciseType, FitnessLevel, GoalType
from fitgenius.schemas.workout_log import ExerciseLog, ExerciseSet, WorkoutLog
from fitgenius.schemas.user import UserProfile, WeightEntry
from fitgenius.schemas.plan import DailyPlan, PlanDraft, WorkoutPlan
from fitgenius.schemas.ai_outputs import (
    AIAdvice,
    ExerciseInsight,
    MuscleBalance,
    PhysiologicalAnalysis,
    ReportMetrics,
    TrainingReport,
)
from fitgenius.schemas.auth import Credentials, TokenResponse, WeightUpdate

__all__ = [
    "CardioCategory",
    "ExerciseType",
    "FitnessLevel",
    "GoalType",
    "ExerciseLog",
    "ExerciseSet",
    "WorkoutLog",
    "UserProfile",
    "WeightEntry",
    "DailyPlan",
    "PlanDraft",
    "WorkoutPlan",
    "AIAdvice",
    "ExerciseInsight",
    "MuscleBalance",
    "PhysiologicalAnalysis",
    "ReportMetrics",
    "TrainingReport",
    "Credentials",
    "TokenResponse",
    "WeightUpdate",
]
