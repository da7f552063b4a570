"""Workout plan schemas."""

from typing import List

from pydantic import BaseModel, Field

from fitgenius.schemas.enums import GoalType


class DailyPlan(BaseModel):
    """One day of a weekly plan."""
    day: str = Field(..., description="Day label, e.g. Monday")
    focus: str = Field(..., description="Training focus, e.g. chest strength")
    exercises: List[str] = Field(..., description="Exercise names with suggested sets and reps")
    duration: float = Field(..., description="Expected duration in minutes")
    notes: str = Field(..., description="Coaching notes")


class PlanDraft(BaseModel):
    """Plan as returned by the model, before the goal is attached."""
    title: str = Field(..., description="Plan title")
    schedule: List[DailyPlan] = Field(..., description="Seven daily entries")


class WorkoutPlan(PlanDraft):
    """Active training plan."""
    goal: GoalType = Field(..., description="Goal the plan was generated for")
