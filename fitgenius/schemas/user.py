"""User profile schema."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

from fitgenius.schemas.enums import FitnessLevel, GoalType
from fitgenius.utils.helpers import to_number


class WeightEntry(BaseModel):
    """A body-weight sample."""
    date: datetime = Field(..., description="When the weight was recorded")
    weight: float = Field(..., description="Body weight in kg")

    @field_validator("weight", mode="before")
    @classmethod
    def _coerce_weight(cls, value):
        return to_number(value)


class UserProfile(BaseModel):
    """User profile with optional weight history (any order)."""
    name: str = Field("Athlete", description="Display name")
    age: int = Field(28, description="Age in years")
    weight: float = Field(75.0, description="Current body weight in kg")
    height: float = Field(180.0, description="Height in cm")
    goal: GoalType = Field(GoalType.MUSCLE_GAIN, description="Training goal")
    fitness_level: FitnessLevel = Field(FitnessLevel.INTERMEDIATE, description="Training experience")
    weight_history: List[WeightEntry] = Field(default_factory=list)

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value):
        return int(to_number(value))

    @field_validator("weight", "height", mode="before")
    @classmethod
    def _coerce_measurements(cls, value):
        return to_number(value)
