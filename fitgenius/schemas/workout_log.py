"""Workout log schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from fitgenius.schemas.enums import CardioCategory, ExerciseType
from fitgenius.utils.helpers import to_number


class ExerciseSet(BaseModel):
    """One set. Strength sets use weight/reps, cardio sets use duration and intensity."""
    weight: float = Field(0.0, description="Load in kg, 0 means bodyweight")
    reps: int = Field(0, description="Repetitions")
    duration: Optional[float] = Field(None, description="Cardio duration in minutes")
    speed: Optional[float] = Field(None, description="Treadmill speed in km/h")
    incline: Optional[float] = Field(None, description="Incline in percent")
    level: Optional[float] = Field(None, description="Machine level (stairmaster)")
    resistance: Optional[float] = Field(None, description="Resistance setting (bike, elliptical)")

    @field_validator("weight", mode="before")
    @classmethod
    def _coerce_weight(cls, value):
        return max(0.0, to_number(value))

    @field_validator("reps", mode="before")
    @classmethod
    def _coerce_reps(cls, value):
        return max(0, int(to_number(value)))

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value):
        if value is None:
            return None
        return max(0.0, to_number(value))

    @field_validator("speed", "incline", "level", "resistance", mode="before")
    @classmethod
    def _coerce_intensity(cls, value):
        if value is None or value == "":
            return None
        return to_number(value)


class ExerciseLog(BaseModel):
    """A logged exercise with its ordered sets."""
    name: str = Field(..., description="Exercise name")
    type: ExerciseType = Field(ExerciseType.STRENGTH, description="strength or cardio")
    sets: List[ExerciseSet] = Field(default_factory=list)
    category: Optional[CardioCategory] = Field(None, description="Cardio modality")


class WorkoutLog(BaseModel):
    """One training session; at most one per calendar day."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: datetime = Field(..., description="Session timestamp, the calendar day is what matters")
    title: str = Field(..., description="Session title")
    duration: float = Field(0.0, description="Duration in minutes")
    calories: int = Field(0, description="Estimated or entered kcal")
    notes: str = Field("", description="Free-text notes")
    exercises: List[ExerciseLog] = Field(default_factory=list)

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value):
        return max(0.0, to_number(value))

    @field_validator("calories", mode="before")
    @classmethod
    def _coerce_calories(cls, value):
        return max(0, int(round(to_number(value))))

    @field_validator("notes", mode="before")
    @classmethod
    def _coerce_notes(cls, value):
        return "" if value is None else str(value)
