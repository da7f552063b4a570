"""Enums for profile, goal and exercise fields."""

from enum import Enum


class GoalType(str, Enum):
    """Training goal."""
    WEIGHT_LOSS = "weight-loss"
    MUSCLE_GAIN = "muscle-gain"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    GENERAL_HEALTH = "general-health"


class FitnessLevel(str, Enum):
    """Self-reported training experience."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExerciseType(str, Enum):
    """Exercise variant tag."""
    STRENGTH = "strength"
    CARDIO = "cardio"


class CardioCategory(str, Enum):
    """Cardio modality; selects the base MET and its intensity adjustment."""
    RUNNING = "running"
    INCLINE_WALK = "incline_walk"
    STAIRMASTER = "stairmaster"
    CYCLING = "cycling"
    ELLIPTICAL = "elliptical"
    ROWING = "rowing"
    SWIMMING = "swimming"
    JUMP_ROPE = "jump_rope"
