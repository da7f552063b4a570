"""Structured outputs requested from the language model."""

from typing import List

from pydantic import BaseModel, Field


class AIAdvice(BaseModel):
    """Feedback on recent training."""
    summary: str = Field(..., description="Summary of recent performance")
    strengths: List[str] = Field(..., description="What went well")
    improvements: List[str] = Field(..., description="What needs improvement")
    next_step: str = Field(..., description="Concrete advice for the next session")


class ReportMetrics(BaseModel):
    consistency: int = Field(..., ge=0, le=100)
    variety: int = Field(..., ge=0, le=100)
    overload: int = Field(..., ge=0, le=100, description="Progressive overload")
    execution: int = Field(..., ge=0, le=100, description="Estimated technique quality")


class MuscleBalance(BaseModel):
    push: int = Field(..., ge=0, le=100)
    pull: int = Field(..., ge=0, le=100)
    legs: int = Field(..., ge=0, le=100)
    core: int = Field(..., ge=0, le=100)


class PhysiologicalAnalysis(BaseModel):
    current_phase: str = Field(..., description="e.g. neural adaptation, hypertrophy")
    current_phase_desc: str
    future_projection: str
    future_projection_desc: str


class TrainingReport(BaseModel):
    """Detailed training report."""
    score: int = Field(..., ge=0, le=100, description="Overall score 0-100")
    level: str = Field(..., description="Rating, e.g. excellent, good")
    metrics: ReportMetrics
    muscle_balance: MuscleBalance
    physiological_analysis: PhysiologicalAnalysis
    recommendations: List[str]


class ExerciseInsight(BaseModel):
    """Technique notes for a single exercise."""
    exercise_name: str
    target_muscles: List[str]
    technical_points: List[str] = Field(..., description="Four or five key technique cues")
    physiological_principle: str
