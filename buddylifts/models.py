"""Pydantic models for BuddyLifts: parsed exercises, DB rows, and tool inputs/outputs."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

INPUT_MIN_LENGTH = 3
INPUT_MAX_LENGTH = 500

# Largest value an SQLite INTEGER column holds
MAX_COUNT = 2**63 - 1


# --- Shape matching ---

ShapeName = Literal["count_by_count", "rep_list", "words"]


class ShapeMatch(BaseModel):
    """Fields captured by one shape recognizer, before name normalization."""
    shape: ShapeName
    span: str  # substring matched by the shape itself (any lead-in excluded)
    raw_name: str
    target_sets: int
    target_reps: int
    weight: Optional[float] = None
    rest_seconds: Optional[int] = None
    completed_reps: Optional[list[int]] = None


# --- Parser output ---

class ParsedExercise(BaseModel):
    """One exercise recognized in free text. Transient: never stored as-is."""
    name: str = Field(..., min_length=1)
    target_sets: int = Field(..., ge=1, le=MAX_COUNT)
    target_reps: int = Field(..., ge=1, le=MAX_COUNT)
    weight: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)  # unit-agnostic
    rest_seconds: Optional[int] = Field(default=None, ge=1, le=MAX_COUNT)
    completed_reps: Optional[list[int]] = None  # only for "10,10,8,6" style input

    @model_validator(mode="after")
    def _check_completed_reps(self) -> "ParsedExercise":
        if self.completed_reps is not None:
            if len(self.completed_reps) != self.target_sets:
                raise ValueError("completed_reps must have one entry per set")
            if any(r < 0 or r > MAX_COUNT for r in self.completed_reps):
                raise ValueError("completed_reps must be non-negative and fit in storage")
        return self


class ExerciseRow(BaseModel):
    """Persistence-ready exercise: parsed fields plus 0-based order."""
    name: str
    target_sets: int
    target_reps: int
    weight: Optional[float] = None
    order: int = Field(..., ge=0)
    rest_seconds: Optional[int] = None


class PersistedExercise(ExerciseRow):
    exercise_id: str
    training_id: str


class Training(BaseModel):
    training_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None


# --- Tool inputs/outputs ---

class ParseExercisesInput(BaseModel):
    input: str = Field(..., min_length=INPUT_MIN_LENGTH, max_length=INPUT_MAX_LENGTH)


class ParseExercisesOutput(BaseModel):
    exercises: list[ExerciseRow] = Field(default_factory=list)
    count: int = 0


class ParseAndCreateInput(BaseModel):
    user_id: str
    training_id: str
    input: str = Field(..., min_length=INPUT_MIN_LENGTH, max_length=INPUT_MAX_LENGTH)
    replace_existing: bool = False  # delete the training's exercises first


class ParseAndCreateOutput(BaseModel):
    exercises: list[PersistedExercise] = Field(default_factory=list)
    count: int = 0


class CreateTrainingInput(BaseModel):
    user_id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
