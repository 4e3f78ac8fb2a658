"""
Pydantic models for workout-related requests and responses.
Provides runtime validation and auto-documentation.
"""
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field, computed_field, model_validator


class WorkoutPreferences(BaseModel):
    """Request model for workout plan generation."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    weight: float = Field(..., gt=0)
    fitnessGoal: str = Field(..., min_length=1)
    workoutType: Literal["muscle", "week", "full_body"] = Field(default="week")
    muscle: Optional[str] = Field(None, description="Target muscle, required for 'muscle' plans")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Alex",
                "age": 31,
                "weight": 82,
                "fitnessGoal": "Muscle Gain",
                "workoutType": "muscle",
                "muscle": "chest"
            }
        }

    @model_validator(mode="after")
    def muscle_required_for_muscle_plans(self):
        if self.workoutType == "muscle" and not (self.muscle and self.muscle.strip()):
            raise ValueError("muscle is required when workoutType is 'muscle'")
        return self


class Workout(BaseModel):
    """Single exercise card."""

    id: str
    name: str
    type: str
    muscle: str
    equipment: str
    difficulty: str
    instructions: str
    image: str
    exerciseId: Optional[str] = None

    class Config:
        frozen = True


class DayStatus(str, Enum):
    """Why a day has the workouts it has."""

    REST = "rest"
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


class DayWorkout(BaseModel):
    """One entry of the weekly schedule."""

    day: str
    focus: str
    muscles: list[str]
    workouts: list[Workout] = []
    status: DayStatus = DayStatus.COMPLETE
    errors: list[str] = []

    @computed_field
    @property
    def needs_retry(self) -> bool:
        return self.status == DayStatus.FAILED


class MuscleFetchResult(BaseModel):
    """Outcome of one catalog lookup."""

    muscle: str
    exercises: list[dict] = []
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WorkoutPlanResponse(BaseModel):
    """API wrapper response for workout plan generation."""

    status: str = "success"
    workoutType: str
    workouts: list[Workout] = []
    days: list[DayWorkout] = []
