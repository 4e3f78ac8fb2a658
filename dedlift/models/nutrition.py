"""
Pydantic models for meal-plan requests and responses.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

MealType = Literal["breakfast", "lunch", "dinner"]


class UserPreferences(BaseModel):
    """Preferences submitted from the meal plan form."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    gender: str = Field(..., min_length=1)
    weight: float = Field(..., gt=0, description="Weight in kg")
    fitnessGoal: str = Field(..., min_length=1, examples=["Weight Loss", "Muscle Gain"])
    dietaryPreferences: list[str] = Field(default=[], description="e.g., Vegan, Keto")
    allergies: list[str] = Field(default=[], description="e.g., Peanut Allergy")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Sam",
                "age": 28,
                "gender": "Female",
                "weight": 60,
                "fitnessGoal": "Weight Loss",
                "dietaryPreferences": ["Vegetarian"],
                "allergies": ["Peanut Allergy"]
            }
        }


class MealPlanRequest(BaseModel):
    """Parameters forwarded to the recipe service's meal-plan generator."""

    targetCalories: Optional[int] = Field(None, ge=0)
    timeFrame: str = Field(default="day")
    diet: Optional[str] = None
    exclude: Optional[str] = Field(None, description="Comma separated ingredients")
    number: Optional[int] = Field(None, ge=1)
    nutrients: Optional[dict[str, float]] = Field(None, description="e.g., minProtein, maxCarbs")


class Meal(BaseModel):
    """Single meal filling one slot of the day."""

    id: str
    type: MealType
    name: str
    image: str
    protein: int = Field(default=0, ge=0)
    carbs: int = Field(default=0, ge=0)
    calories: int = Field(default=0, ge=0)
    description: Optional[str] = None
    preparationTime: Optional[str] = None
    servingSize: Optional[str] = None

    class Config:
        frozen = True


class MealPlanResponse(BaseModel):
    """API wrapper response for meal plan generation."""

    status: str = "success"
    meals: list[Meal]
