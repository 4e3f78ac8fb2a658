"""
Meal plan and recipe routes.
"""
from fastapi import APIRouter, Query, Request

from dedlift.core.errors import UpstreamError, UpstreamFailure
from dedlift.core.limiter import limiter
from dedlift.core.logger import log_request, log_error
from dedlift.models.nutrition import MealPlanRequest, MealPlanResponse, UserPreferences
from dedlift.models.schemas import ErrorResponse
from dedlift.services import meal_planner, spoonacular_service

router = APIRouter(responses={500: {"model": ErrorResponse}})


@router.post("/api/meal-plan")
@limiter.limit("30/minute")
async def meal_plan_proxy(request: Request, req: MealPlanRequest):
    """
    Forward a meal plan request to the recipe service.

    Returns the upstream JSON untouched.
    """
    log_request("/api/meal-plan")

    try:
        return await spoonacular_service.generate_meal_plan(req)
    except UpstreamError:
        raise
    except Exception as e:
        log_error("Meal plan proxy", e)
        raise UpstreamFailure(f"Failed to generate meal plan: {e}")


@router.get("/api/recipe-info")
@limiter.limit("60/minute")
async def recipe_info_proxy(request: Request, recipe_id: str | None = Query(None, alias="id")):
    """Recipe details, nutrition included."""
    log_request("/api/recipe-info", method="GET")

    try:
        return await spoonacular_service.get_recipe_info(recipe_id)
    except UpstreamError:
        raise
    except Exception as e:
        log_error("Recipe info proxy", e)
        raise UpstreamFailure(f"Failed to fetch recipe info: {e}")


@router.post("/generate-meal-plan", response_model=MealPlanResponse)
@limiter.limit("10/minute")
async def generate_meal_plan(request: Request, req: UserPreferences):
    """
    Generate breakfast, lunch and dinner for the user's preferences.

    Always answers with three meals; upstream failures show up as
    placeholder meals describing the error.
    """
    log_request("/generate-meal-plan")

    meals = await meal_planner.generate_meal_plan(req)
    return MealPlanResponse(meals=meals)
