"""
Recipe and meal-plan lookups against the Spoonacular API.
"""
from urllib.parse import quote

import httpx

from dedlift.core.config import settings
from dedlift.core.errors import (
    ConfigurationError,
    MissingParameterError,
    UpstreamFailure,
    error_from_response,
)
from dedlift.core.logger import logger, log_upstream_call, log_error
from dedlift.models.nutrition import MealPlanRequest


client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT)


def _api_key() -> str:
    if not settings.SPOONACULAR_API_KEY:
        raise ConfigurationError("Spoonacular API key not configured")
    return settings.SPOONACULAR_API_KEY


def build_meal_plan_params(req: MealPlanRequest, api_key: str) -> dict[str, str]:
    """
    Translate a meal plan request into upstream query parameters.

    Blank diet/exclude values are left out; nutrient bounds become
    `nutrients[<name>]` parameters.
    """
    params = {
        "apiKey": api_key,
        "timeFrame": req.timeFrame or "day",
        "targetCalories": str(req.targetCalories or settings.DEFAULT_TARGET_CALORIES),
        "number": str(req.number or settings.MEALS_PER_DAY),
    }

    if req.diet and req.diet.strip():
        params["diet"] = req.diet
    if req.exclude and req.exclude.strip():
        params["exclude"] = req.exclude

    for key, value in (req.nutrients or {}).items():
        params[f"nutrients[{key}]"] = str(value)

    return params


async def generate_meal_plan(req: MealPlanRequest) -> dict:
    """
    Generate a meal plan for one time frame.

    Args:
        req: Calories, diet and exclusion parameters

    Returns:
        Upstream JSON with `meals` and `nutrients`

    Raises:
        ConfigurationError: If no API key is configured
        UpstreamError: If the upstream answers with a non-success status
        UpstreamFailure: On transport errors
    """
    params = build_meal_plan_params(req, _api_key())
    url = f"{settings.SPOONACULAR_BASE_URL}/mealplanner/generate"
    log_upstream_call("Spoonacular", "/mealplanner/generate")

    try:
        response = await client.get(url, params=params)
    except httpx.HTTPError as e:
        log_error("Spoonacular meal plan", e)
        raise UpstreamFailure(f"Failed to generate meal plan: {e}")

    if not response.is_success:
        error = error_from_response(response)
        logger.error(f"Spoonacular API error: {response.status_code} {response.reason_phrase}")
        raise error

    logger.info("Successfully received meal plan data from Spoonacular")
    return response.json()


async def get_recipe_info(recipe_id: str | int | None) -> dict:
    """
    Fetch recipe details including its nutrient list.

    Args:
        recipe_id: Upstream recipe identifier

    Returns:
        Upstream JSON (title, image, readyInMinutes, servings, summary, nutrition)
    """
    key = _api_key()
    if recipe_id is None or not str(recipe_id).strip():
        raise MissingParameterError("Recipe ID is required")

    url = f"{settings.SPOONACULAR_BASE_URL}/recipes/{quote(str(recipe_id).strip(), safe='')}/information"
    log_upstream_call("Spoonacular", f"/recipes/{recipe_id}/information")

    try:
        response = await client.get(url, params={"apiKey": key, "includeNutrition": "true"})
    except httpx.HTTPError as e:
        log_error("Spoonacular recipe info", e)
        raise UpstreamFailure(f"Failed to fetch recipe info: {e}")

    if not response.is_success:
        logger.error(f"Spoonacular API error: {response.status_code} {response.reason_phrase}")
        raise error_from_response(response)

    return response.json()
