"""
Meal plan generation: preferences in, exactly three meal slots out.
"""
import asyncio

from dedlift.core.config import settings
from dedlift.core.logger import logger, log_error
from dedlift.models.nutrition import Meal, MealPlanRequest, UserPreferences
from dedlift.services import spoonacular_service
from dedlift.services.normalizer import MEAL_SLOTS, normalize_meal, round_amount


# Checked in order; the first match wins
DIET_MAP = [
    ("Vegan", "vegan"),
    ("Vegetarian", "vegetarian"),
    ("Keto", "ketogenic"),
    ("Paleo", "paleo"),
    ("Mediterranean", "mediterranean"),
]

ALLERGY_MAP = {
    "Peanut Allergy": "peanuts",
    "Lactose Intolerance": "dairy",
    "Gluten Allergy": "gluten",
    "Shellfish Allergy": "shellfish",
    "Egg Allergy": "eggs",
    "Soy Allergy": "soy",
    "Tree Nut Allergy": "tree-nuts",
    "Fish Allergy": "fish",
    "Sesame Allergy": "sesame",
    "Sulfite Sensitivity": "sulfites",
}

GOAL_ADJUSTMENTS = {
    "weight loss": 0.85,
    "lose-weight": 0.85,
    "muscle gain": 1.15,
    "gain-muscle": 1.15,
}

ACTIVITY_MULTIPLIER = 1.55  # moderately active


def calculate_target_calories(goal: str, weight: float, age: int, gender: str) -> int:
    """
    Daily calorie target from the Mifflin-St Jeor BMR.

    Height is not collected, so an average height is assumed
    (175 cm for men, 165 cm otherwise).
    """
    if gender.lower() == "male":
        bmr = 10 * weight + 6.25 * 175 - 5 * age + 5
    else:
        bmr = 10 * weight + 6.25 * 165 - 5 * age - 161

    tdee = bmr * ACTIVITY_MULTIPLIER
    return round_amount(tdee * GOAL_ADJUSTMENTS.get(goal.lower(), 1.0))


def map_diet(dietary_preferences: list[str]) -> str:
    """Upstream diet tag for the submitted preferences, or ""."""
    for label, diet in DIET_MAP:
        if label in dietary_preferences:
            return diet
    return ""


def map_allergies(allergies: list[str]) -> str:
    """Comma separated exclusion list for the submitted allergies."""
    return ",".join(
        ALLERGY_MAP.get(allergy) or "-".join(allergy.lower().split())
        for allergy in allergies
    )


def placeholder_meal(slot: str) -> Meal:
    return Meal(
        id=f"meal-{slot}-placeholder",
        type=slot,
        name=f"{slot.capitalize()} Meal",
        image=settings.FALLBACK_MEAL_IMAGE,
    )


def assign_meal_slots(meals: list[Meal], slots: tuple[str, ...] = MEAL_SLOTS) -> list[Meal]:
    """
    Map any number of meals onto exactly one meal per slot.

    Meal i lands in slot i mod len(slots); a later meal replaces an earlier
    one in the same slot. Empty slots get a zero-valued placeholder.

    Args:
        meals: Normalised meals in upstream order
        slots: Slot names, in output order

    Returns:
        One meal per slot, ordered like `slots`
    """
    assigned: dict[str, Meal] = {}
    for index, meal in enumerate(meals):
        slot = slots[index % len(slots)]
        assigned[slot] = meal.model_copy(update={"type": slot})

    return [assigned.get(slot) or placeholder_meal(slot) for slot in slots]


def error_meal_plan(message: str) -> list[Meal]:
    """Three placeholder meals, the first one explaining what went wrong."""
    meals = []
    for index, slot in enumerate(MEAL_SLOTS):
        meals.append(Meal(
            id=str(index + 1),
            type=slot,
            name="Error loading meal plan",
            image=settings.FALLBACK_MEAL_IMAGE,
            description=(
                f"Error: {message}. Please check the API configuration or try again."
                if index == 0 else None
            ),
        ))
    return meals


async def _recipe_info_or_none(recipe_id) -> dict | None:
    try:
        return await spoonacular_service.get_recipe_info(recipe_id)
    except Exception as e:
        log_error(f"Recipe info for {recipe_id}", e)
        return None


async def generate_meal_plan(preferences: UserPreferences) -> list[Meal]:
    """
    Generate breakfast, lunch and dinner for the submitted preferences.

    Never raises: on failure the three slots are filled with placeholders
    carrying the error message.
    """
    try:
        request = MealPlanRequest(
            targetCalories=calculate_target_calories(
                preferences.fitnessGoal,
                preferences.weight,
                preferences.age,
                preferences.gender,
            ),
            timeFrame="day",
            diet=map_diet(preferences.dietaryPreferences),
            exclude=map_allergies(preferences.allergies),
            number=settings.MEALS_PER_DAY,
        )
        plan = await spoonacular_service.generate_meal_plan(request)
        summaries = plan.get("meals") or []
        logger.info(f"Meals from API: {len(summaries)}")

        infos = await asyncio.gather(
            *(_recipe_info_or_none(summary.get("id")) for summary in summaries)
        )
        meals = [
            normalize_meal(summary, info, index)
            for index, (summary, info) in enumerate(zip(summaries, infos))
        ]
        return assign_meal_slots(meals)
    except Exception as e:
        log_error("Meal plan generation", e)
        return error_meal_plan(str(e))
