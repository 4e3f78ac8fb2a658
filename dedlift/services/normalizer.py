"""
Normalisation of upstream records into Meal and Workout entities.

Upstream catalogs are loose: fields go missing, nutrients come as an
unordered list, and exercise ids repeat. Everything produced here has every
field set and an id that is unique within its list.
"""
import math
import re
from urllib.parse import quote

from dedlift.core.config import settings
from dedlift.models.nutrition import Meal
from dedlift.models.workout import Workout

MEAL_SLOTS = ("breakfast", "lunch", "dinner")

WORKOUT_DEFAULTS = {
    "name": "Exercise",
    "type": "strength",
    "muscle": "full body",
    "equipment": "body weight",
    "difficulty": "beginner",
    "instructions": "No instructions available.",
}

_MARKUP = re.compile(r"<[^>]*>")


def round_amount(value: float | None) -> int:
    """Round half up to a whole unit; None and negatives count as zero."""
    if not value or value < 0:
        return 0
    return int(math.floor(float(value) + 0.5))


def find_nutrient_amount(nutrients: list[dict], name: str) -> float:
    """Amount of the nutrient called exactly `name`, or 0 when absent."""
    for nutrient in nutrients:
        if nutrient.get("name") == name:
            return nutrient.get("amount") or 0
    return 0


def strip_markup(text: str | None, max_length: int = settings.DESCRIPTION_MAX_LENGTH) -> str:
    """Drop HTML tags and cap the length."""
    if not text:
        return ""
    return _MARKUP.sub("", text)[:max_length]


def normalize_meal(summary: dict, recipe_info: dict | None, index: int) -> Meal:
    """
    Build a Meal from a meal-plan entry and its (optional) recipe details.

    Args:
        summary: Entry of the meal plan's `meals` list
        recipe_info: Recipe detail payload, or None if the lookup failed
        index: Position in the meal plan, used for the slot and the id suffix

    Returns:
        Meal with a provisional slot (reassigned by the slot assigner)
    """
    info = recipe_info or {}
    nutrients = (info.get("nutrition") or {}).get("nutrients") or []

    ready = summary.get("readyInMinutes") or info.get("readyInMinutes") or 0
    servings = summary.get("servings") or info.get("servings") or 1

    return Meal(
        id=f"meal-{summary.get('id')}-{index}",
        type=MEAL_SLOTS[index] if index < len(MEAL_SLOTS) else MEAL_SLOTS[0],
        name=summary.get("title") or info.get("title") or "Meal",
        image=info.get("image") or settings.FALLBACK_MEAL_IMAGE,
        protein=round_amount(find_nutrient_amount(nutrients, "Protein")),
        carbs=round_amount(find_nutrient_amount(nutrients, "Carbohydrates")),
        calories=round_amount(find_nutrient_amount(nutrients, "Calories")),
        description=strip_markup(info.get("summary")),
        preparationTime=f"{ready}min",
        servingSize=f"{servings} {'serving' if servings == 1 else 'servings'}",
    )


def exercise_image_url(exercise_id: str | None) -> str:
    """Image proxy route for an exercise, or "" when there is no id."""
    if not exercise_id:
        return ""
    return (
        f"/api/exercises/image?exerciseId={quote(str(exercise_id), safe='')}"
        f"&resolution={settings.IMAGE_RESOLUTION}"
    )


def _instructions(raw: dict) -> str:
    instructions = raw.get("instructions")
    if isinstance(instructions, list):
        instructions = " ".join(step for step in instructions if step)
    return instructions or WORKOUT_DEFAULTS["instructions"]


def normalize_workout(raw: dict, index: int, day_index: int | None = None) -> Workout:
    """
    Build a Workout from a catalog record.

    The id is suffixed with the position (and day index for weekly plans)
    since the catalog may return the same exercise id twice.
    """
    exercise_id = raw.get("id") or None
    position = f"{day_index}-{index}" if day_index is not None else f"{index}"
    base_id = exercise_id or f"exercise-{position}"

    return Workout(
        id=f"{base_id}-{position}",
        name=raw.get("name") or WORKOUT_DEFAULTS["name"],
        type=raw.get("type") or WORKOUT_DEFAULTS["type"],
        muscle=raw.get("muscle") or raw.get("target") or WORKOUT_DEFAULTS["muscle"],
        equipment=raw.get("equipment") or WORKOUT_DEFAULTS["equipment"],
        difficulty=raw.get("difficulty") or WORKOUT_DEFAULTS["difficulty"],
        instructions=_instructions(raw),
        image=exercise_image_url(exercise_id),
        exerciseId=str(exercise_id) if exercise_id else None,
    )


def normalize_workouts(raws: list[dict], day_index: int | None = None) -> list[Workout]:
    return [normalize_workout(raw, index, day_index) for index, raw in enumerate(raws)]
