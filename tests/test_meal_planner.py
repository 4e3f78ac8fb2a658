"""
Tests for meal plan generation and slot assignment.
"""
import asyncio

import httpx
import pytest

from dedlift.models.nutrition import Meal, UserPreferences
from dedlift.services.meal_planner import (
    assign_meal_slots,
    calculate_target_calories,
    generate_meal_plan,
    map_allergies,
    map_diet,
)


def make_meals(count: int) -> list[Meal]:
    return [
        Meal(id=f"meal-{i}", type="breakfast", name=f"Meal {i}", image="x.jpg", protein=i)
        for i in range(count)
    ]


class TestAssignMealSlots:
    """Tests for assign_meal_slots."""

    def test_always_three_slots_in_order(self):
        for count in range(0, 8):
            result = assign_meal_slots(make_meals(count))
            assert [m.type for m in result] == ["breakfast", "lunch", "dinner"]

    def test_no_meals_gives_placeholders(self):
        result = assign_meal_slots([])

        for meal in result:
            assert (meal.protein, meal.carbs, meal.calories) == (0, 0, 0)
            assert meal.image == "/images/vegan-food.svg"
        assert [m.name for m in result] == ["Breakfast Meal", "Lunch Meal", "Dinner Meal"]

    def test_two_meals_leave_dinner_as_placeholder(self):
        meals = make_meals(2)

        breakfast, lunch, dinner = assign_meal_slots(meals)

        assert breakfast.id == "meal-0"
        assert lunch.id == "meal-1"
        assert dinner.id == "meal-dinner-placeholder"
        assert dinner.calories == 0

    def test_five_meals_wrap_around_last_wins(self):
        meals = make_meals(5)

        breakfast, lunch, dinner = assign_meal_slots(meals)

        assert breakfast.id == "meal-3"
        assert lunch.id == "meal-4"
        assert dinner.id == "meal-2"

    def test_highest_index_wins_each_slot(self):
        breakfast, lunch, dinner = assign_meal_slots(make_meals(7))
        assert (breakfast.id, lunch.id, dinner.id) == ("meal-6", "meal-4", "meal-5")

    def test_input_meals_are_not_mutated(self):
        meals = make_meals(2)
        assign_meal_slots(meals)
        assert [m.type for m in meals] == ["breakfast", "breakfast"]


class TestPreferenceMapping:
    """Tests for diet, allergy and calorie mapping."""

    def test_first_matching_diet_wins(self):
        assert map_diet(["Keto", "Vegan"]) == "vegan"
        assert map_diet(["Keto"]) == "ketogenic"
        assert map_diet(["High Protein"]) == ""
        assert map_diet([]) == ""

    def test_allergies_become_exclusions(self):
        assert map_allergies(["Peanut Allergy", "Tree Nut Allergy"]) == "peanuts,tree-nuts"
        assert map_allergies(["Kiwi Fruit"]) == "kiwi-fruit"
        assert map_allergies([]) == ""

    def test_target_calories_for_muscle_gain(self):
        assert calculate_target_calories("Muscle Gain", 80, 30, "Male") == 3117

    def test_target_calories_for_weight_loss(self):
        assert calculate_target_calories("Weight Loss", 60, 28, "Female") == 1753

    def test_unknown_goal_maintains(self):
        assert calculate_target_calories("General Health", 60, 28, "Female") == 2062

    def test_preferences_accept_any_positive_age_and_weight(self, sample_meal_preferences):
        prefs = UserPreferences(**{**sample_meal_preferences, "age": 8, "weight": 18})
        assert prefs.age == 8

        with pytest.raises(ValueError):
            UserPreferences(**{**sample_meal_preferences, "age": 0})


def recipe_handler(sample_recipe_info, meals, broken_ids=()):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/mealplanner/generate":
            return httpx.Response(200, json={"meals": meals, "nutrients": {}})
        recipe_id = request.url.path.split("/")[2]
        if int(recipe_id) in broken_ids:
            return httpx.Response(500, json={"message": "boom"})
        return httpx.Response(200, json={**sample_recipe_info, "id": int(recipe_id)})
    return handler


class TestGenerateMealPlan:
    """Tests for the full meal plan pipeline."""

    def test_generates_three_meals(self, mock_upstream, sample_meal_preferences, sample_recipe_info):
        meals = [
            {"id": 1, "title": "Oats", "readyInMinutes": 10, "servings": 1},
            {"id": 2, "title": "Salad", "readyInMinutes": 15, "servings": 2},
            {"id": 3, "title": "Curry", "readyInMinutes": 40, "servings": 4},
        ]
        requests = mock_upstream(recipe_handler(sample_recipe_info, meals))

        result = asyncio.run(generate_meal_plan(UserPreferences(**sample_meal_preferences)))

        assert [m.name for m in result] == ["Oats", "Salad", "Curry"]
        assert [m.type for m in result] == ["breakfast", "lunch", "dinner"]
        assert result[0].protein == 41

        plan_request = requests[0]
        assert plan_request.url.params["targetCalories"] == "3117"
        assert plan_request.url.params["diet"] == "vegetarian"
        assert plan_request.url.params["exclude"] == "peanuts,dairy"
        assert plan_request.url.params["number"] == "3"
        assert plan_request.url.params["apiKey"] == "test-spoonacular-key"

    def test_failed_recipe_lookup_keeps_meal(self, mock_upstream, sample_meal_preferences, sample_recipe_info):
        meals = [{"id": 1, "title": "Oats"}, {"id": 2, "title": "Salad"}]
        mock_upstream(recipe_handler(sample_recipe_info, meals, broken_ids=(2,)))

        breakfast, lunch, dinner = asyncio.run(
            generate_meal_plan(UserPreferences(**sample_meal_preferences))
        )

        assert breakfast.calories == 591
        assert lunch.name == "Salad"
        assert lunch.calories == 0
        assert lunch.image == "/images/vegan-food.svg"
        assert dinner.name == "Dinner Meal"

    def test_upstream_failure_returns_error_placeholders(self, mock_upstream, sample_meal_preferences):
        mock_upstream(lambda request: httpx.Response(402, json={"message": "Your daily points limit of 150 has been reached."}))

        result = asyncio.run(generate_meal_plan(UserPreferences(**sample_meal_preferences)))

        assert len(result) == 3
        assert all(m.name == "Error loading meal plan" for m in result)
        assert "daily points limit" in result[0].description
        assert result[1].description is None
