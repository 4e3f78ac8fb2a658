"""
Pytest fixtures for the DedLift service tests.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

# Mock environment variables before importing app
import os
os.environ.setdefault("SPOONACULAR_API_KEY", "test-spoonacular-key")
os.environ.setdefault("EXERCISESDB_API_KEY", "test-exercisedb-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

from dedlift.main import app
from dedlift.core.limiter import RequestThrottle, limiter
from dedlift.services import exercisedb_service, spoonacular_service


class FakeClock:
    """Manual monotonic clock; sleeping advances it."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Inbound limits are per IP and the test client always has the same one."""
    limiter.reset()
    yield


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def instant_throttles(monkeypatch, fake_clock):
    """Swap the app's throttles for ones running on the fake clock."""
    image = RequestThrottle(0.2, clock=fake_clock, sleep=fake_clock.sleep)
    catalog = RequestThrottle(0.5, clock=fake_clock, sleep=fake_clock.sleep)
    monkeypatch.setattr(app.state, "image_throttle", image, raising=False)
    monkeypatch.setattr(app.state, "catalog_throttle", catalog, raising=False)
    return image, catalog


@pytest.fixture
def mock_upstream(monkeypatch):
    """
    Route upstream HTTP calls to a handler.

    Usage: requests = mock_upstream(handler) where handler takes an
    httpx.Request and returns an httpx.Response. Returns the list of
    requests seen.
    """
    def install(handler):
        seen: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        fake = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        monkeypatch.setattr(spoonacular_service, "client", fake)
        monkeypatch.setattr(exercisedb_service, "client", fake)
        return seen

    return install


@pytest.fixture
def sample_meal_preferences():
    """Sample meal plan form submission."""
    return {
        "name": "Sam",
        "age": 30,
        "gender": "Male",
        "weight": 80,
        "fitnessGoal": "Muscle Gain",
        "dietaryPreferences": ["Vegetarian"],
        "allergies": ["Peanut Allergy", "Lactose Intolerance"]
    }


@pytest.fixture
def sample_workout_preferences():
    """Sample workout plan form submission."""
    return {
        "name": "Alex",
        "age": 31,
        "weight": 82,
        "fitnessGoal": "Muscle Gain",
        "workoutType": "muscle",
        "muscle": "chest"
    }


@pytest.fixture
def sample_recipe_info():
    """Recipe detail payload as the recipe service returns it."""
    return {
        "id": 715538,
        "title": "Bruschetta Style Pork & Pasta",
        "image": "https://img.spoonacular.com/recipes/715538-556x370.jpg",
        "readyInMinutes": 35,
        "servings": 5,
        "summary": "<b>Bruschetta Style Pork</b> might be a good recipe to expand your main course repertoire.",
        "nutrition": {
            "nutrients": [
                {"name": "Calories", "amount": 591.46, "unit": "kcal"},
                {"name": "Fat", "amount": 19.21, "unit": "g"},
                {"name": "Carbohydrates", "amount": 61.5, "unit": "g"},
                {"name": "Protein", "amount": 41.49, "unit": "g"}
            ]
        }
    }


@pytest.fixture
def sample_exercises():
    """Catalog records for one muscle, including a duplicated id."""
    return [
        {"id": "0025", "name": "barbell bench press", "target": "pectorals",
         "equipment": "barbell", "instructions": ["Lie flat.", "Press up."]},
        {"id": "0025", "name": "barbell bench press (paused)", "target": "pectorals",
         "equipment": "barbell"},
        {"id": "0662", "name": "push-up", "muscle": "chest", "type": "strength",
         "equipment": "body weight", "difficulty": "beginner", "instructions": "Push."},
        {"id": "1254", "name": "dumbbell fly", "target": "pectorals", "equipment": "dumbbell"},
    ]
