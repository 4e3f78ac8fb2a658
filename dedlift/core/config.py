"""
Configuration and constants for the DedLift service.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Recipe / meal-plan service (Spoonacular)
    SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
    SPOONACULAR_BASE_URL: str = "https://api.spoonacular.com"

    # Exercise catalog (ExerciseDB on RapidAPI)
    EXERCISESDB_API_KEY: str = os.getenv("EXERCISESDB_API_KEY", "")
    EXERCISESDB_BASE_URL: str = "https://exercisedb.p.rapidapi.com"
    EXERCISESDB_HOST: str = "exercisedb.p.rapidapi.com"

    # Speech synthesis (OpenAI audio API)
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    SPEECH_VOICE: str = os.getenv("SPEECH_VOICE", "alloy")
    SPEECH_MODEL: str = "gpt-4o-mini-tts"
    SPEECH_FALLBACK_MODEL: str = "tts-1"

    # Server Configuration
    PORT: int = int(os.getenv("PORT", 10000))
    HOST: str = "0.0.0.0"

    # Request Configuration
    UPSTREAM_TIMEOUT: float = 20.0
    SPEECH_TIMEOUT: float = 60.0

    # Outbound throttling (seconds between calls)
    IMAGE_MIN_INTERVAL: float = float(os.getenv("IMAGE_MIN_INTERVAL", 0.2))
    CATALOG_MIN_INTERVAL: float = float(os.getenv("CATALOG_MIN_INTERVAL", 0.5))

    # Plan generation
    EXERCISES_PER_MUSCLE: int = 3
    MEALS_PER_DAY: int = 3
    DEFAULT_TARGET_CALORIES: int = 2000
    DESCRIPTION_MAX_LENGTH: int = 200
    IMAGE_RESOLUTION: str = "180"

    # Fallback assets served by the frontend
    FALLBACK_MEAL_IMAGE: str = "/images/vegan-food.svg"
    FALLBACK_WORKOUT_IMAGE: str = "/images/exercises/default.jpg"

    @classmethod
    def missing_keys(cls) -> list[str]:
        """Names of upstream credentials that are not configured."""
        required = {
            "SPOONACULAR_API_KEY": cls.SPOONACULAR_API_KEY,
            "EXERCISESDB_API_KEY": cls.EXERCISESDB_API_KEY,
            "OPENAI_API_KEY": cls.OPENAI_API_KEY,
        }
        return [name for name, value in required.items() if not value]

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration on startup."""
        missing = cls.missing_keys()

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )


settings = Settings()
