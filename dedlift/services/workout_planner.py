"""
Workout plan generation: single muscle, full body, and the weekly schedule.
"""
from dedlift.core.config import settings
from dedlift.core.errors import UpstreamAuthError, UpstreamError, UpstreamQuotaError
from dedlift.core.limiter import RequestThrottle
from dedlift.core.logger import logger, log_error
from dedlift.models.workout import (
    DayStatus,
    DayWorkout,
    MuscleFetchResult,
    Workout,
    WorkoutPreferences,
)
from dedlift.services import exercisedb_service
from dedlift.services.normalizer import WORKOUT_DEFAULTS, normalize_workouts


# (day, focus, muscles); a day without muscles is a rest day
WEEK_TEMPLATE = [
    ("Monday", "Push", ["chest", "traps", "triceps"]),
    ("Tuesday", "Pull", ["lats", "biceps"]),
    ("Wednesday", "Legs & Abs", ["quadriceps", "hamstrings", "glutes"]),
    ("Thursday", "Push", ["chest", "traps", "triceps"]),
    ("Friday", "Pull", ["lats", "biceps"]),
    ("Saturday", "Legs & Abs", ["quadriceps", "hamstrings", "glutes"]),
    ("Sunday", "Rest", []),
]

FULL_BODY_MUSCLES = ["chest", "lats", "shoulders", "quadriceps", "abdominals"]


def exercise_records(muscle: str, records: list) -> list[dict]:
    """Keep the catalog records that are objects; anything else is dropped."""
    exercises = [record for record in records if isinstance(record, dict)]
    if len(exercises) < len(records):
        logger.warning(f"Dropped {len(records) - len(exercises)} malformed {muscle} records")
    return exercises


async def fetch_muscle(muscle: str, throttle: RequestThrottle | None = None) -> MuscleFetchResult:
    """One catalog lookup, with failures captured instead of raised."""
    try:
        records = await exercisedb_service.fetch_exercises_by_muscle(muscle, throttle)
        exercises = exercise_records(muscle, records)
        result = MuscleFetchResult(muscle=muscle, exercises=exercises[:settings.EXERCISES_PER_MUSCLE])
    except Exception as e:
        log_error(f"Fetching {muscle} exercises", e)
        return MuscleFetchResult(muscle=muscle, error=str(e))

    if not exercises:
        logger.warning(f"No exercises found for {muscle}")
    return result


def day_status(muscles: list[str], results: list[MuscleFetchResult]) -> DayStatus:
    if not muscles:
        return DayStatus.REST
    failures = sum(1 for result in results if not result.ok)
    if failures == 0:
        return DayStatus.COMPLETE
    if failures == len(results):
        return DayStatus.FAILED
    return DayStatus.PARTIAL


async def build_day(day_index: int, throttle: RequestThrottle) -> DayWorkout:
    """Fetch and normalise the workouts of one template day."""
    day, focus, muscles = WEEK_TEMPLATE[day_index]

    results = []
    for muscle in muscles:
        logger.info(f"Fetching exercises for {day} - {muscle}")
        results.append(await fetch_muscle(muscle, throttle))

    exercises = [exercise for result in results for exercise in result.exercises]
    status = day_status(muscles, results)
    logger.info(f"{day}: {len(exercises)} exercises from {', '.join(muscles) or 'rest'} ({status.value})")

    return DayWorkout(
        day=day,
        focus=focus,
        muscles=list(muscles),
        workouts=normalize_workouts(exercises, day_index),
        status=status,
        errors=[f"{result.muscle}: {result.error}" for result in results if not result.ok],
    )


def failed_week(message: str) -> list[DayWorkout]:
    """The template with every training day marked failed."""
    return [
        DayWorkout(
            day=day,
            focus=focus,
            muscles=list(muscles),
            status=DayStatus.FAILED if muscles else DayStatus.REST,
            errors=[message] if muscles else [],
        )
        for day, focus, muscles in WEEK_TEMPLATE
    ]


async def generate_week_plan(throttle: RequestThrottle) -> list[DayWorkout]:
    """
    Build the 7-day schedule, Monday to Sunday.

    Catalog lookups run one at a time through `throttle`. A failed lookup
    only affects its own muscle group; a day whose lookups all failed is
    marked FAILED so it can't be mistaken for a rest day.
    """
    try:
        return [await build_day(day_index, throttle) for day_index in range(len(WEEK_TEMPLATE))]
    except Exception as e:
        log_error("Week plan generation", e)
        return failed_week(str(e))


async def generate_muscle_workouts(muscle: str) -> list[Workout]:
    """All catalog exercises for one muscle."""
    records = await exercisedb_service.fetch_exercises_by_muscle(muscle)
    return normalize_workouts(exercise_records(muscle, records))


async def generate_full_body_workouts(throttle: RequestThrottle | None = None) -> list[Workout]:
    """
    A few exercises from each major muscle group.

    Auth and quota errors abort the whole plan since every further call
    would fail the same way.
    """
    exercises = []
    for muscle in FULL_BODY_MUSCLES:
        try:
            found = await exercisedb_service.fetch_exercises_by_muscle(muscle, throttle)
        except (UpstreamAuthError, UpstreamQuotaError):
            raise
        except UpstreamError as e:
            log_error(f"Fetching {muscle} exercises", e)
            continue
        exercises.extend(exercise_records(muscle, found)[:settings.EXERCISES_PER_MUSCLE])

    if not exercises:
        raise UpstreamError("Failed to fetch any exercises. Please check your API key and try again.")

    return normalize_workouts(exercises)


def error_workouts(message: str) -> list[Workout]:
    return [
        Workout(
            id="error",
            name="Error loading workout plan",
            type=WORKOUT_DEFAULTS["type"],
            muscle=WORKOUT_DEFAULTS["muscle"],
            equipment=WORKOUT_DEFAULTS["equipment"],
            difficulty=WORKOUT_DEFAULTS["difficulty"],
            instructions=f"Error: {message}. Please check the API configuration or try again.",
            image=settings.FALLBACK_WORKOUT_IMAGE,
        )
    ]


async def generate_workout_plan(
    preferences: WorkoutPreferences,
    throttle: RequestThrottle | None = None,
) -> list[Workout]:
    """
    Single-list plan for 'muscle' and 'full_body' preferences.

    Never raises: on failure a single placeholder workout carries the message.
    """
    try:
        if preferences.workoutType == "muscle" and preferences.muscle:
            return await generate_muscle_workouts(preferences.muscle)
        return await generate_full_body_workouts(throttle)
    except Exception as e:
        log_error("Workout plan generation", e)
        return error_workouts(str(e))
