"""
Exercise catalog lookups against ExerciseDB (RapidAPI).
"""
from urllib.parse import quote

import httpx

from dedlift.core.config import settings
from dedlift.core.errors import (
    ConfigurationError,
    ImageUnavailableError,
    MissingParameterError,
    UpstreamFailure,
    error_from_response,
)
from dedlift.core.limiter import RequestThrottle
from dedlift.core.logger import logger, log_upstream_call, log_error


client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT)

# Form values that the catalog names differently
MUSCLE_NAME_MAP = {
    "lower_back": "lower back",
    "middle_back": "middle back",
    "chest": "pectorals",
    "quadriceps": "quads",
}


def resolve_muscle_name(muscle: str) -> str:
    """Lower-case, trim and translate a muscle name to catalog vocabulary."""
    name = muscle.lower().strip()
    return MUSCLE_NAME_MAP.get(name, name)


def _headers(api_key: str) -> dict[str, str]:
    return {
        "X-RapidAPI-Key": api_key,
        "X-RapidAPI-Host": settings.EXERCISESDB_HOST,
    }


def _catalog_messages(muscle: str) -> dict[int, str]:
    return {
        401: "Unauthorized. Please verify your API key is correct.",
        403: "API key is invalid or access is forbidden. Please check your ExercisesDB API key configuration.",
        422: f'Invalid muscle name: "{muscle}". The API may not recognize this muscle group.',
        429: "Too many requests. Please wait a moment and try again.",
    }


async def fetch_exercises_by_muscle(
    muscle: str | None,
    throttle: RequestThrottle | None = None,
) -> list[dict]:
    """
    List catalog exercises targeting one muscle.

    Args:
        muscle: Muscle name as submitted (remapped before the call)
        throttle: Optional throttle to wait on before calling out

    Returns:
        Raw exercise records; a non-list body counts as no exercises

    Raises:
        ConfigurationError: If no API key is configured
        MissingParameterError: If the muscle is blank
        UpstreamError: If the catalog answers with a non-success status
        UpstreamFailure: On transport errors
    """
    if not settings.EXERCISESDB_API_KEY:
        raise ConfigurationError("ExercisesDB API key not configured")
    if not muscle or not muscle.strip():
        raise MissingParameterError("Muscle parameter is required")

    target = resolve_muscle_name(muscle)
    url = f"{settings.EXERCISESDB_BASE_URL}/exercises/target/{quote(target, safe='')}"

    if throttle is not None:
        await throttle.wait()
    log_upstream_call("ExerciseDB", f"/exercises/target/{target}")

    try:
        response = await client.get(url, headers=_headers(settings.EXERCISESDB_API_KEY))
    except httpx.HTTPError as e:
        log_error(f"ExerciseDB lookup for {target}", e)
        raise UpstreamFailure(f"Failed to fetch exercises: {e}")

    if not response.is_success:
        error = error_from_response(
            response,
            _catalog_messages(target),
            default=f"ExercisesDB API error: {response.status_code} {response.reason_phrase}",
        )
        logger.error(f"ExerciseDB API error: {response.status_code} for {url}")
        raise error

    data = response.json()
    return data if isinstance(data, list) else []


async def fetch_exercise_image(
    exercise_id: str | None,
    resolution: str | None = None,
    throttle: RequestThrottle | None = None,
) -> tuple[bytes, str]:
    """
    Fetch an exercise illustration.

    Args:
        exercise_id: Catalog exercise identifier
        resolution: Requested resolution, defaults to settings.IMAGE_RESOLUTION
        throttle: Optional throttle to wait on before calling out

    Returns:
        (image bytes, content type)

    Raises:
        ConfigurationError: If no API key is configured
        MissingParameterError: If the exercise id is blank
        ImageUnavailableError: For any upstream or transport failure
    """
    if not settings.EXERCISESDB_API_KEY:
        raise ConfigurationError("RapidAPI key not configured")
    if not exercise_id or not exercise_id.strip():
        raise MissingParameterError("exerciseId parameter is required")

    params = {"exerciseId": exercise_id, "resolution": resolution or settings.IMAGE_RESOLUTION}

    if throttle is not None:
        await throttle.wait()
    log_upstream_call("ExerciseDB", f"/image?exerciseId={exercise_id}")

    try:
        response = await client.get(
            f"{settings.EXERCISESDB_BASE_URL}/image",
            params=params,
            headers=_headers(settings.EXERCISESDB_API_KEY),
        )
    except httpx.HTTPError as e:
        log_error("Exercise image fetch", e)
        raise ImageUnavailableError("Image not available")

    if not response.is_success:
        # Expected when rate limited or when ids don't match the image set
        if response.status_code == 429:
            logger.info(f"Rate limited for exercise: {exercise_id}")
        elif response.status_code == 403:
            logger.info(f"Forbidden/Invalid ID for exercise: {exercise_id}")
        else:
            logger.error(f"ExerciseDB image error: {response.status_code} {response.reason_phrase}")
        raise ImageUnavailableError("Image not available")

    content_type = response.headers.get("content-type", "image/gif")
    return response.content, content_type
