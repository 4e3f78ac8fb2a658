"""
Exercise catalog proxy routes.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from dedlift.core.config import settings
from dedlift.core.errors import (
    ConfigurationError,
    ImageUnavailableError,
    MissingParameterError,
    UpstreamError,
    UpstreamFailure,
)
from dedlift.core.limiter import RequestThrottle, get_image_throttle, limiter
from dedlift.core.logger import log_request, log_error
from dedlift.models.schemas import ErrorResponse
from dedlift.services import exercisedb_service

router = APIRouter(prefix="/api/exercises", responses={500: {"model": ErrorResponse}})


@router.get("/muscle/{muscle}")
@limiter.limit("60/minute")
async def exercises_by_muscle(request: Request, muscle: str):
    """
    Exercises targeting one muscle.

    Form names like `chest` or `quadriceps` are translated to the
    catalog's own vocabulary before the call.
    """
    log_request(f"/api/exercises/muscle/{muscle}", method="GET")

    try:
        return await exercisedb_service.fetch_exercises_by_muscle(muscle)
    except UpstreamError:
        raise
    except Exception as e:
        log_error("Exercise catalog proxy", e)
        raise UpstreamFailure(f"Failed to fetch exercises: {e}")


@router.get("/image", responses={404: {"model": ErrorResponse}})
@limiter.limit("300/minute")
async def exercise_image(
    request: Request,
    exerciseId: str | None = None,
    resolution: str = settings.IMAGE_RESOLUTION,
    throttle: RequestThrottle = Depends(get_image_throttle),
):
    """
    Exercise illustration bytes.

    Every upstream failure, rate limiting included, answers 404 so the
    client falls back to a placeholder image.
    """
    try:
        image, content_type = await exercisedb_service.fetch_exercise_image(
            exerciseId, resolution, throttle
        )
    except (MissingParameterError, ConfigurationError, ImageUnavailableError):
        raise
    except Exception as e:
        log_error("Exercise image proxy", e)
        raise ImageUnavailableError("Image not available")

    return Response(
        content=image,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
