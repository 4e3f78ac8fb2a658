"""
DedLift Service - Main Entry Point

Meal and workout plan generator backed by third-party recipe, exercise
and speech APIs.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from dedlift.core.config import settings
from dedlift.core.errors import UpstreamError, upstream_error_handler
from dedlift.core.logger import logger
from dedlift.core.limiter import RequestThrottle, limiter
from dedlift.routes import exercises, nutrition, speech, workout


# Validate configuration on startup; routes without their key answer 500
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.warning(f"Configuration incomplete, running degraded: {e}")


# Create FastAPI app
app = FastAPI(
    title="DedLift Service",
    description="Meal and workout plan generator backed by recipe, exercise and speech APIs",
    version="1.0.0"
)

# Attach rate limiter and its error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(UpstreamError, upstream_error_handler)

# Outbound throttles, injected into routes through dependencies
app.state.image_throttle = RequestThrottle(settings.IMAGE_MIN_INTERVAL)
app.state.catalog_throttle = RequestThrottle(settings.CATALOG_MIN_INTERVAL)


app.include_router(nutrition.router, tags=["Nutrition"])
app.include_router(workout.router, tags=["Workout"])
app.include_router(exercises.router, tags=["Exercises"])
app.include_router(speech.router, tags=["Speech"])


@app.get("/")
@limiter.limit("60/minute")
def root(request: Request):
    """Health check endpoint."""
    return {"message": "DedLift service running"}


@app.get("/health")
def health():
    """
    Detailed health status.
    Returns 'degraded' if upstream API keys are missing.
    """
    missing = settings.missing_keys()

    if missing:
        return JSONResponse(
            status_code=200,
            content={
                "status": "degraded",
                "service": "dedlift",
                "version": "1.0.0",
                "missing_config": missing,
                "message": f"Missing required environment variables: {', '.join(missing)}"
            }
        )

    return {
        "status": "healthy",
        "service": "dedlift",
        "version": "1.0.0"
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dedlift.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
