"""
Workout plan generation routes.
"""
import time

from fastapi import APIRouter, Depends, Request

from dedlift.core.limiter import RequestThrottle, get_catalog_throttle, limiter
from dedlift.core.logger import log_request, log_response
from dedlift.models.workout import WorkoutPlanResponse, WorkoutPreferences
from dedlift.services import workout_planner

router = APIRouter()


@router.post("/generate-workout-plan", response_model=WorkoutPlanResponse)
@limiter.limit("5/minute")
async def generate_workout_plan(
    request: Request,
    req: WorkoutPreferences,
    throttle: RequestThrottle = Depends(get_catalog_throttle),
):
    """
    Generate a workout plan.

    - `week`: seven days, each with a status telling rest days apart
      from days whose lookups failed
    - `muscle`: every catalog exercise for the chosen muscle
    - `full_body`: a few exercises from each major muscle group

    Catalog lookups are spaced by the shared catalog throttle, so a week
    plan takes several seconds.
    """
    log_request("/generate-workout-plan")
    started = time.perf_counter()

    if req.workoutType == "week":
        days = await workout_planner.generate_week_plan(throttle)
        response = WorkoutPlanResponse(workoutType="week", days=days)
    else:
        workouts = await workout_planner.generate_workout_plan(req, throttle)
        response = WorkoutPlanResponse(workoutType=req.workoutType, workouts=workouts)

    log_response("/generate-workout-plan", req.workoutType, (time.perf_counter() - started) * 1000)
    return response
