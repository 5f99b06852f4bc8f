from fastapi import APIRouter, Depends, Query, Response

from liftit.models.api import (
    WorkoutExerciseRequest,
    WorkoutPageResponse,
    WorkoutResponse,
    WorkoutStartRequest,
)
from liftit.models.errors import WorkoutOwnershipError
from liftit.models.page import PageRequest
from liftit.repositories.workout import (
    DynamoWorkoutRepository,
    InMemoryWorkoutRepository,
    WorkoutRepository,
)
from liftit.services.workout import WorkoutService
from liftit.settings import settings
from liftit.utils import auth
from liftit.utils.log import logger

router = APIRouter(prefix="/workouts", tags=["workouts"])

_memory_repo: InMemoryWorkoutRepository | None = None


def get_workout_repo() -> WorkoutRepository:  # pragma: no cover
    """Fetch the workout repo for the configured backend"""
    global _memory_repo
    if settings.uses_memory_backend:
        if _memory_repo is None:
            _memory_repo = InMemoryWorkoutRepository()
        return _memory_repo
    return DynamoWorkoutRepository()


def get_workout_service(
    repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutService:
    return WorkoutService(repo)


# ---------------------- List ---------------------------


@router.get("", response_model=WorkoutPageResponse)
def list_workouts(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    """List the current user's workouts, newest first"""
    logger.info(f"Listing workouts for user {user_id}")

    result = service.list_by_user(user_id, PageRequest(page=page, size=size))
    return WorkoutPageResponse.from_domain(result)


# ---------------------- Start ---------------------------


@router.post("", response_model=WorkoutResponse, status_code=201)
def start_workout(
    body: WorkoutStartRequest,
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = service.start(user_id, body.notes)
    return WorkoutResponse.from_domain(workout)


# ---------------------- Detail ---------------------------


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: int,
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = service.get_by_id(workout_id)

    # the service lookup is owner-agnostic; HTTP callers only see their own
    if workout.user_id != user_id:
        logger.warning(f"User {user_id} tried to read workout {workout_id}")
        raise WorkoutOwnershipError(workout_id, user_id)

    return WorkoutResponse.from_domain(workout)


# ---------------------- Mutations ---------------------------


@router.post("/{workout_id}/exercises", response_model=WorkoutResponse)
def add_exercise(
    workout_id: int,
    body: WorkoutExerciseRequest,
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = service.add_exercise(workout_id, body.to_domain(), user_id)
    return WorkoutResponse.from_domain(workout)


@router.post("/{workout_id}/complete", response_model=WorkoutResponse)
def complete_workout(
    workout_id: int,
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = service.complete(workout_id, user_id)
    return WorkoutResponse.from_domain(workout)


@router.delete("/{workout_id}", status_code=204)
def delete_workout(
    workout_id: int,
    user_id: int = Depends(auth.require_user_id),
    service: WorkoutService = Depends(get_workout_service),
):
    service.delete(workout_id, user_id)
    return Response(status_code=204)
