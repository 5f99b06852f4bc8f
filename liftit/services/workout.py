from liftit.models.errors import (
    WorkoutAlreadyCompletedError,
    WorkoutNotFoundError,
    WorkoutOwnershipError,
    require_not_none,
)
from liftit.models.ids import entity_id_to_int
from liftit.models.page import Page, PageRequest
from liftit.models.workout import Workout, WorkoutExercise
from liftit.repositories.workout import WorkoutRepository
from liftit.utils.log import logger


class WorkoutService:
    """
    Application service for the workout lifecycle.

    Every mutating operation is one load -> check -> mutate -> save cycle
    against the repository. Checks run in a fixed order: existence, then
    ownership, then lifecycle state, so a non-owner always sees an
    ownership error and never learns the workout's state.

    Missing arguments raise InvalidArgumentError. Out-of-range values are
    rejected earlier, when the models are built, with pydantic's
    ValidationError. Both are ValueErrors, so catch ValueError for either.

    Nothing serialises concurrent cycles on the same workout; the last save
    wins.
    """

    def __init__(self, repository: WorkoutRepository):
        require_not_none(repository, "repository")
        self._repository = repository

    # ----------------------- Queries -----------------------------

    def get_by_id(self, workout_id: int) -> Workout:
        require_not_none(workout_id, "workout_id")
        logger.debug(f"Fetching workout {workout_id}")
        return self._find(workout_id)

    def list_by_user(self, user_id: int, page_request: PageRequest) -> Page[Workout]:
        require_not_none(user_id, "user_id")
        require_not_none(page_request, "page_request")

        logger.debug(
            f"Listing workouts for user {user_id} "
            f"page={page_request.page} size={page_request.size}"
        )
        return self._repository.find_by_user_id(user_id, page_request)

    # ----------------------- Commands -----------------------------

    def start(self, user_id: int, notes: str | None = None) -> Workout:
        require_not_none(user_id, "user_id")
        logger.debug(f"Starting workout for user {user_id}")

        workout = self._repository.save(Workout.start(user_id, notes))
        logger.info(
            f"User {user_id} started workout {entity_id_to_int(workout.id)}"
        )
        return workout

    def add_exercise(
        self, workout_id: int, exercise: WorkoutExercise, user_id: int
    ) -> Workout:
        require_not_none(workout_id, "workout_id")
        require_not_none(exercise, "exercise")
        require_not_none(user_id, "user_id")
        logger.debug(f"Adding exercise {exercise.exercise_id} to workout {workout_id}")

        workout = self._require_owned(workout_id, user_id)
        self._require_in_progress(workout_id, workout)

        saved = self._repository.save(workout.with_exercise(exercise))
        logger.info(
            f"Added exercise {exercise.exercise_id} to workout {workout_id} "
            f"({len(saved.exercises)} exercises)"
        )
        return saved

    def complete(self, workout_id: int, user_id: int) -> Workout:
        require_not_none(workout_id, "workout_id")
        require_not_none(user_id, "user_id")
        logger.debug(f"Completing workout {workout_id} for user {user_id}")

        workout = self._require_owned(workout_id, user_id)
        self._require_in_progress(workout_id, workout)

        saved = self._repository.save(workout.complete())
        logger.info(
            f"Completed workout {workout_id} with {saved.total_set_count()} sets"
        )
        return saved

    def delete(self, workout_id: int, user_id: int) -> None:
        require_not_none(workout_id, "workout_id")
        require_not_none(user_id, "user_id")
        logger.debug(f"Deleting workout {workout_id} for user {user_id}")

        self._require_owned(workout_id, user_id)
        self._repository.delete(workout_id)
        logger.info(f"User {user_id} deleted workout {workout_id}")

    # ----------------------- Checks -----------------------------

    def _find(self, workout_id: int) -> Workout:
        workout = self._repository.find_by_id(workout_id)
        if workout is None:
            logger.warning(f"Workout not found: {workout_id}")
            raise WorkoutNotFoundError(workout_id)
        return workout

    def _require_owned(self, workout_id: int, user_id: int) -> Workout:
        workout = self._find(workout_id)
        if workout.user_id != user_id:
            logger.warning(f"User {user_id} does not own workout {workout_id}")
            raise WorkoutOwnershipError(workout_id, user_id)
        return workout

    def _require_in_progress(self, workout_id: int, workout: Workout) -> None:
        if not workout.is_in_progress():
            logger.warning(f"Workout {workout_id} is already completed")
            raise WorkoutAlreadyCompletedError(workout_id)
