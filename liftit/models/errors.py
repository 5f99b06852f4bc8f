class WorkoutError(Exception):
    """Base class for workout domain errors."""

    pass


class InvalidArgumentError(WorkoutError, ValueError):
    """A required input is missing or structurally invalid."""

    pass


class WorkoutNotFoundError(WorkoutError):
    """Raised when no workout exists for the given id."""

    def __init__(self, workout_id: int):
        self.workout_id = workout_id
        super().__init__(f"Workout not found: {workout_id}")


class WorkoutOwnershipError(WorkoutError):
    """Raised when a user acts on a workout they do not own."""

    def __init__(self, workout_id: int, user_id: int):
        self.workout_id = workout_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own workout {workout_id}")


class WorkoutStateError(WorkoutError):
    """Operation not permitted in the workout's current lifecycle state."""

    pass


class WorkoutAlreadyCompletedError(WorkoutStateError):
    def __init__(self, workout_id: int):
        self.workout_id = workout_id
        super().__init__(f"Workout {workout_id} is already completed")


def require_not_none(value: object, field_name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{field_name} must not be None")
