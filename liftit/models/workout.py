from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from liftit.models.errors import InvalidArgumentError, WorkoutStateError, require_not_none
from liftit.models.ids import UNSAVED, EntityId
from liftit.models.weight import Weight
from liftit.utils import dates

NotesStr = Annotated[str, StringConstraints(max_length=1000)]


class WorkoutStatus(str, Enum):
    """
    Lifecycle of a workout. The only transition is IN_PROGRESS -> COMPLETED.
    """

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class WorkoutSet(BaseModel):
    """One logged set. Immutable value with no identity of its own."""

    model_config = ConfigDict(frozen=True)

    set_number: int = Field(ge=1)
    reps: int = Field(ge=1)
    weight: Weight
    rpe: int | None = Field(default=None, ge=1, le=10)  # Rate of Perceived Exertion


class WorkoutExercise(BaseModel):
    """
    One exercise performed within a workout, with its logged sets.

    exercise_id references the exercise catalogue. order is the 1-based
    position of the exercise in the workout. Only the Workout aggregate
    decides whether an exercise may be added, so there is no state here.
    """

    model_config = ConfigDict(frozen=True)

    id: EntityId = UNSAVED
    exercise_id: int
    order: int = Field(ge=1)
    sets: tuple[WorkoutSet, ...] = ()
    notes: NotesStr | None = None

    def with_set(self, workout_set: WorkoutSet) -> "WorkoutExercise":
        """Return a copy with workout_set appended."""
        require_not_none(workout_set, "workout_set")
        return self.model_copy(update={"sets": self.sets + (workout_set,)})

    def set_count(self) -> int:
        return len(self.sets)


class Workout(BaseModel):
    """
    Aggregate root for the workout domain.

    A workout belongs to one user and is either IN_PROGRESS or COMPLETED.
    Exercises may only be appended while in progress; once completed the
    workout never changes again. Mutators return new instances.
    """

    model_config = ConfigDict(frozen=True)

    id: EntityId = UNSAVED
    user_id: int
    started_at: datetime
    completed_at: datetime | None = None
    status: WorkoutStatus
    notes: NotesStr | None = None
    exercises: tuple[WorkoutExercise, ...]

    created_at: datetime
    created_by: int
    updated_at: datetime
    updated_by: int

    @model_validator(mode="after")
    def validate_completion(self) -> "Workout":
        completed = self.status == WorkoutStatus.COMPLETED
        if completed != (self.completed_at is not None):
            raise ValueError(
                "completed_at must be set exactly when status is COMPLETED"
            )
        return self

    @classmethod
    def start(
        cls, user_id: int, notes: str | None = None, now: datetime | None = None
    ) -> "Workout":
        """Build a new, unsaved workout owned by user_id."""
        require_not_none(user_id, "user_id")
        now = now or dates.now()
        return cls(
            id=UNSAVED,
            user_id=user_id,
            started_at=now,
            completed_at=None,
            status=WorkoutStatus.IN_PROGRESS,
            notes=notes,
            exercises=(),
            created_at=now,
            created_by=user_id,
            updated_at=now,
            updated_by=user_id,
        )

    def is_in_progress(self) -> bool:
        return self.status == WorkoutStatus.IN_PROGRESS

    def with_exercise(self, exercise: WorkoutExercise) -> "Workout":
        """
        Return a copy with exercise appended.

        Raises WorkoutStateError if the workout is completed.
        """
        if exercise is None:
            raise InvalidArgumentError("exercise must not be None")
        if self.status == WorkoutStatus.COMPLETED:
            raise WorkoutStateError("Cannot add exercises to a completed workout")

        return self.model_copy(
            update={
                "exercises": self.exercises + (exercise,),
                "updated_at": dates.now(),
            }
        )

    def complete(self) -> "Workout":
        """
        Return a copy marked COMPLETED at the current instant.

        Raises WorkoutStateError if the workout is already completed.
        """
        if self.status == WorkoutStatus.COMPLETED:
            raise WorkoutStateError("Workout is already completed")

        now = dates.now()
        return self.model_copy(
            update={
                "status": WorkoutStatus.COMPLETED,
                "completed_at": now,
                "updated_at": now,
            }
        )

    def total_set_count(self) -> int:
        return sum(exercise.set_count() for exercise in self.exercises)
