from .errors import (
    InvalidArgumentError,
    WorkoutAlreadyCompletedError,
    WorkoutError,
    WorkoutNotFoundError,
    WorkoutOwnershipError,
    WorkoutStateError,
)
from .ids import UNSAVED, EntityId, Id, Unsaved
from .page import Page, PageRequest
from .weight import Weight, WeightUnit
from .workout import Workout, WorkoutExercise, WorkoutSet, WorkoutStatus

__all__ = [
    "EntityId",
    "Id",
    "Unsaved",
    "UNSAVED",
    "Page",
    "PageRequest",
    "Weight",
    "WeightUnit",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutStatus",
    "WorkoutError",
    "InvalidArgumentError",
    "WorkoutNotFoundError",
    "WorkoutOwnershipError",
    "WorkoutStateError",
    "WorkoutAlreadyCompletedError",
]
