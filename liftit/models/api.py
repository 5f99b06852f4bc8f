from datetime import datetime

from pydantic import BaseModel, Field

from liftit.models.ids import entity_id_to_int
from liftit.models.page import Page
from liftit.models.weight import Weight
from liftit.models.workout import (
    NotesStr,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutStatus,
)

# ───────────── Requests ─────────────


class WorkoutStartRequest(BaseModel):
    notes: NotesStr | None = None


class WorkoutSetRequest(BaseModel):
    set_number: int = Field(ge=1)
    reps: int = Field(ge=1)
    weight: Weight
    rpe: int | None = Field(default=None, ge=1, le=10)

    def to_domain(self) -> WorkoutSet:
        return WorkoutSet(**self.model_dump())


class WorkoutExerciseRequest(BaseModel):
    exercise_id: int
    order: int = Field(ge=1)
    sets: list[WorkoutSetRequest] = []
    notes: NotesStr | None = None

    def to_domain(self) -> WorkoutExercise:
        return WorkoutExercise(
            exercise_id=self.exercise_id,
            order=self.order,
            sets=tuple(s.to_domain() for s in self.sets),
            notes=self.notes,
        )


# ───────────── Responses ─────────────


class WorkoutExerciseResponse(BaseModel):
    id: int
    exercise_id: int
    order: int
    sets: list[WorkoutSet]
    notes: str | None

    @classmethod
    def from_domain(cls, exercise: WorkoutExercise) -> "WorkoutExerciseResponse":
        return cls(
            id=entity_id_to_int(exercise.id),
            exercise_id=exercise.exercise_id,
            order=exercise.order,
            sets=list(exercise.sets),
            notes=exercise.notes,
        )


class WorkoutResponse(BaseModel):
    id: int
    user_id: int
    status: WorkoutStatus
    started_at: datetime
    completed_at: datetime | None
    notes: str | None
    exercises: list[WorkoutExerciseResponse]
    total_set_count: int

    created_at: datetime
    created_by: int
    updated_at: datetime
    updated_by: int

    @classmethod
    def from_domain(cls, workout: Workout) -> "WorkoutResponse":
        return cls(
            id=entity_id_to_int(workout.id),
            user_id=workout.user_id,
            status=workout.status,
            started_at=workout.started_at,
            completed_at=workout.completed_at,
            notes=workout.notes,
            exercises=[WorkoutExerciseResponse.from_domain(e) for e in workout.exercises],
            total_set_count=workout.total_set_count(),
            created_at=workout.created_at,
            created_by=workout.created_by,
            updated_at=workout.updated_at,
            updated_by=workout.updated_by,
        )


class WorkoutPageResponse(BaseModel):
    items: list[WorkoutResponse]
    page: int
    size: int
    total: int
    total_pages: int

    @classmethod
    def from_domain(cls, page: Page[Workout]) -> "WorkoutPageResponse":
        return cls(
            items=[WorkoutResponse.from_domain(w) for w in page.items],
            page=page.page,
            size=page.size,
            total=page.total,
            total_pages=page.total_pages,
        )
