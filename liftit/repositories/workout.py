from decimal import Decimal
from itertools import count
from typing import Callable, List, Protocol

from boto3.dynamodb.conditions import Key

from liftit.models.ids import Id, entity_id_from_int, entity_id_to_int, is_saved
from liftit.models.page import Page, PageRequest
from liftit.models.weight import Weight, WeightUnit
from liftit.models.workout import Workout, WorkoutExercise, WorkoutSet, WorkoutStatus
from liftit.repositories.base import DynamoRepository
from liftit.repositories.errors import RepoError, WorkoutRepoError
from liftit.utils import dates, db
from liftit.utils.log import logger


class WorkoutRepository(Protocol):
    def save(self, workout: Workout) -> Workout: ...
    def find_by_id(self, workout_id: int) -> Workout | None: ...
    def find_by_user_id(
        self, user_id: int, page_request: PageRequest
    ) -> Page[Workout]: ...
    def delete(self, workout_id: int) -> None: ...


def assign_ids(workout: Workout, next_id: Callable[[str], int]) -> Workout:
    """
    Give the workout and any of its unsaved exercises a real identifier.
    """
    workout_id = workout.id if is_saved(workout.id) else Id(value=next_id("workout"))

    exercises = tuple(
        (
            exercise
            if is_saved(exercise.id)
            else exercise.model_copy(
                update={"id": Id(value=next_id("workout_exercise"))}
            )
        )
        for exercise in workout.exercises
    )

    return workout.model_copy(update={"id": workout_id, "exercises": exercises})


def newest_first(workouts: List[Workout]) -> List[Workout]:
    return sorted(
        workouts,
        key=lambda w: (w.started_at, entity_id_to_int(w.id)),
        reverse=True,
    )


class InMemoryWorkoutRepository:
    """
    Dict-backed implementation of WorkoutRepository.
    """

    def __init__(self):
        self._workouts: dict[int, Workout] = {}
        self._sequences: dict[str, count] = {}

    def _next_id(self, name: str) -> int:
        sequence = self._sequences.setdefault(name, count(1))
        return next(sequence)

    def save(self, workout: Workout) -> Workout:
        saved = assign_ids(workout, self._next_id)
        workout_id = entity_id_to_int(saved.id)
        logger.debug(f"Storing workout {workout_id} in memory")
        self._workouts[workout_id] = saved
        return saved

    def find_by_id(self, workout_id: int) -> Workout | None:
        return self._workouts.get(workout_id)

    def find_by_user_id(self, user_id: int, page_request: PageRequest) -> Page[Workout]:
        owned = [w for w in self._workouts.values() if w.user_id == user_id]
        return Page[Workout].slice(newest_first(owned), page_request)

    def delete(self, workout_id: int) -> None:
        self._workouts.pop(workout_id, None)


class DynamoWorkoutRepository(DynamoRepository[Workout]):
    """
    DynamoDB implementation of WorkoutRepository.

    A workout is stored under PK=WORKOUT#<id> as one META item plus one
    item per exercise (sets embedded, in order). A USER#<id> index item
    makes a user's workouts listable.
    """

    # ----------------------- Mapping -----------------------------

    def _workout_to_items(self, workout: Workout) -> tuple[dict, List[dict], dict]:
        workout_id = entity_id_to_int(workout.id)
        pk = db.build_workout_pk(workout_id)

        meta = {
            "PK": pk,
            "SK": db.WORKOUT_META_SK,
            "type": "workout",
            "id": workout_id,
            "user_id": workout.user_id,
            "status": workout.status.value,
            "started_at": dates.dt_to_iso(workout.started_at),
            "completed_at": dates.optional_dt_to_iso(workout.completed_at),
            "notes": workout.notes,
            "created_at": dates.dt_to_iso(workout.created_at),
            "created_by": workout.created_by,
            "updated_at": dates.dt_to_iso(workout.updated_at),
            "updated_by": workout.updated_by,
        }

        exercises = [
            {
                "PK": pk,
                "SK": db.build_exercise_sk(position),
                "type": "exercise",
                "id": entity_id_to_int(exercise.id),
                "exercise_id": exercise.exercise_id,
                "order": exercise.order,
                "notes": exercise.notes,
                "sets": [self._set_to_item(s) for s in exercise.sets],
            }
            for position, exercise in enumerate(workout.exercises, start=1)
        ]

        index = {
            "PK": db.build_user_pk(workout.user_id),
            "SK": db.build_workout_index_sk(workout_id),
            "type": "workout_index",
            "started_at": meta["started_at"],
        }

        return meta, exercises, index

    @staticmethod
    def _set_to_item(workout_set: WorkoutSet) -> dict:
        # DynamoDB rejects floats, so weights travel as Decimal
        return {
            "set_number": workout_set.set_number,
            "reps": workout_set.reps,
            "weight_value": Decimal(str(workout_set.weight.value)),
            "weight_unit": workout_set.weight.unit.value,
            "rpe": workout_set.rpe,
        }

    @staticmethod
    def _item_to_set(item: dict) -> WorkoutSet:
        return WorkoutSet(
            set_number=int(item["set_number"]),
            reps=int(item["reps"]),
            weight=Weight(
                value=float(item["weight_value"]),
                unit=WeightUnit(item["weight_unit"]),
            ),
            rpe=int(item["rpe"]) if item.get("rpe") is not None else None,
        )

    def _item_to_exercise(self, item: dict) -> WorkoutExercise:
        return WorkoutExercise(
            id=entity_id_from_int(int(item["id"])),
            exercise_id=int(item["exercise_id"]),
            order=int(item["order"]),
            sets=tuple(self._item_to_set(s) for s in item.get("sets", [])),
            notes=item.get("notes"),
        )

    def _to_model(self, items: List[dict]) -> Workout:
        """
        Rebuild the aggregate from the META item and its exercise items.
        """
        meta = [i for i in items if i.get("type") == "workout"]
        exercise_items = [i for i in items if i.get("type") == "exercise"]
        logger.debug(
            f"_to_model: meta={len(meta)}, exercises={len(exercise_items)}"
        )

        if not meta:
            raise WorkoutRepoError("Workout items are missing the META item")
        m = meta[0]

        try:
            # SK strings stop sorting numerically past the zero pad
            exercise_items.sort(key=lambda i: db.parse_exercise_position(i["SK"]))
            return Workout(
                id=entity_id_from_int(int(m["id"])),
                user_id=int(m["user_id"]),
                started_at=dates.iso_to_dt(m["started_at"]),
                completed_at=dates.optional_iso_to_dt(m.get("completed_at")),
                status=WorkoutStatus(m["status"]),
                notes=m.get("notes"),
                exercises=tuple(self._item_to_exercise(i) for i in exercise_items),
                created_at=dates.iso_to_dt(m["created_at"]),
                created_by=int(m["created_by"]),
                updated_at=dates.iso_to_dt(m["updated_at"]),
                updated_by=int(m["updated_by"]),
            )
        except (KeyError, ValueError) as e:
            logger.error(f"_to_model failed: {e}")
            raise WorkoutRepoError("Failed to create workout model from items") from e

    # ----------------------- Ids -----------------------------

    def _next_id(self, name: str) -> int:
        """
        Atomically increment the named counter and return the new value.
        """
        resp = self._safe_update(
            Key={"PK": db.COUNTER_PK, "SK": db.build_counter_sk(name)},
            UpdateExpression="ADD #value :inc",
            ExpressionAttributeNames={"#value": "value"},
            ExpressionAttributeValues={":inc": 1},
            ReturnValues="UPDATED_NEW",
        )
        next_id = int(resp["Attributes"]["value"])
        logger.debug(f"Allocated {name} id {next_id}")
        return next_id

    # ----------------------- Get -----------------------------

    def _query_workout_items(self, workout_id: int) -> List[dict]:
        return self._safe_query(
            KeyConditionExpression=Key("PK").eq(db.build_workout_pk(workout_id))
        )

    def find_by_id(self, workout_id: int) -> Workout | None:
        """
        Fetch a single workout with its exercises and sets.
        """
        logger.debug(f"Fetching workout {workout_id}")

        try:
            items = self._query_workout_items(workout_id)
        except RepoError as e:
            logger.error(f"Repo error querying workout: {e}")
            raise WorkoutRepoError("Failed to query workout from database") from e

        logger.debug(f"Query returned {len(items)} items")

        if not items:
            return None

        return self._to_model(items)

    def find_by_user_id(self, user_id: int, page_request: PageRequest) -> Page[Workout]:
        """
        Return one page of the user's workouts, newest first.
        """
        logger.debug(f"Fetching workouts for user {user_id}, page={page_request}")

        try:
            index_items = self._safe_query(
                KeyConditionExpression=Key("PK").eq(db.build_user_pk(user_id))
                & Key("SK").begins_with("WORKOUT#")
            )
        except RepoError as e:
            logger.error(f"Repo error fetching workout index: {e}")
            raise WorkoutRepoError("Failed to fetch workouts from database") from e

        index_items.sort(
            key=lambda i: (dates.iso_to_dt(i["started_at"]), db.parse_workout_id(i["SK"])),
            reverse=True,
        )
        start = page_request.offset
        page_items = index_items[start : start + page_request.size]

        workouts = []
        for item in page_items:
            workout = self.find_by_id(db.parse_workout_id(item["SK"]))
            if workout is None:
                logger.warning(f"Dangling index entry {item['SK']} for user {user_id}")
                continue
            workouts.append(workout)

        return Page[Workout](
            items=workouts,
            page=page_request.page,
            size=page_request.size,
            total=len(index_items),
        )

    # ----------------------- Save -----------------------------

    def save(self, workout: Workout) -> Workout:
        """
        Insert or fully replace a workout, including its exercises and sets.
        """
        try:
            saved = assign_ids(workout, self._next_id)
        except RepoError as e:
            logger.error(f"Failed to allocate ids: {e}")
            raise WorkoutRepoError("Failed to allocate workout ids") from e

        workout_id = entity_id_to_int(saved.id)
        logger.debug(
            f"Saving workout {workout_id} with {len(saved.exercises)} exercises"
        )

        meta, exercises, index = self._workout_to_items(saved)
        new_keys = {item["SK"] for item in exercises}

        try:
            existing = self._query_workout_items(workout_id)
            stale = [
                {"PK": item["PK"], "SK": item["SK"]}
                for item in existing
                if item.get("type") == "exercise" and item["SK"] not in new_keys
            ]
            self._safe_delete_many(stale)

            self._safe_put(meta)
            for item in exercises:
                logger.debug(f"Writing exercise item {item['SK']}")
                self._safe_put(item)
            self._safe_put(index)
        except RepoError as e:
            logger.error(f"Failed to save workout: {e}")
            raise WorkoutRepoError("Failed to save workout to database") from e

        return saved

    # ----------------------- Delete -----------------------------

    def delete(self, workout_id: int) -> None:
        """
        Delete a workout, its exercises and its index entry.
        """
        logger.debug(f"Deleting workout {workout_id}")

        try:
            items = self._query_workout_items(workout_id)
            logger.debug(f"Found {len(items)} items to delete")

            if not items:
                logger.debug("No items found, nothing to delete")
                return

            keys = [{"PK": item["PK"], "SK": item["SK"]} for item in items]
            for item in items:
                if item.get("type") == "workout":
                    keys.append(
                        {
                            "PK": db.build_user_pk(int(item["user_id"])),
                            "SK": db.build_workout_index_sk(workout_id),
                        }
                    )

            self._safe_delete_many(keys)
        except RepoError as e:
            logger.error(f"Failed to delete workout: {e}")
            raise WorkoutRepoError("Failed to delete workout from database") from e
