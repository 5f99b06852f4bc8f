from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from liftit.main import app
from liftit.models.ids import UNSAVED, Id
from liftit.models.weight import Weight, WeightUnit
from liftit.models.workout import Workout, WorkoutExercise, WorkoutSet, WorkoutStatus
from liftit.utils import auth as auth_utils
from liftit.utils import dates
from tests.test_data import TEST_EXERCISE_ID, TEST_STARTED_AT, USER_ID


@pytest.fixture
def fixed_now(monkeypatch) -> datetime:
    now = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    monkeypatch.setattr(dates, "now", lambda: now)
    return now


# --------------- Test Clients ---------------


@pytest.fixture(scope="session")
def app_instance():
    return app


@pytest.fixture
def client(app_instance):
    """Plain client, real dependencies."""
    return TestClient(app_instance, raise_server_exceptions=False)


@pytest.fixture
def authenticated_client(app_instance):
    """
    Client with auth.require_user_id overridden to always
    resolve to USER_ID.
    """

    app_instance.dependency_overrides[auth_utils.require_user_id] = lambda: USER_ID
    client = TestClient(app_instance, raise_server_exceptions=False)

    try:
        yield client
    finally:
        # Clean up so other tests see the real dependency
        app_instance.dependency_overrides.pop(auth_utils.require_user_id, None)


# --------------- Model Factories ---------------


@pytest.fixture
def set_factory() -> Callable[..., WorkoutSet]:
    def _make(**overrides: Any) -> WorkoutSet:
        defaults = {
            "set_number": 1,
            "reps": 8,
            "weight": Weight(value=60.0, unit=WeightUnit.KG),
            "rpe": 7,
        }
        return WorkoutSet(**{**defaults, **overrides})

    return _make


@pytest.fixture
def exercise_factory() -> Callable[..., WorkoutExercise]:
    def _make(**overrides: Any) -> WorkoutExercise:
        defaults = {
            "id": UNSAVED,
            "exercise_id": TEST_EXERCISE_ID,
            "order": 1,
            "sets": (),
            "notes": None,
        }
        return WorkoutExercise(**{**defaults, **overrides})

    return _make


@pytest.fixture
def workout_factory() -> Callable[..., Workout]:
    def _make(**overrides: Any) -> Workout:
        defaults = {
            "id": Id(value=1),
            "user_id": USER_ID,
            "started_at": TEST_STARTED_AT,
            "completed_at": None,
            "status": WorkoutStatus.IN_PROGRESS,
            "notes": "Felt strong",
            "exercises": (),
            "created_at": TEST_STARTED_AT,
            "created_by": USER_ID,
            "updated_at": TEST_STARTED_AT,
            "updated_by": USER_ID,
        }
        return Workout(**{**defaults, **overrides})

    return _make
