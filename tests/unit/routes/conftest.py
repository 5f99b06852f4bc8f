import pytest

from liftit.repositories.workout import InMemoryWorkoutRepository
from liftit.routes import workout as workout_routes


@pytest.fixture
def memory_repo(app_instance):
    """
    Override get_workout_repo() with an in-memory repo for the duration of a test.
    """
    repo = InMemoryWorkoutRepository()
    app_instance.dependency_overrides[workout_routes.get_workout_repo] = lambda: repo
    try:
        yield repo
    finally:
        app_instance.dependency_overrides.pop(workout_routes.get_workout_repo, None)


@pytest.fixture
def repo_raises(monkeypatch):
    """
    Make a repository method raise the given exception.
    Usage:
        repo_raises(memory_repo, "find_by_id", WorkoutRepoError("boom"))
    """

    def _apply(repo, method_name: str, exc: Exception):
        def _raise(*args, **kwargs):
            raise exc

        monkeypatch.setattr(repo, method_name, _raise)

    return _apply


@pytest.fixture
def exercise_payload():
    def _make(**overrides):
        data = {
            "exercise_id": 10,
            "order": 1,
            "notes": None,
            "sets": [
                {
                    "set_number": 1,
                    "reps": 8,
                    "weight": {"value": 60.5, "unit": "KG"},
                    "rpe": 8,
                }
            ],
        }
        data.update(overrides)
        return data

    return _make
