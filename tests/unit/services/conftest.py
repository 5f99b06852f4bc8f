import pytest

from liftit.repositories.workout import InMemoryWorkoutRepository
from liftit.services.workout import WorkoutService


class RecordingWorkoutRepo(InMemoryWorkoutRepository):
    """
    In-memory repo that records which port methods the service called.
    """

    def __init__(self):
        super().__init__()
        self.calls: list[str] = []

    def save(self, workout):
        self.calls.append("save")
        return super().save(workout)

    def find_by_id(self, workout_id):
        self.calls.append("find_by_id")
        return super().find_by_id(workout_id)

    def find_by_user_id(self, user_id, page_request):
        self.calls.append("find_by_user_id")
        return super().find_by_user_id(user_id, page_request)

    def delete(self, workout_id):
        self.calls.append("delete")
        return super().delete(workout_id)


@pytest.fixture
def repo() -> RecordingWorkoutRepo:
    return RecordingWorkoutRepo()


@pytest.fixture
def service(repo) -> WorkoutService:
    return WorkoutService(repo)


@pytest.fixture
def started(service, repo):
    """A workout started by USER_ID, with the setup calls cleared."""
    from tests.test_data import USER_ID

    workout = service.start(USER_ID)
    repo.calls.clear()
    return workout
