import boto3

from liftit.settings import settings

REGION_NAME = settings.REGION
TABLE_NAME = settings.DDB_TABLE_NAME

WORKOUT_META_SK = "META"
COUNTER_PK = "COUNTER"


def get_dynamo_resource():
    return boto3.resource("dynamodb", region_name=REGION_NAME)


def get_table():
    resource = get_dynamo_resource()
    return resource.Table(TABLE_NAME)  # type: ignore


def build_user_pk(user_id: int) -> str:
    """
    Partition key for a user's workout index.
    Example: USER#7
    """
    return f"USER#{user_id}"


def build_workout_pk(workout_id: int) -> str:
    """
    Partition key shared by a workout and its exercises.
    Example: WORKOUT#42
    """
    return f"WORKOUT#{workout_id}"


def build_workout_index_sk(workout_id: int) -> str:
    """
    Sort key of a workout's entry under the owner's partition, e.g.:
    WORKOUT#42
    """
    return f"WORKOUT#{workout_id}"


def build_exercise_sk(position: int) -> str:
    """
    Build the SK for an exercise item by its position in the workout, e.g.:
    EXERCISE#001
    """
    return f"EXERCISE#{position:03d}"


def build_counter_sk(name: str) -> str:
    """
    Sort key of an id counter item.
    Example: SEQ#workout
    """
    return f"SEQ#{name}"


def parse_workout_id(key: str) -> int:
    """
    Extract the numeric id from WORKOUT#<id>.
    """
    parts = key.split("#")
    if len(parts) != 2 or parts[0] != "WORKOUT":
        raise ValueError(f"Invalid workout key format: {key}")
    return int(parts[1])


def parse_exercise_position(key: str) -> int:
    """
    Extract the numeric position from EXERCISE#<position>.
    """
    parts = key.split("#")
    if len(parts) != 2 or parts[0] != "EXERCISE":
        raise ValueError(f"Invalid exercise key format: {key}")
    return int(parts[1])
