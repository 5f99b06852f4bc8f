from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────


def _client_error(
    op_name: str, *, code: str = "500", message: str | None = None
) -> ClientError:
    """
    Build a botocore ClientError for unit tests.
    """
    msg = message or f"Boom in {op_name}"
    return ClientError(
        error_response={"Error": {"Code": code, "Message": msg}},
        operation_name=op_name,
    )


@pytest.fixture
def client_error():
    """
    Fixture returning a helper function to build ClientError instances.
    Usage:
        err = client_error("Query")
    """
    return _client_error


def _to_dynamo(value):
    """Mimic boto3 serialisation: numbers come back as Decimal, floats are rejected."""
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, float):
        raise TypeError("Float types are not supported. Use Decimal types instead.")
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    raise TypeError(f"Unsupported type {type(value)}")


def _matches(condition, item: dict) -> bool:
    expr = condition.get_expression()
    op = expr["operator"]
    values = expr["values"]

    if op == "AND":
        return all(_matches(v, item) for v in values)

    key, operand = values
    actual = item.get(key.name)
    if op == "=":
        return actual == operand
    if op == "begins_with":
        return isinstance(actual, str) and actual.startswith(operand)
    raise NotImplementedError(op)


# ─────────────────────────────────────────────────────────────
# Fake DynamoDB Table + batch_writer
# ─────────────────────────────────────────────────────────────


OP_NAMES = {
    "query": "Query",
    "get_item": "GetItem",
    "put_item": "PutItem",
    "update_item": "UpdateItem",
    "batch_write_item": "BatchWriteItem",
}


class FakeBatchWriter:
    """
    Minimal stand-in for DynamoDB's batch_writer.
    Forwards delete_item calls to the parent FakeTable.
    """

    def __init__(self, table: "FakeTable"):
        self._table = table

    def __enter__(self) -> "FakeBatchWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        # Don't suppress exceptions
        return False

    def delete_item(self, Key: dict) -> None:
        self._table._maybe_fail("batch_write_item")
        self._table.deleted_keys.append(Key)
        self._table.items.pop((Key["PK"], Key["SK"]), None)


class FakeTable:
    """
    A small in-memory fake for a boto3 DynamoDB Table.

    - stores items keyed by (PK, SK) and evaluates Key() conditions in query
    - `page_size`: split query results into pages with LastEvaluatedKey
    - `fail_on`: set of operation names that should raise ClientError
      (e.g. {"query", "put_item"})
    """

    def __init__(self, *, fail_on: set[str] | None = None, page_size: int | None = None):
        self.items: dict[tuple[str, str], dict] = {}
        self.fail_on: set[str] = set(fail_on or [])
        self.page_size = page_size

        self.query_calls: list[dict] = []
        self.put_calls: list[dict] = []
        self.deleted_keys: list[dict] = []

    def _maybe_fail(self, op: str):
        name = OP_NAMES[op]
        if op in self.fail_on or name in self.fail_on:
            raise _client_error(name)

    def query(self, **kwargs):
        self._maybe_fail("query")
        self.query_calls.append(kwargs)

        condition = kwargs["KeyConditionExpression"]
        matched = [
            item
            for key, item in sorted(self.items.items())
            if _matches(condition, item)
        ]

        start = int(kwargs.get("ExclusiveStartKey", {}).get("offset", 0))
        if self.page_size is None:
            return {"Items": matched[start:]}

        end = start + self.page_size
        response: dict = {"Items": matched[start:end]}
        if end < len(matched):
            response["LastEvaluatedKey"] = {"offset": end}
        return response

    def get_item(self, **kwargs):
        self._maybe_fail("get_item")
        key = kwargs["Key"]
        item = self.items.get((key["PK"], key["SK"]))
        return {"Item": item} if item else {}

    def put_item(self, **kwargs):
        self._maybe_fail("put_item")
        item = _to_dynamo(kwargs["Item"])
        self.put_calls.append(item)
        self.items[(item["PK"], item["SK"])] = item
        return {}

    def update_item(self, **kwargs):
        self._maybe_fail("update_item")
        key = kwargs["Key"]
        attr = next(iter(kwargs["ExpressionAttributeNames"].values()))
        inc = kwargs["ExpressionAttributeValues"][":inc"]

        item = self.items.setdefault(
            (key["PK"], key["SK"]), {"PK": key["PK"], "SK": key["SK"]}
        )
        item[attr] = item.get(attr, Decimal(0)) + Decimal(inc)
        return {"Attributes": {attr: item[attr]}}

    def batch_writer(self):
        return FakeBatchWriter(self)


# ─────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────


@pytest.fixture
def fake_table() -> FakeTable:
    return FakeTable()


@pytest.fixture
def paged_table() -> FakeTable:
    return FakeTable(page_size=1)


@pytest.fixture
def failing_table_factory():
    def _make(*ops: str) -> FakeTable:
        return FakeTable(fail_on=set(ops))

    return _make
