from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Unsaved(BaseModel):
    """Identifier of an entity the repository has not stored yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unsaved"] = "unsaved"


class Id(BaseModel):
    """Identifier assigned by the repository on save."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["id"] = "id"
    value: int = Field(ge=1)


UNSAVED = Unsaved()

EntityId = Annotated[Union[Unsaved, Id], Field(discriminator="kind")]


def is_saved(entity_id: Unsaved | Id) -> bool:
    return isinstance(entity_id, Id)


def entity_id_from_int(value: int) -> Unsaved | Id:
    """
    Map the numeric convention used by storage and HTTP (0 = unsaved)
    onto an EntityId.
    """
    if value == 0:
        return UNSAVED
    return Id(value=value)


def entity_id_to_int(entity_id: Unsaved | Id) -> int:
    return entity_id.value if isinstance(entity_id, Id) else 0
