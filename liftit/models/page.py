import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)  # zero-based
    size: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    items: list[T]
    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @classmethod
    def slice(cls, items: list[T], page_request: PageRequest) -> "Page[T]":
        """Cut one page out of an already-sorted list."""
        start = page_request.offset
        end = start + page_request.size
        return cls(
            items=items[start:end],
            page=page_request.page,
            size=page_request.size,
            total=len(items),
        )
