"""Wire shapes of the pagination envelopes (camelCase JSON)."""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageInfoSchema(_CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None
    prev_page: int | None


class PageEnvelope(_CamelModel, Generic[T]):
    data: list[T]  # type: ignore[type-var]
    pagination: PageInfoSchema


class CursorInfoSchema(_CamelModel):
    has_more: bool
    next_cursor: Any = None
    count: int
    limit: int


class CursorEnvelope(_CamelModel, Generic[T]):
    data: list[T]  # type: ignore[type-var]
    pagination: CursorInfoSchema


class ScrollEnvelope(_CamelModel, Generic[T]):
    items: list[T]  # type: ignore[type-var]
    next_cursor: Any = None
    has_more: bool
