from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")

SortSpec = dict[str, int]


def _default_sort() -> SortSpec:
    return {"createdAt": -1}


@dataclass(frozen=True, slots=True)
class PaginationConfig:
    """Defaults and bounds applied when normalising pagination parameters."""

    page: int = 1
    limit: int = 20
    max_limit: int = 100
    default_sort: Mapping[str, int] = field(default_factory=_default_sort)


@dataclass(frozen=True, slots=True)
class PaginationDescriptor:
    page: int
    limit: int
    skip: int
    sort: SortSpec


@dataclass(frozen=True, slots=True)
class QueryOptions:
    select: str | list[str] | None = None
    populate: str | list[str] | None = None
    lean: bool = True


@dataclass(frozen=True, slots=True)
class CursorOptions:
    cursor: Any = None
    limit: int = 20
    sort_field: str = "_id"
    sort_order: int = -1
    select: str | list[str] | None = None
    populate: str | list[str] | None = None
    lean: bool = True


@dataclass(frozen=True, slots=True)
class PageInfo:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None
    prev_page: int | None


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    data: list[T]
    pagination: PageInfo


@dataclass(frozen=True, slots=True)
class CursorInfo:
    has_more: bool
    next_cursor: Any
    count: int
    limit: int


@dataclass(frozen=True, slots=True)
class CursorPage(Generic[T]):
    data: list[T]
    pagination: CursorInfo


@dataclass(frozen=True, slots=True)
class ScrollPage(Generic[T]):
    items: list[T]
    next_cursor: Any
    has_more: bool
