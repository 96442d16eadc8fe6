from __future__ import annotations

import math
from typing import Any, TypeVar

from hotsho.application.dto.pagination import (
    Page,
    PageInfo,
    PaginationDescriptor,
    ScrollPage,
)

T = TypeVar("T")


def create_paginated_response(
    data: list[T],
    total: int,
    descriptor: PaginationDescriptor,
) -> Page[T]:
    """Wrap one page of rows with offset pagination metadata.

    ``len(data)`` is not checked against ``total`` or the page size.
    """
    page, limit = descriptor.page, descriptor.limit
    total_pages = math.ceil(total / limit) if total else 0
    has_next = page < total_pages
    has_prev = page > 1
    return Page(
        data=data,
        pagination=PageInfo(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=has_next,
            has_prev_page=has_prev,
            next_page=page + 1 if has_next else None,
            prev_page=page - 1 if has_prev else None,
        ),
    )


def infinite_scroll_response(data: list[T], cursor: Any, has_more: bool) -> ScrollPage[T]:
    return ScrollPage(
        items=data,
        next_cursor=cursor if has_more else None,
        has_more=has_more,
    )
