from __future__ import annotations

from datetime import datetime
from typing import Any

from hotsho.application.dto.pagination import (
    CursorOptions,
    CursorPage,
    Page,
    PaginationDescriptor,
    QueryOptions,
    ScrollPage,
)
from hotsho.application.ports.query import QueryableCollection
from hotsho.services.pagination_responses import infinite_scroll_response
from hotsho.services.pagination_service import execute_cursor_query, execute_paginated_query

JOB_FEED_SORT_FIELD = "created_at"


def _job_filter(status: str | None) -> dict[str, Any]:
    return {"status": status} if status else {}


async def list_jobs(
    jobs: QueryableCollection,
    descriptor: PaginationDescriptor,
    status: str | None = None,
) -> Page[Any]:
    return await execute_paginated_query(
        jobs, _job_filter(status), descriptor, QueryOptions(populate="company"),
    )


async def feed_jobs(
    jobs: QueryableCollection,
    cursor: datetime | None,
    limit: int,
    status: str | None = None,
) -> CursorPage[Any]:
    """Newest-first job feed keyed on ``created_at``."""
    return await execute_cursor_query(
        jobs,
        _job_filter(status),
        CursorOptions(
            cursor=cursor,
            limit=limit,
            sort_field=JOB_FEED_SORT_FIELD,
            sort_order=-1,
            populate="company",
        ),
    )


async def scroll_jobs(
    jobs: QueryableCollection,
    cursor: datetime | None,
    limit: int,
    status: str | None = None,
) -> ScrollPage[Any]:
    page = await feed_jobs(jobs, cursor, limit, status)
    return infinite_scroll_response(
        page.data, page.pagination.next_cursor, page.pagination.has_more,
    )
