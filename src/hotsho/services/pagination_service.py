"""Offset and cursor query executors over a QueryableCollection."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from hotsho.application.dto.pagination import (
    CursorInfo,
    CursorOptions,
    CursorPage,
    Page,
    PaginationDescriptor,
    QueryOptions,
)
from hotsho.application.ports.query import QueryBuilder, QueryableCollection
from hotsho.services.pagination_params import apply_pagination
from hotsho.services.pagination_responses import create_paginated_response

logger = logging.getLogger(__name__)


def _prepare_query(
    collection: QueryableCollection,
    filter: Mapping[str, Any],
    options: QueryOptions | CursorOptions,
) -> QueryBuilder:
    query = collection.find(filter)
    if options.select:
        query = query.select(options.select)
    if options.populate:
        query = query.populate(options.populate)
    if options.lean is not False:
        query = query.lean()
    return query


async def _collect(query: QueryBuilder) -> list[Any]:
    return list(await query)


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


async def execute_paginated_query(
    collection: QueryableCollection,
    filter: Mapping[str, Any],
    descriptor: PaginationDescriptor,
    options: QueryOptions | None = None,
) -> Page[Any]:
    """Fetch one offset page and the total count concurrently.

    The data query and the count run independently, so a write landing
    between them can leave ``total_items`` out of step with ``data``.
    """
    options = options or QueryOptions()
    query = _prepare_query(collection, filter, options)

    rows, total = await asyncio.gather(
        _collect(apply_pagination(query, descriptor)),
        collection.count_documents(filter),
    )

    logger.debug(
        "Offset query on %s: page=%d limit=%d rows=%d total=%d",
        type(collection).__name__, descriptor.page, descriptor.limit, len(rows), total,
    )
    return create_paginated_response(rows, total, descriptor)


async def execute_cursor_query(
    collection: QueryableCollection,
    filter: Mapping[str, Any],
    options: CursorOptions | None = None,
) -> CursorPage[Any]:
    """Keyset pagination: filter past the cursor and over-fetch by one row."""
    options = options or CursorOptions()
    field, order, limit = options.sort_field, options.sort_order, options.limit

    query_filter = dict(filter)
    if options.cursor is not None:
        if order == -1:
            query_filter[field] = {"$lt": options.cursor}
        elif order == 1:
            query_filter[field] = {"$gt": options.cursor}

    query = _prepare_query(collection, query_filter, options)
    rows = list(await query.sort({field: order}).limit(limit + 1))

    has_more = len(rows) > limit
    if has_more:
        rows = rows[:limit]
    next_cursor = _field_value(rows[-1], field) if has_more and rows else None

    logger.debug(
        "Cursor query on %s: cursor=%r limit=%d rows=%d has_more=%s",
        type(collection).__name__, options.cursor, limit, len(rows), has_more,
    )
    return CursorPage(
        data=rows,
        pagination=CursorInfo(
            has_more=has_more,
            next_cursor=next_cursor,
            count=len(rows),
            limit=limit,
        ),
    )
