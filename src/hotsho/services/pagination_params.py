"""Turn raw query parameters into a PaginationDescriptor."""
from __future__ import annotations

import math
import re
from typing import Any, Callable, Mapping

from hotsho.application.dto.pagination import PaginationConfig, PaginationDescriptor
from hotsho.application.exceptions import ValidationError
from hotsho.application.ports.query import QueryBuilder

ParamsNormalizer = Callable[[Mapping[str, Any], PaginationConfig], PaginationDescriptor]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Any) -> int | None:
    """Parse the leading integer of ``value`` ("12abc" -> 12), None if there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _build_sort(raw: Mapping[str, Any], config: PaginationConfig) -> dict[str, int]:
    sort_by = raw.get("sortBy")
    if sort_by:
        return {str(sort_by): 1 if raw.get("sortOrder") == "asc" else -1}
    return dict(config.default_sort)


def coerce_pagination_params(
    raw: Mapping[str, Any],
    config: PaginationConfig,
) -> PaginationDescriptor:
    """Lenient normaliser: never raises, silently replaces bad input.

    An unparseable or non-positive ``limit`` falls back to the configured
    default limit, while an oversized one is clamped to ``max_limit``.
    """
    page = _parse_int(raw.get("page"))
    if page is None:
        page = config.page
    page = max(page, 1)

    limit = _parse_int(raw.get("limit"))
    if limit is None or limit < 1:
        limit = config.limit
    limit = min(limit, config.max_limit)

    return PaginationDescriptor(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort=_build_sort(raw, config),
    )


def strict_pagination_params(
    raw: Mapping[str, Any],
    config: PaginationConfig,
) -> PaginationDescriptor:
    """Validating normaliser: rejects malformed input with ValidationError."""
    values: dict[str, int] = {}
    for key, default in (("page", config.page), ("limit", config.limit)):
        value = raw.get(key)
        if value is None or value == "":
            values[key] = default
            continue
        try:
            values[key] = int(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValidationError(f"{key} must be an integer") from exc
        if values[key] < 1:
            raise ValidationError(f"{key} must be >= 1")

    if values["limit"] > config.max_limit:
        raise ValidationError(f"limit must be <= {config.max_limit}")

    sort_order = raw.get("sortOrder")
    if sort_order is not None and sort_order not in ("asc", "desc"):
        raise ValidationError("sortOrder must be 'asc' or 'desc'")

    page, limit = values["page"], values["limit"]
    return PaginationDescriptor(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort=_build_sort(raw, config),
    )


def parse_pagination_params(
    raw: Mapping[str, Any] | None,
    config: PaginationConfig | None = None,
    *,
    normalizer: ParamsNormalizer = coerce_pagination_params,
) -> PaginationDescriptor:
    return normalizer(raw or {}, config or PaginationConfig())


def apply_pagination(query: QueryBuilder, descriptor: PaginationDescriptor) -> QueryBuilder:
    return query.skip(descriptor.skip).limit(descriptor.limit).sort(descriptor.sort)
