from __future__ import annotations

import pytest

from hotsho.application.dto.pagination import PaginationConfig, PaginationDescriptor
from hotsho.application.exceptions import ValidationError
from hotsho.services.pagination_params import (
    apply_pagination,
    parse_pagination_params,
    strict_pagination_params,
)
from tests.conftest import FakeQuery


def test_defaults_when_no_params():
    result = parse_pagination_params({})
    assert result == PaginationDescriptor(page=1, limit=20, skip=0, sort={"createdAt": -1})


def test_none_params_use_defaults():
    assert parse_pagination_params(None).page == 1


def test_config_defaults():
    config = PaginationConfig()
    assert config.page == 1
    assert config.limit == 20
    assert config.max_limit == 100
    assert dict(config.default_sort) == {"createdAt": -1}


@pytest.mark.parametrize("page", ["0", "-5", "abc", "", None, 0, -1])
def test_invalid_page_becomes_one(page):
    assert parse_pagination_params({"page": page}).page == 1


@pytest.mark.parametrize("limit", ["0", "-3", "invalid", "", None, 0])
def test_invalid_limit_falls_back_to_default_not_one(limit):
    assert parse_pagination_params({"limit": limit}).limit == 20


def test_invalid_limit_uses_overridden_default():
    result = parse_pagination_params({"limit": "-1"}, PaginationConfig(limit=35))
    assert result.limit == 35


@pytest.mark.parametrize("limit", ["101", "200", "99999"])
def test_limit_clamped_to_max(limit):
    assert parse_pagination_params({"limit": limit}).limit == 100


def test_limit_clamped_to_custom_max():
    result = parse_pagination_params({"limit": "500"}, PaginationConfig(max_limit=250))
    assert result.limit == 250


@pytest.mark.parametrize(
    ("page", "limit", "skip"),
    [("1", "20", 0), ("3", "20", 40), ("5", "10", 40), ("7", "1", 6)],
)
def test_skip_derived_from_page_and_limit(page, limit, skip):
    result = parse_pagination_params({"page": page, "limit": limit})
    assert result.skip == skip
    assert result.skip == (result.page - 1) * result.limit


def test_leading_integer_is_parsed():
    result = parse_pagination_params({"page": "4abc", "limit": " 15"})
    assert result.page == 4
    assert result.limit == 15


def test_sort_by_ascending():
    assert parse_pagination_params({"sortBy": "name", "sortOrder": "asc"}).sort == {"name": 1}


@pytest.mark.parametrize("order", [None, "desc", "ASC", "ascending"])
def test_sort_by_anything_but_asc_is_descending(order):
    raw = {"sortBy": "name"}
    if order is not None:
        raw["sortOrder"] = order
    assert parse_pagination_params(raw).sort == {"name": -1}


def test_sort_order_without_sort_by_keeps_default_sort():
    assert parse_pagination_params({"sortOrder": "asc"}).sort == {"createdAt": -1}


def test_custom_default_sort_is_copied():
    config = PaginationConfig(default_sort={"appliedAt": 1})
    result = parse_pagination_params({}, config)
    assert result.sort == {"appliedAt": 1}
    result.sort["other"] = -1
    assert dict(config.default_sort) == {"appliedAt": 1}


def test_custom_limit_override():
    result = parse_pagination_params({}, PaginationConfig(limit=50, max_limit=200))
    assert result.limit == 50


def test_page_three_of_ten():
    result = parse_pagination_params({"page": "3", "limit": "10"})
    assert result == PaginationDescriptor(page=3, limit=10, skip=20, sort={"createdAt": -1})


def test_sort_only_query():
    result = parse_pagination_params({"sortBy": "name", "sortOrder": "asc"})
    assert result == PaginationDescriptor(page=1, limit=20, skip=0, sort={"name": 1})


def test_custom_normalizer_is_used():
    result = parse_pagination_params(
        {"page": "2"}, normalizer=lambda raw, config: PaginationDescriptor(9, 9, 72, {}),
    )
    assert result.page == 9


def test_strict_accepts_valid_input():
    result = parse_pagination_params(
        {"page": "2", "limit": "10", "sortBy": "title", "sortOrder": "desc"},
        normalizer=strict_pagination_params,
    )
    assert result == PaginationDescriptor(page=2, limit=10, skip=10, sort={"title": -1})


@pytest.mark.parametrize(
    "raw",
    [
        {"page": "abc"},
        {"page": "0"},
        {"limit": "-1"},
        {"limit": "101"},
        {"sortOrder": "sideways"},
    ],
)
def test_strict_rejects_malformed_input(raw):
    with pytest.raises(ValidationError):
        parse_pagination_params(raw, normalizer=strict_pagination_params)


def test_apply_pagination_chains_skip_limit_sort():
    query = FakeQuery([], {})
    descriptor = PaginationDescriptor(page=3, limit=10, skip=20, sort={"name": 1})

    result = apply_pagination(query, descriptor)

    assert result is query
    assert query.calls == [("skip", 20), ("limit", 10), ("sort", {"name": 1})]
