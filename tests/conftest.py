"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Generator, Mapping

import pytest

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)

_OPERATORS = {
    "$eq": lambda a, b: a == b,
    "$ne": lambda a, b: a != b,
    "$lt": lambda a, b: a < b,
    "$lte": lambda a, b: a <= b,
    "$gt": lambda a, b: a > b,
    "$gte": lambda a, b: a >= b,
    "$in": lambda a, b: a in b,
    "$nin": lambda a, b: a not in b,
}


def _matches(row: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    for key, expected in filter.items():
        value = row.get(key)
        if isinstance(expected, Mapping):
            if not all(_OPERATORS[op](value, operand) for op, operand in expected.items()):
                return False
        elif value != expected:
            return False
    return True


def make_job(
    index: int,
    *,
    status: str = "applied",
    company: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "_id": index,
        "id": uuid.uuid4(),
        "title": f"Engineer {index}",
        "status": status,
        "location": None,
        "company": company,
        "created_at": _BASE_TIME + timedelta(minutes=index),
    }


@dataclass
class FakeQuery:
    """In-memory QueryBuilder that records every chained call."""

    _rows: list[dict[str, Any]]
    _filter: dict[str, Any]
    error: Exception | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)
    _skip: int = 0
    _limit: int | None = None
    _sort: dict[str, int] = field(default_factory=dict)
    _fields: list[str] = field(default_factory=list)

    def select(self, fields: str | list[str]) -> FakeQuery:
        self.calls.append(("select", fields))
        self._fields = fields.split() if isinstance(fields, str) else list(fields)
        return self

    def populate(self, spec: str | list[str]) -> FakeQuery:
        self.calls.append(("populate", spec))
        return self

    def lean(self) -> FakeQuery:
        self.calls.append(("lean", None))
        return self

    def skip(self, n: int) -> FakeQuery:
        self.calls.append(("skip", n))
        self._skip = n
        return self

    def limit(self, n: int) -> FakeQuery:
        self.calls.append(("limit", n))
        self._limit = n
        return self

    def sort(self, spec: Mapping[str, int]) -> FakeQuery:
        self.calls.append(("sort", dict(spec)))
        self._sort = dict(spec)
        return self

    def called(self, name: str) -> list[Any]:
        return [arg for call, arg in self.calls if call == name]

    async def _run(self) -> list[dict[str, Any]]:
        if self.error is not None:
            raise self.error
        rows = [dict(r) for r in self._rows if _matches(r, self._filter)]
        for key, direction in reversed(list(self._sort.items())):
            if not all(key in r for r in rows):
                continue  # unknown sort keys are ignored
            rows.sort(key=lambda r: r[key], reverse=direction == -1)
        rows = rows[self._skip:]
        if self._limit is not None:
            rows = rows[: self._limit]
        if self._fields:
            rows = [{k: r[k] for k in ["_id", *self._fields] if k in r} for r in rows]
        return rows

    def __await__(self) -> Generator[Any, None, list[dict[str, Any]]]:
        return self._run().__await__()


@dataclass
class FakeCollection:
    rows: list[dict[str, Any]] = field(default_factory=list)
    find_error: Exception | None = None
    count_error: Exception | None = None
    queries: list[FakeQuery] = field(default_factory=list)
    find_filters: list[dict[str, Any]] = field(default_factory=list)
    count_filters: list[dict[str, Any]] = field(default_factory=list)

    def find(self, filter: Mapping[str, Any]) -> FakeQuery:
        self.find_filters.append(dict(filter))
        query = FakeQuery(self.rows, dict(filter), error=self.find_error)
        self.queries.append(query)
        return query

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        self.count_filters.append(dict(filter))
        if self.count_error is not None:
            raise self.count_error
        return sum(1 for r in self.rows if _matches(r, filter))

    @property
    def last_query(self) -> FakeQuery:
        return self.queries[-1]


@pytest.fixture
def jobs() -> FakeCollection:
    return FakeCollection(rows=[make_job(i) for i in range(1, 26)])
