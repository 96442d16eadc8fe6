"""QueryableCollection adapter backed by SQLAlchemy async sessions.

Filters use the document-style operators the pagination services emit
(``{"created_at": {"$lt": ts}}``) and are translated into WHERE clauses.
Every awaited query and every count opens its own session, because an
AsyncSession cannot serve two concurrent statements.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Generator, Mapping, Self

from sqlalchemy import ColumnElement, Select, and_, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import load_only, selectinload

from hotsho.application.exceptions import UnknownFieldError, UnsupportedFilterError

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

_COMPARATORS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "$eq": lambda col, v: col == v,
    "$ne": lambda col, v: col != v,
    "$lt": lambda col, v: col < v,
    "$lte": lambda col, v: col <= v,
    "$gt": lambda col, v: col > v,
    "$gte": lambda col, v: col >= v,
    "$in": lambda col, v: col.in_(list(v)),
    "$nin": lambda col, v: col.not_in(list(v)),
}


def _attribute_key(model: type, name: str) -> str:
    """Resolve ``_id`` and camelCase names to a mapped attribute key."""
    mapper = sa_inspect(model)
    if name == "_id":
        return mapper.get_property_by_column(mapper.primary_key[0]).key
    for candidate in (name, _CAMEL_BOUNDARY.sub("_", name).lower()):
        if candidate in mapper.attrs:
            return candidate
    raise UnknownFieldError(f"Unknown field {name!r} on {model.__name__}")


def _column_key(model: type, name: str) -> str:
    key = _attribute_key(model, name)
    if key not in sa_inspect(model).column_attrs:
        raise UnknownFieldError(f"{name!r} is not a column of {model.__name__}")
    return key


def _relationship_key(model: type, name: str) -> str:
    key = _attribute_key(model, name)
    if key not in sa_inspect(model).relationships:
        raise UnknownFieldError(f"{name!r} is not a relationship of {model.__name__}")
    return key


def _split(spec: str | list[str]) -> list[str]:
    return spec.split() if isinstance(spec, str) else list(spec)


def _conjunction(conditions: list[ColumnElement[bool]]) -> ColumnElement[bool]:
    return and_(*conditions) if conditions else true()


def build_conditions(model: type, filter: Mapping[str, Any]) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    for key, value in filter.items():
        if key in ("$and", "$or"):
            if not value:
                raise UnsupportedFilterError(f"{key} requires a non-empty list")
            clauses = [_conjunction(build_conditions(model, sub)) for sub in value]
            conditions.append(and_(*clauses) if key == "$and" else or_(*clauses))
            continue
        if key.startswith("$"):
            raise UnsupportedFilterError(f"Unsupported operator {key!r}")

        column = getattr(model, _column_key(model, key))
        if isinstance(value, Mapping) and value and all(str(op).startswith("$") for op in value):
            for op, operand in value.items():
                comparator = _COMPARATORS.get(op)
                if comparator is None:
                    raise UnsupportedFilterError(f"Unsupported operator {op!r}")
                conditions.append(comparator(column, operand))
        else:
            conditions.append(column == value)
    return conditions


def _plain(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, (list, tuple, set)):
        return [_plain(item) for item in obj]
    return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(obj).mapper.column_attrs}


class SqlAlchemyQuery:
    """Chainable query builder; awaiting it runs the SELECT."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type,
        filter: Mapping[str, Any],
    ) -> None:
        self._session_factory = session_factory
        self._model = model
        self._conditions = build_conditions(model, filter)
        self._fields: list[str] = []
        self._populate: list[str] = []
        self._lean = False
        self._offset: int | None = None
        self._limit: int | None = None
        self._order_by: list[ColumnElement[Any]] = []
        self._sort_keys: dict[str, str] = {}

    def select(self, fields: str | list[str]) -> Self:
        self._fields = [_column_key(self._model, f) for f in _split(fields)]
        return self

    def populate(self, spec: str | list[str]) -> Self:
        self._populate = [_relationship_key(self._model, name) for name in _split(spec)]
        return self

    def lean(self) -> Self:
        self._lean = True
        return self

    def skip(self, n: int) -> Self:
        self._offset = n
        return self

    def limit(self, n: int) -> Self:
        self._limit = n
        return self

    def sort(self, spec: Mapping[str, int]) -> Self:
        self._order_by = []
        self._sort_keys = {}
        for name, direction in spec.items():
            key = _column_key(self._model, name)
            self._sort_keys[name] = key
            column = getattr(self._model, key)
            self._order_by.append(column.asc() if direction == 1 else column.desc())
        return self

    def statement(self) -> Select[Any]:
        stmt = select(self._model).where(*self._conditions)
        if self._fields:
            stmt = stmt.options(load_only(*(getattr(self._model, f) for f in self._loaded_keys())))
        for name in self._populate:
            stmt = stmt.options(selectinload(getattr(self._model, name)))
        if self._order_by:
            stmt = stmt.order_by(*self._order_by)
        if self._offset:
            stmt = stmt.offset(self._offset)
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt

    def _loaded_keys(self) -> list[str]:
        return list(dict.fromkeys([*self._fields, *self._sort_keys.values()]))

    def _to_dict(self, row: Any) -> dict[str, Any]:
        mapper = sa_inspect(self._model)
        if self._fields:
            pk = mapper.get_property_by_column(mapper.primary_key[0]).key
            keys = [pk, *self._loaded_keys()]
        else:
            keys = [attr.key for attr in mapper.column_attrs]
        data = {key: getattr(row, key) for key in keys}
        data["_id"] = row._id
        # lean rows also carry each sort field under the name it was requested by
        for name, key in self._sort_keys.items():
            data.setdefault(name, data[key])
        for name in self._populate:
            data[name] = _plain(getattr(row, name))
        return data

    async def _fetch(self) -> list[Any]:
        async with self._session_factory() as session:
            result = await session.execute(self.statement())
            rows = list(result.scalars().all())
            if self._lean:
                return [self._to_dict(row) for row in rows]
            return rows

    def __await__(self) -> Generator[Any, None, list[Any]]:
        return self._fetch().__await__()


class SqlAlchemyCollection:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type,
    ) -> None:
        self._session_factory = session_factory
        self._model = model

    def find(self, filter: Mapping[str, Any]) -> SqlAlchemyQuery:
        return SqlAlchemyQuery(self._session_factory, self._model, filter)

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        stmt = (
            select(func.count())
            .select_from(self._model)
            .where(*build_conditions(self._model, filter))
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()
