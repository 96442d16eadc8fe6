from __future__ import annotations

from typing import Any, Generator, Mapping, Protocol, Self


class QueryBuilder(Protocol):
    """Chainable find() result; awaiting it yields the matching rows."""

    def select(self, fields: str | list[str]) -> Self: ...
    def populate(self, spec: str | list[str]) -> Self: ...
    def lean(self) -> Self: ...
    def skip(self, n: int) -> Self: ...
    def limit(self, n: int) -> Self: ...
    def sort(self, spec: Mapping[str, int]) -> Self: ...
    def __await__(self) -> Generator[Any, None, list[Any]]: ...


class QueryableCollection(Protocol):
    def find(self, filter: Mapping[str, Any]) -> QueryBuilder: ...

    async def count_documents(self, filter: Mapping[str, Any]) -> int: ...
