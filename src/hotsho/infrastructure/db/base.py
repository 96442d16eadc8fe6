from __future__ import annotations

from typing import Any

from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    @property
    def _id(self) -> Any:
        """Primary key under the document-style name cursor queries sort on."""
        mapper = sa_inspect(type(self))
        return getattr(self, mapper.get_property_by_column(mapper.primary_key[0]).key)
