"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from hotsho.application.dto.pagination import PaginationDescriptor
from hotsho.application.ports.query import QueryableCollection
from hotsho.config import settings
from hotsho.infrastructure.db.collection import SqlAlchemyCollection
from hotsho.infrastructure.db.models import JobModel
from hotsho.infrastructure.db.session import AsyncSessionLocal
from hotsho.services.pagination_params import parse_pagination_params


def get_job_collection() -> QueryableCollection:
    return SqlAlchemyCollection(AsyncSessionLocal, JobModel)


JobCollectionDep = Annotated[QueryableCollection, Depends(get_job_collection)]


def get_pagination(request: Request) -> PaginationDescriptor:
    """Descriptor attached by the pagination middleware, parsed here if absent."""
    descriptor = getattr(request.state, "pagination", None)
    if descriptor is None:
        descriptor = parse_pagination_params(request.query_params, settings.pagination)
    return descriptor


PaginationDep = Annotated[PaginationDescriptor, Depends(get_pagination)]
