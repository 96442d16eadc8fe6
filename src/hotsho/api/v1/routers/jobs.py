from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Query

from hotsho.api.deps import JobCollectionDep, PaginationDep
from hotsho.api.v1.schemas.job import JobResponse
from hotsho.api.v1.schemas.pagination import CursorEnvelope, PageEnvelope, ScrollEnvelope
from hotsho.services import job_service

router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])


@router.get("", response_model=PageEnvelope[JobResponse])
async def list_jobs(
    jobs: JobCollectionDep,
    pagination: PaginationDep,
    status: str | None = Query(None),
) -> PageEnvelope[JobResponse]:
    page = await job_service.list_jobs(jobs, pagination, status)
    return PageEnvelope[JobResponse].model_validate(page, from_attributes=True)


@router.get("/feed", response_model=CursorEnvelope[JobResponse])
async def feed_jobs(
    jobs: JobCollectionDep,
    cursor: datetime | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = Query(None),
) -> CursorEnvelope[JobResponse]:
    page = await job_service.feed_jobs(jobs, cursor, limit, status)
    return CursorEnvelope[JobResponse].model_validate(page, from_attributes=True)


@router.get("/scroll", response_model=ScrollEnvelope[JobResponse])
async def scroll_jobs(
    jobs: JobCollectionDep,
    cursor: datetime | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = Query(None),
) -> ScrollEnvelope[JobResponse]:
    page = await job_service.scroll_jobs(jobs, cursor, limit, status)
    return ScrollEnvelope[JobResponse].model_validate(page, from_attributes=True)
