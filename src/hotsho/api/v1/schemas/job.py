from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class CompanyResponse(BaseModel):
    id: UUID
    name: str
    website: str | None = None

    model_config = {"from_attributes": True}


class JobResponse(BaseModel):
    id: UUID
    title: str
    status: str
    location: str | None = None
    company: CompanyResponse | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
