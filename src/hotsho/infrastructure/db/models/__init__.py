"""Import all models so Alembic can discover them via Base.metadata."""
from hotsho.infrastructure.db.models.company import CompanyModel
from hotsho.infrastructure.db.models.job import JobModel

__all__ = [
    "CompanyModel",
    "JobModel",
]
