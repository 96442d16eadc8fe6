from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotsho.api.middleware.pagination import PaginationMiddleware
from hotsho.api.v1.routers import health, jobs
from hotsho.application.exceptions import ValidationError
from hotsho.config import settings
from hotsho.infrastructure.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info(
        "Pagination defaults: limit=%d max_limit=%d sort=%s",
        settings.PAGINATION_DEFAULT_LIMIT,
        settings.PAGINATION_MAX_LIMIT,
        dict(settings.pagination.default_sort),
    )
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="HotSho API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PaginationMiddleware, config=settings.pagination)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(jobs.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.detail})
