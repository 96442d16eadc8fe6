from __future__ import annotations

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from hotsho.application.dto.pagination import PaginationConfig
from hotsho.services.pagination_params import (
    ParamsNormalizer,
    coerce_pagination_params,
    parse_pagination_params,
)

Dispatch = Callable[[Request, RequestResponseEndpoint], Awaitable[Response]]


def pagination_middleware(
    config: PaginationConfig | None = None,
    *,
    normalizer: ParamsNormalizer = coerce_pagination_params,
) -> Dispatch:
    """Build an HTTP middleware that stores the descriptor on ``request.state``.

    The returned function always hands the request on to ``call_next``.
    """

    async def dispatch(request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.pagination = parse_pagination_params(
            request.query_params, config, normalizer=normalizer,
        )
        return await call_next(request)

    return dispatch


class PaginationMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        config: PaginationConfig | None = None,
        normalizer: ParamsNormalizer = coerce_pagination_params,
    ) -> None:
        super().__init__(app, dispatch=pagination_middleware(config, normalizer=normalizer))
