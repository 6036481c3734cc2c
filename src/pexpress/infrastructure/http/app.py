"""FastAPI application for the stock endpoints.

``create_app`` builds and configures the app: logging, CORS headers on
every response, and the translation of domain exceptions into the JSON
error bodies the order form expects (``{"error": ...}``).  Run it with::

    uvicorn --factory pexpress.infrastructure.http.app:create_app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pexpress.domain.exceptions import (
    ConfigurationError,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    StockConflictError,
    UpstreamError,
    ValidationError,
)
from pexpress.infrastructure.config import SanityConfig
from pexpress.infrastructure.http.routes import router
from pexpress.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION: list[tuple[type[DomainException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InsufficientStockError, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (StockConflictError, status.HTTP_409_CONFLICT),
    (UpstreamError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def cors_headers(config: SanityConfig) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": config.allowed_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    }


def create_app(config: SanityConfig | None = None) -> FastAPI:
    config = config or SanityConfig.from_env()
    setup_logging(config.log_level)

    app = FastAPI(title="pexpress stock API")
    app.state.config = config
    app.include_router(router)

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(cors_headers(config))
        return response

    app.add_exception_handler(DomainException, _domain_error)
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)
    return app


# --- Exception handlers -------------------------------------------------------


async def _domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("[%s] %s", request.url.path, exc, exc_info=exc)

    body: dict = {"error": str(exc)}
    if isinstance(exc, (InsufficientStockError, StockConflictError)):
        if exc.current_stock is not None:
            body["currentStock"] = exc.current_stock
    item = getattr(exc, "item", None)
    if item is not None:
        body["item"] = {
            "productId": item.product_id,
            "rowKey": item.row_key,
            "qty": item.quantity,
        }
    return JSONResponse(status_code=status_code, content=body)


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        message = "Invalid JSON payload"
    else:
        fields = sorted({str(e["loc"][-1]) for e in errors if e.get("loc")})
        message = "Invalid or missing fields: " + ", ".join(fields)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[%s] unexpected error", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "Unknown error"},
        # Served outside the middleware stack, so CORS headers are added here
        headers=cors_headers(request.app.state.config),
    )


def _status_for(exc: DomainException) -> int:
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
