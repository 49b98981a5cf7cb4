"""FastAPI application factory for clusterlint.

Usage::

    from clusterlint.api.app import create_app

    app = create_app(config=config)

Serve with ``uvicorn --factory clusterlint.api.app:create_app``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clusterlint.api.routes import router
from clusterlint.api.schemas import ErrorResponse
from clusterlint.models.config import ClusterlintConfig

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"


def create_app(config: ClusterlintConfig | None = None) -> FastAPI:
    """Create and configure the clusterlint FastAPI application.

    Args:
        config: ClusterlintConfig. Only ``analysis.max_workers`` is used.

    Returns:
        Configured FastAPI application, ready to be served by uvicorn.
    """
    from clusterlint import __version__

    config = config or ClusterlintConfig()

    app = FastAPI(
        title="clusterlint",
        summary="Route/Service relationship diagnostics",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )
    app.state.config = config
    app.state.max_workers = config.analysis.max_workers

    app.include_router(router, prefix=_API_PREFIX)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map Pydantic validation errors to our error envelope."""
        errors = exc.errors()
        first_msg = str(errors[0].get("msg", "")) if errors else ""
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="INVALID_REQUEST", detail=first_msg).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions; never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="INTERNAL_ERROR",
                detail="An unexpected error occurred.",
            ).model_dump(),
        )

    return app
