"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tenantgate.core.auth import InvalidInputError, StoreUnavailableError
from tenantgate.core.config import settings
from tenantgate.core.logging import configure_logging
from tenantgate.api.routes import router as api_router
from tenantgate.api.middleware import RequestContextMiddleware, get_request_id

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    from tenantgate.models.database import close_db, init_db

    logger.info("app.startup", version=settings.app_version, environment=settings.environment)
    if settings.database.create_tables:
        await init_db()

    yield

    await close_db()
    logger.info("app.shutdown")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(RequestContextMiddleware)

    # Routes
    app.include_router(api_router, prefix="/api")

    # Exception handlers
    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(
            status_code=400,
            content={"error": "invalid_input", "message": str(exc)},
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.warning("tenancy_store.unavailable", error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"error": "service_unavailable", "message": "Please retry later"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.exception("request.failed")
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": str(exc) if settings.debug else "An error occurred",
                "request_id": get_request_id(),
            },
        )

    # Health checks
    @app.get("/health")
    async def health_check():
        """Quick health check endpoint (for load balancers)."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tenantgate.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=settings.workers,
    )
