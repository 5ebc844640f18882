"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
import logging
from typing import Dict, Any

from taskboard.config import settings
from taskboard.infrastructure.db.database import create_all_tables
from taskboard.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware
from taskboard.infrastructure.web.routers import (
    users,
    boards,
    columns,
    tasks,
    labels,
    comments
)

# Configure logging
logging.basicConfig(
    level=settings.effective_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Setup and teardown operations.
    """
    # Startup
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    if settings.auto_create_tables:
        create_all_tables()
        logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info("Shutting down application")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add trusted host middleware for production
    if settings.is_production:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=["*"]
        )

    # Add custom error handler middleware
    app.add_middleware(ErrorHandlerMiddleware)

    # Include routers
    app.include_router(
        users.router,
        prefix=f"{settings.api_prefix}/users",
        tags=["Users"]
    )
    app.include_router(
        boards.router,
        prefix=f"{settings.api_prefix}/boards",
        tags=["Boards"]
    )
    app.include_router(
        columns.router,
        prefix=settings.api_prefix,
        tags=["Columns"]
    )
    app.include_router(
        tasks.router,
        prefix=settings.api_prefix,
        tags=["Tasks"]
    )
    app.include_router(
        labels.router,
        prefix=settings.api_prefix,
        tags=["Labels"]
    )
    app.include_router(
        comments.router,
        prefix=settings.api_prefix,
        tags=["Comments & Attachments"]
    )

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if settings.debug else None,
            "health": f"{settings.api_prefix}/health"
        }

    # Health check endpoints
    @app.get("/health")
    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "version": settings.api_version
        }

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Report invalid input with the same error code the use cases use."""
        return JSONResponse(
            status_code=422,
            content={
                "detail": {
                    "error_code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "errors": jsonable_encoder(exc.errors())
                }
            }
        )

    # Custom 404 handler
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        """
        404 for unknown paths. Route-level 404s keep their own detail.
        """
        detail = getattr(exc, "detail", None)
        if isinstance(detail, dict):
            return JSONResponse(status_code=404, content={"detail": detail})
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": f"The path {request.url.path} was not found",
                "path": request.url.path
            }
        )

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.effective_log_level.lower(),
    )
