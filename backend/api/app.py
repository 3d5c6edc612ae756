"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .errors import register_exception_handlers
from .routes import health
from modules.users.routes import router as users_router
from modules.suggestions.routes import router as suggestions_router
from modules.shifts.routes import router as shifts_router
from modules.assignments.routes import router as assignments_router
from modules.worker_requests.routes import router as worker_requests_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage: {settings.storage_backend})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Staff scheduling, shift approvals and feedback API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(suggestions_router, prefix="/api/suggestions", tags=["suggestions"])
    app.include_router(shifts_router, prefix="/api/shifts", tags=["shifts"])
    app.include_router(assignments_router, prefix="/api/assignments", tags=["assignments"])
    app.include_router(
        worker_requests_router,
        prefix="/api/worker-requests",
        tags=["worker-requests"],
    )

    return app


# Application instance for uvicorn
app = create_app()
