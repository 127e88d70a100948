"""
Application factory - creates and configures the FastAPI application.
This isolates all initialization logic from main.py.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from taskmind import __version__
from taskmind.api.routes.health import router as health_router
from taskmind.api.routes.mcp import router as mcp_router
from taskmind.api.routes.tasks import router as tasks_router
from taskmind.dependencies.services import ServiceContainer, get_services, set_services
from taskmind.exceptions.handlers import setup_exception_handlers
from taskmind.monitoring import MetricsMiddleware
from taskmind.tracing import setup_tracing, instrument_fastapi, instrument_database, instrument_httpx

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services and tracing on startup."""
    logger.info("Application starting up...")
    services = get_services()
    logger.info("Services initialized")

    try:
        setup_tracing(services.settings)
        instrument_fastapi(app)
        instrument_database()
        instrument_httpx()
        logger.info("Distributed tracing enabled")
    except Exception:
        logger.warning("Failed to initialize tracing, continuing without it", exc_info=True)

    yield

    logger.info("Application shutting down...")
    logger.info("Shutdown complete")


def create_app(services: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: Pre-built service container (tests inject one backed by a temp database)

    Returns:
        Configured FastAPI app instance
    """
    if services is not None:
        set_services(services)

    app = FastAPI(
        title="Task Management MCP Server",
        description="AI-powered task management with MCP",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(MetricsMiddleware)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(mcp_router)
    app.include_router(tasks_router)

    @app.get("/")
    async def root():
        """Service information."""
        return {
            "name": "task-management-server",
            "version": __version__,
            "endpoints": {
                "mcp": "/mcp",
                "tasks": "/api/tasks",
                "health": "/health",
                "metrics": "/metrics",
            },
        }

    return app
