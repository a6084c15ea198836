"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, q5search.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from q5search import __version__
from q5search.api.deps.dependencies import get_service_cache
from q5search.configs import Settings, get_settings
from q5search.observability.logger import configure_logging
from q5search.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    admin_router,
    chat_router,
    feed_router,
    health_router,
    jobs_router,
    search_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and drops cached services on shutdown.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(
        f"{__name__}:lifespan - Starting ({cache.settings.environment}), "
        f"embedding provider={cache.settings.embedding.provider}"
    )

    yield

    cache.clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Application settings (cached environment settings if None)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        debug=settings.debug,
        title="Quantum5ocial Search API",
        description="Semantic search, assistant, job recommendations and personalized feed",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and the request log carries the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    for router in (health_router, admin_router, search_router, chat_router, jobs_router, feed_router):
        app.include_router(router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "q5search.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
