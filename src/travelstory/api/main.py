"""FastAPI application entry point.

Main application configuration, middleware, and startup lifecycle.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from travelstory.core.config import Settings, get_settings
from travelstory.models.database import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Open the database engine and connection pool
    - Create tables when configured to (development and tests)

    Shutdown:
    - Close database connections
    """
    settings: Settings = app.state.settings

    logger.info("Initializing database connection...")
    engine_kwargs = {}
    if not settings.is_sqlite:
        engine_kwargs = {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
        }
    database = Database(settings.async_database_url, **engine_kwargs)
    if settings.database_create_tables:
        await database.create_all()
    app.state.database = database
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await database.close()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with (defaults to the cached environment settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    is_production = settings.environment == "production"

    app = FastAPI(
        title="Travel Story API",
        description="Travel journal stories with photos, favourites and shared access",
        version=settings.app_version,
        docs_url="/api/docs" if not is_production else None,
        redoc_url="/api/redoc" if not is_production else None,
        openapi_url="/api/openapi.json" if not is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Wildcard origins cannot be combined with credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Import and register routers
    from travelstory.api.routers import auth, health, stories

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(stories.router, tags=["stories"])

    # Register exception handlers
    from travelstory.api.exceptions import register_exception_handlers
    register_exception_handlers(app)

    return app


# Application instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "travelstory.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        workers=settings.workers if settings.environment == "production" else 1,
    )
