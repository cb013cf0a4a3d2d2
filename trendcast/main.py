"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trendcast.api import router as admin_router
from trendcast.api.errors import register_exception_handlers
from trendcast.core.config import get_config
from trendcast.core.container import container
from trendcast.core.database import check_connection
from trendcast.core.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Handles startup and shutdown events for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    storage = container.storage()
    housekeeper = container.housekeeper()
    # Startup
    logger.info("Starting TrendCast application", env=config.app_env)

    # Create tables only in development with an available DB
    if config.is_development:
        if await check_connection(storage.engine):
            await storage.create_schema()
            logger.info("Database initialized")
        else:
            logger.warning("Database connection not available, skipping initialization")

    housekeeper.start()

    yield

    # Shutdown
    logger.info("Shutting down TrendCast application")
    await housekeeper.stop()
    await container.http_client().close()
    await storage.close()
    logger.info("Cleanup complete")


# Create FastAPI application
_config = get_config()
app = FastAPI(
    title=_config.app_name,
    description="Trend discovery and short-form video production",
    version="0.1.0",
    docs_url="/docs" if _config.is_development else None,
    redoc_url="/redoc" if _config.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials=_config.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(admin_router)


# Health check endpoint
@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    cfg = get_config()
    return {
        "status": "healthy",
        "app": cfg.app_name,
        "env": cfg.app_env,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message
    """
    return {
        "message": "TrendCast API",
        "version": "0.1.0",
        "docs": "/docs" if get_config().is_development else "disabled",
    }
