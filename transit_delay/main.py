"""
Transit Delay Predictor API - Main FastAPI application.

Predicts transit delays for a route/stop/time and serves dashboard statistics
over the stored prediction queries.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from transit_delay import __version__
from transit_delay.config import Settings, get_settings
from transit_delay.database import Database
from transit_delay.logging_config import configure_logging
from transit_delay.routers import predictions, queries, stats
from transit_delay.schemas.health import HealthResponse
from transit_delay.services.predictor import DelayPredictor
from transit_delay.utils.timezone import utc_now

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s in %s mode...", settings.app_name, settings.app_env)
    await app.state.database.init_db()
    logger.info("Database initialized.")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.database.dispose()


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface as 500s; nothing is retried."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def create_app(
    settings: Optional[Settings] = None,
    predictor: Optional[DelayPredictor] = None,
) -> FastAPI:
    """Build the application with its database and predictor attached."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Transit delay predictions and query statistics",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.database = Database(settings.async_database_url, echo=settings.debug)
    app.state.predictor = predictor or DelayPredictor(
        on_time_threshold=settings.on_time_threshold_minutes,
    )

    # CORS middleware - allow the frontend to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    @app.get("/")
    async def root():
        """Root endpoint - basic service info."""
        return {
            "app": settings.app_name,
            "version": __version__,
            "status": "running",
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint for monitoring."""
        return HealthResponse(status="ok", timestamp=utc_now().isoformat())

    # Routers
    app.include_router(predictions.router, prefix="/api", tags=["Predictions"])
    app.include_router(stats.router, prefix="/api/stats", tags=["Statistics"])
    app.include_router(queries.router, prefix="/api/queries", tags=["Queries"])

    return app
