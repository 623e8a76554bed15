"""Main FastAPI application for casebook-service."""

import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from casebook import __version__
from casebook.api.routes.cases import router as cases_router
from casebook.config import Settings, settings
from casebook.infrastructure.database import DatabaseClient
from casebook.models import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(app_settings: Settings):
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    The database client is created on startup and stored on ``app.state``;
    route dependencies read it from there.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded settings)
    """
    app_settings = app_settings or settings
    configure_logging(app_settings)

    app = FastAPI(
        title="Casebook Service",
        description="Versioned case authoring and per-user case sharing",
        version=__version__,
    )
    app.state.settings = app_settings
    app.state.db_client = None

    # Services trust X-User-* headers from the API Gateway (no JWT validation here)
    logger.info("Service trusts X-User-* headers from API Gateway (no JWT validation)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(cases_router)

    @app.on_event("startup")
    async def startup():
        """Initialize database on startup."""
        logger.info(f"Starting {app_settings.service_name} on port {app_settings.port}")
        logger.info(f"Environment: {app_settings.environment}")
        logger.info(f"Database: {app_settings.database_url}")

        db_client = DatabaseClient(
            app_settings.database_url,
            storage_timeout_seconds=app_settings.storage_timeout_seconds,
        )
        try:
            await db_client.verify_connection(
                retries=app_settings.connect_retries,
                delay_seconds=app_settings.connect_retry_delay_seconds,
            )

            # Alembic is the source of truth for deployed schemas;
            # create_tables() covers local and test setups
            await db_client.create_tables()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            await db_client.close()
            raise

        app.state.db_client = db_client

    @app.on_event("shutdown")
    async def shutdown():
        """Clean up resources on shutdown."""
        logger.info("Shutting down service")
        if app.state.db_client is not None:
            await app.state.db_client.close()
            app.state.db_client = None

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="""
Returns the health status of the Casebook Service.

**Response Example**:
```json
{
  "status": "healthy",
  "service": "casebook-service",
  "version": "1.0.0",
  "database": "sqlite+aiosqlite"
}
```

**Storage**: No database query (reports connection type only)
**Authorization**: None required (public endpoint)
        """,
        responses={200: {"description": "Service is healthy and operational"}},
    )
    async def health_check(request: Request):
        """Health check endpoint."""
        current = request.app.state.settings
        return HealthResponse(
            status="healthy",
            service=current.service_name,
            version=__version__,
            database=current.database_url.split("://")[0],
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "casebook.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )
