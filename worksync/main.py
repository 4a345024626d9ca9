"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, worksync.api, worksync.observability, worksync.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worksync import __version__
from worksync.api import api_router
from worksync.api.errors import register_exception_handlers
from worksync.boundary.db import dispose_engine
from worksync.boundary.db.create_tables import create_all_tables
from worksync.configs import get_settings
from worksync.observability.logger import configure_logging
from worksync.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events: logging, schema creation and
    engine disposal.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    if settings.database.create_tables_on_startup:
        try:
            await create_all_tables()
        except Exception as e:
            logger.exception(
                "Failed to initialize database schema",
                extra={"error": str(e)},
            )
            raise

    yield

    await dispose_engine()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Work Session Sync API",
        description="Work session lifecycle and offline checklist progress reconciliation",
        version=__version__,
        lifespan=lifespan,
    )

    # Added last = outermost, so request logs carry the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "worksync.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
