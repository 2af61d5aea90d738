import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.v1.routes.health import router as health_router
from app.api.v1.routes.movies import router as movies_router
from app.config import settings
from app.core.database_init import initialize_database
from app.infrastructure.persistence.db import Database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    logger.info("Starting up application...")

    database = getattr(app.state, "database", None)
    owns_database = database is None
    if owns_database:
        database = Database.from_settings(settings)
        app.state.database = database

    # A store that never answers is fatal: do not start serving
    initialize_database(
        database,
        retries=settings.DB_CONNECT_RETRIES,
        delay_seconds=settings.DB_CONNECT_RETRY_DELAY_SECONDS,
        create_tables=settings.DB_CREATE_TABLES,
    )

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if owns_database:
        database.dispose()
        app.state.database = None


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Create FastAPI application and include routers.

    Args:
        database: Store to use instead of the one built from settings at startup
    """
    app = FastAPI(
        title="Movie Catalog API",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(movies_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
