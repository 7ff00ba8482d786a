"""
FastAPI Application Entry Point.

Wires the database, routes and static files for the guestbook service.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from guestbook.api import comments, health
from guestbook.core.config import find_project_root, get_app_config, get_database_url
from guestbook.core.database import dispose_database, init_database
from guestbook.core.exception_handlers import register_exception_handlers
from guestbook.core.logging import get_logger, setup_logging
from guestbook.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


def _build_lifespan(database_url: str | None):
    """Create the lifespan handler bound to an explicit database URL."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app_config = get_app_config()
        setup_logging(level=app_config.logging.level)

        url = database_url or get_database_url()
        await init_database(
            url,
            create_schema=app_config.database.create_tables_on_startup,
        )

        logger.info(
            "Application starting",
            extra={
                "app_name": app_config.application.name,
                "env": app_config.application.environment,
            },
        )
        yield
        await dispose_database()
        logger.info("Application shutting down")

    return lifespan


def _mount_static(app: FastAPI, directory: Path) -> bool:
    """Serve files from ``directory`` at / when it exists."""
    if not directory.is_dir():
        logger.warning("Static directory not found", extra={"directory": str(directory)})
        return False
    app.mount("/", StaticFiles(directory=str(directory), html=True), name="static")
    logger.debug("Static files mounted", extra={"directory": str(directory)})
    return True


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database_url: SQLAlchemy URL selecting the storage backend. When
            omitted, the URL is built from DSN at startup.
    """
    app_config = get_app_config()
    app_settings = app_config.application
    features = app_config.features

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=_build_lifespan(database_url),
    )

    if features.api_request_logging:
        app.add_middleware(RequestContextMiddleware)

    if app_settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    if features.health_endpoints_enabled:
        app.include_router(health.router, tags=["health"])
    app.include_router(comments.router, prefix="/api/comments", tags=["comments"])

    # Mounted last so /api and /health routes take precedence
    if app_settings.static.enabled:
        _mount_static(app, find_project_root() / app_settings.static.directory)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Creates the app on first call and caches it, avoiding import-time
    configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn guestbook.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
