"""FastAPI application factory.

Main entry point for the SkillUp Web API.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillup import __version__
from skillup.config.app_config import load_app_config
from skillup.db.database import init_db
from skillup.web.routes import (
    assessments_router,
    auth_router,
    books_router,
    contests_router,
    courses_router,
    health_router,
    mentor_router,
    playground_router,
    progress_router,
    sessions_router,
)
from skillup.web.static import mount_client

logger = structlog.get_logger(__name__)


def create_app(
    db_path: Path | None = None,
    dev_mode: bool | None = None,
    static_dir: Path | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Database file (defaults to the configured path)
        dev_mode: Skip serving the built client (defaults to config)
        static_dir: Built client directory (defaults to config)

    Returns:
        Configured FastAPI app instance
    """
    config = load_app_config()
    database = Path(db_path) if db_path else config.database_path
    if dev_mode is None:
        dev_mode = config.server.dev_mode
    client_dir = Path(static_dir) if static_dir else Path(config.server.static_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for startup/shutdown events."""
        # Startup: refuse to sign tokens with the dev secret outside dev mode
        config.auth.get_secret_key(allow_dev_fallback=dev_mode)
        init_db(database)
        logger.info(
            "api_startup",
            database=str(database.absolute()),
            dev_mode=dev_mode,
            mentor_provider=config.mentor.default_provider,
        )
        yield
        # Shutdown (nothing to do for now)

    app = FastAPI(
        title="SkillUp API",
        description="Web API for the SkillUp education platform",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(courses_router)
    app.include_router(books_router)
    app.include_router(sessions_router)
    app.include_router(contests_router)
    app.include_router(progress_router)
    app.include_router(assessments_router)
    app.include_router(mentor_router)
    app.include_router(playground_router)

    # Built client last: its catch-all must not shadow API routes
    if not dev_mode:
        mount_client(app, client_dir)

    return app


# Default app instance for uvicorn
app = create_app()
