"""
FastAPI application factory.

Lifespan:
  • On startup: verify DB connectivity, then sync the schema. Either
    failure is fatal, so the server never starts accepting connections.
  • On shutdown: dispose the engine cleanly.

Routers:
  • /api/auth: registration + login
  • /api/projects: Project CRUD
  • /: shallow liveness probe

Run with:
    python -m kijani
    uvicorn kijani.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kijani.core.config import Settings
from kijani.core.database import Database
from kijani.core.errors import install_error_handlers
from kijani.routers.auth import router as auth_router
from kijani.routers.projects import router as projects_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
    )


# ── Lifespan ────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    database: Database = app.state.database

    # Startup: the store must be reachable and in sync before serving
    try:
        await database.ping()
        logger.info("Database connection verified ✓")
        added = await database.sync_schema()
        logger.info("Schema synchronized ✓ (%d column(s) added)", len(added))
    except Exception:
        logger.exception("Failed to start server: database unavailable or schema sync failed")
        await database.dispose()
        raise

    yield  # ← application runs here

    # Shutdown: clean up connection pool
    await database.dispose()
    logger.info("Database engine disposed ✓")


# ── App ─────────────────────────────────────────────────────
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an app bound to `settings` (read from the environment if omitted)."""
    if settings is None:
        settings = Settings()  # type: ignore[call-arg]

    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Users, bearer-token auth, and owner-scoped Projects.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # Mount routers
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(projects_router, prefix="/api/projects")

    # ── Liveness ────────────────────────────────────────────
    @app.get("/", tags=["System"], summary="Liveness probe")
    async def root() -> dict[str, str]:
        """Shallow health check, confirms the process is alive."""
        return {"message": "Kijani backend running"}

    return app
