# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import health_router, login_router, notes_router, testing_router, users_router
from .config import Settings, get_settings
from .core.exceptions import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import Database

# Setup logging first
setup_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle for the lifetime of the app."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting Notely application",
        extra={"version": settings.app_version, "environment": settings.environment, "debug": settings.debug},
    )

    if settings.skip_lifespan_db:
        logger.info("Skipping database setup (SKIP_LIFESPAN_DB is set)")
        yield
        return

    db = Database(settings.database_url, echo=settings.database_echo)
    await db.connect()
    try:
        await db.create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error("Failed to create database tables", exc_info=e)
        await db.disconnect()
        raise

    app.state.db = db
    try:
        yield
    finally:
        logger.info("Shutting down Notely application")
        await db.disconnect()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Note taking API",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(notes_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(login_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    if settings.is_test:
        app.include_router(testing_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "Notely API"}

    # Basic unprefixed health endpoint for load balancers
    @app.get("/health")
    async def basic_health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("notely.main:app", host=_settings.host, port=_settings.port, reload=_settings.reload)
