"""
Tailor Shop Order API - main application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import structlog

from tailorshop.api.api import api_router
from tailorshop.core.config import Settings, settings as default_settings
from tailorshop.core.exceptions import PersistenceError
from tailorshop.core.logging import configure_logging
from tailorshop.db.database import Database
from tailorshop.services.artifact_store import ArtifactStore

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings = app.state.settings
    logger.info("Starting Tailor Shop Order API", version=app_settings.APP_VERSION)
    logger.info("Initializing database", database_url=app_settings.DATABASE_URL)

    try:
        app.state.database.create_tables()
        app.state.database.check_connection()
        app.state.artifact_store.ensure_ready()
        logger.info("Database connection verified", upload_dir=app_settings.UPLOAD_DIR)
    except Exception as e:
        logger.error("Failed to connect to the database", error=str(e), cause=str(e.__cause__))
        raise

    yield

    logger.info("Shutting down Tailor Shop Order API")
    app.state.database.dispose()


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around its own database and image store"""
    app_settings = app_settings or default_settings
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="Order tracking for a tailoring shop",
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url="/redoc" if app_settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = Database(app_settings.DATABASE_URL)
    app.state.artifact_store = ArtifactStore(app_settings.UPLOAD_DIR)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    # Stored style images are republished as-is; the directory is created at startup
    app.mount(
        app_settings.UPLOAD_URL_PATH,
        StaticFiles(directory=app_settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    @app.get("/")
    async def root():
        return {
            "message": "Tailor Shop API is running!",
            "version": app_settings.APP_VERSION,
        }

    @app.get("/health")
    def health_check(request: Request):
        try:
            request.app.state.database.check_connection()
        except PersistenceError as e:
            logger.error("Health check failed", error=str(e.__cause__))
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "version": app_settings.APP_VERSION, "database": "unreachable"},
            )
        return {"status": "healthy", "version": app_settings.APP_VERSION, "database": "ok"}

    return app


app = create_application()
