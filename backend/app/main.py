"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.database import Database
from app.routers import rsvps

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    ``database`` may be injected (tests, embedding); otherwise one is created
    at startup from the configured URL and disposed at shutdown. With no URL
    configured the app still starts and the handlers answer in degraded mode.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if app.state.database is None and settings.is_db_configured:
            owned = Database(settings.database_url, echo=settings.SQL_ECHO)
            # SQLite dev mode: no migrations, create tables directly
            if owned.is_sqlite:
                owned.create_all()
            app.state.database = owned
        elif app.state.database is None:
            logger.warning("No database URL configured; RSVP storage is disabled")
        yield
        if owned is not None:
            owned.dispose()
            app.state.database = None

    app = FastAPI(
        title="Birthday RSVP",
        description="RSVP collection and attendance counts for a single birthday party",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rsvps.router, prefix="/api/rsvps", tags=["RSVPs"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return app


logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
app = create_app()
