"""Database handle — engine, session factory and declarative base.

A ``Database`` is built once per process by the application lifespan (or
injected by the caller) and handed to request handlers through FastAPI
dependencies. Nothing here is created at import time.
"""
import logging
from typing import Iterator, Optional

from fastapi import HTTPException, Request, status
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()

# Query parameters understood by Prisma / pgbouncer but rejected by libpq.
_PRISMA_ONLY_PARAMS = ("pgbouncer", "schema")


def normalize_database_url(raw_url: str) -> str:
    """Make a provider-issued connection URL acceptable to SQLAlchemy."""
    if raw_url.startswith("postgres://"):
        raw_url = "postgresql://" + raw_url[len("postgres://"):]
    url = make_url(raw_url)
    if url.get_backend_name() == "postgresql":
        url = url.difference_update_query(_PRISMA_ONLY_PARAMS)
    return url.render_as_string(hide_password=False)


class Database:
    """Engine plus session factory for one connection URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = normalize_database_url(url)
        self.is_sqlite = self.url.startswith("sqlite")
        connect_args = {"check_same_thread": False} if self.is_sqlite else {}
        self.engine = create_engine(
            self.url,
            echo=echo,
            connect_args=connect_args,
            pool_pre_ping=not self.is_sqlite,
        )
        if self.is_sqlite:
            # SQLite only honours ON DELETE CASCADE with foreign keys enabled
            @event.listens_for(self.engine, "connect")
            def _set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        """Create all tables (dev / SQLite mode; Postgres goes through Alembic)."""
        import app.models  # noqa: F401  registers models on Base.metadata

        Base.metadata.create_all(bind=self.engine)
        logger.info("Created database tables on %s", self.engine.url.render_as_string())

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Optional[Database]:
    """The app's database, or None when storage is not configured."""
    return request.app.state.database


def require_database(request: Request) -> Database:
    """Fail fast with 503 when storage is not configured."""
    database = get_database(request)
    if database is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="database not configured",
        )
    return database


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session bound to the app's database, closed after the request."""
    session = require_database(request).session()
    try:
        yield session
    finally:
        session.close()
