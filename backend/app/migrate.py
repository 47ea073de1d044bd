"""Apply Alembic migrations when a database is configured.

Usage::

    python -m app.migrate            # skip quietly without a database URL
    python -m app.migrate --required # fail without a database URL
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from app.config import Settings, settings as default_settings
from app.database import normalize_database_url

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent
ALEMBIC_INI = BACKEND_DIR / "alembic.ini"


def alembic_config(url: str) -> Config:
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    # configparser interpolation treats % specially (percent-encoded passwords)
    cfg.set_main_option("sqlalchemy.url", normalize_database_url(url).replace("%", "%%"))
    return cfg


def run_migrations(settings: Settings, revision: str = "head") -> bool:
    """Upgrade to ``revision``. Returns False if no database is configured."""
    if not settings.is_db_configured:
        logger.info("Skipping migrations (no database URL configured)")
        return False
    command.upgrade(alembic_config(settings.migration_url), revision)
    logger.info("Database schema upgraded to %s", revision)
    return True


def main(argv: Optional[list[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = argparse.ArgumentParser(description="Apply RSVP database migrations if configured.")
    parser.add_argument("--required", action="store_true", help="fail when no database URL is configured")
    parser.add_argument("--revision", default="head", help="target revision (default: head)")
    args = parser.parse_args(argv)

    settings = settings or default_settings
    if not settings.is_db_configured and args.required:
        logger.error(
            "No database URL configured. Set POSTGRES_PRISMA_URL and POSTGRES_URL_NON_POOLING "
            "(or DATABASE_URL) in the environment, .env or .env.local."
        )
        return 1
    run_migrations(settings, args.revision)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=default_settings.LOG_LEVEL.upper())
    sys.exit(main())
