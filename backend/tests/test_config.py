"""Tests for settings resolution and connection URL normalization."""
from app.database import Database, normalize_database_url
from tests.conftest import make_settings


class TestSettings:

    def test_unconfigured_by_default(self):
        settings = make_settings()
        assert settings.database_url is None
        assert settings.migration_url is None
        assert not settings.is_db_configured

    def test_prisma_url_takes_priority(self):
        settings = make_settings(
            POSTGRES_PRISMA_URL="postgresql://pooled/db",
            POSTGRES_URL="postgresql://plain/db",
            POSTGRES_URL_NON_POOLING="postgresql://direct/db",
            DATABASE_URL="postgresql://generic/db",
        )
        assert settings.database_url == "postgresql://pooled/db"
        assert settings.migration_url == "postgresql://direct/db"
        assert settings.is_db_configured

    def test_falls_back_to_database_url(self):
        settings = make_settings(DATABASE_URL="sqlite:///./rsvp.db")
        assert settings.database_url == "sqlite:///./rsvp.db"
        assert settings.migration_url == "sqlite:///./rsvp.db"

    def test_empty_strings_count_as_unset(self):
        settings = make_settings(POSTGRES_PRISMA_URL="", POSTGRES_URL="", DATABASE_URL="")
        assert not settings.is_db_configured

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_URL", "postgresql://from-env/db")
        from app.config import Settings

        assert Settings(_env_file=None).database_url == "postgresql://from-env/db"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=sqlite:///./from-file.db\nLOG_LEVEL=DEBUG\n")
        from app.config import Settings

        settings = Settings(_env_file=str(env_file))
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.is_db_configured

    def test_cors_origins(self):
        settings = make_settings(CORS_ORIGINS="http://localhost:3000, https://festa.example.com,")
        assert settings.cors_origins == ["http://localhost:3000", "https://festa.example.com"]


class TestNormalizeDatabaseUrl:

    def test_postgres_scheme_rewritten(self):
        assert normalize_database_url("postgres://u:p@host:5432/db") == "postgresql://u:p@host:5432/db"

    def test_prisma_params_stripped(self):
        url = normalize_database_url(
            "postgres://u:p@host:5432/db?pgbouncer=true&connect_timeout=15"
        )
        assert url == "postgresql://u:p@host:5432/db?connect_timeout=15"

    def test_sqlite_untouched(self):
        assert normalize_database_url("sqlite:///./rsvp.db") == "sqlite:///./rsvp.db"

    def test_database_flags_sqlite(self, sqlite_url):
        database = Database(sqlite_url)
        try:
            assert database.is_sqlite
        finally:
            database.dispose()
