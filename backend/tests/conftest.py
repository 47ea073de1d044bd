"""Pytest fixtures — file-backed SQLite database per test, injected into the app."""
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import Database
from app.main import create_app

_URL_SETTINGS = ("POSTGRES_PRISMA_URL", "POSTGRES_URL", "POSTGRES_URL_NON_POOLING", "DATABASE_URL")


def make_settings(**overrides) -> Settings:
    """Settings isolated from the real environment and .env files."""
    values = {name: None for name in _URL_SETTINGS}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="function")
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture(scope="function")
def database(sqlite_url):
    """A provisioned database with all tables created."""
    db = Database(sqlite_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture(scope="function")
def db(database):
    """Yield a database session for direct assertions."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(database, sqlite_url):
    """TestClient for an app using the injected SQLite database."""
    app = create_app(make_settings(DATABASE_URL=sqlite_url), database=database)
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def unconfigured_client():
    """TestClient for an app with no database URL at all."""
    app = create_app(make_settings())
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def unprovisioned_client(sqlite_url):
    """TestClient whose database exists but has no tables (never migrated)."""
    bare = Database(sqlite_url)
    app = create_app(make_settings(DATABASE_URL=sqlite_url), database=bare)
    with TestClient(app) as c:
        yield c
    bare.dispose()


# ---------------------------------------------------------------------------
# Helper: submit an RSVP via the API, returns the JSON response dict
# ---------------------------------------------------------------------------
def submit_test_rsvp(client: TestClient, name: str = "Test Guest", **fields) -> dict:
    """Helper — POST /api/rsvps and return response JSON."""
    resp = client.post("/api/rsvps", json={"name": name, **fields})
    assert resp.status_code == 201, resp.text
    return resp.json()
