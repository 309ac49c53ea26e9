"""Shared test fixtures for cardcatalog-core."""

import sqlite3

import pytest

from cardcatalog.auth.token import TokenConfig, TokenIssuer, TokenVerifier
from cardcatalog.config import Settings
from cardcatalog.db import Core, get_core
from cardcatalog.db.seed import seed_catalog
from cardcatalog.main import create_app
from cardcatalog.schema import SCHEMA_PATH

TEST_SECRET = "test-secret-key-for-pytest"
TEST_PASSWORD = "secret1"


@pytest.fixture
def test_settings(tmp_path):
    """Settings for one test: temp database file, test secret, fast bcrypt."""
    return Settings(
        database_path=str(tmp_path / "cardcatalog-test.db"),
        jwt_secret=TEST_SECRET,
        jwt_expires_in="24h",
        bcrypt_work_factor=4,
        environment="test",
    )


@pytest.fixture
def app(test_settings):
    """Create an app bound to the test settings. Each test gets a fresh database."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def core(app, test_settings):
    """Autocommit Core on the app's database."""
    core = get_core(database_path=test_settings.database_path)
    yield core
    core.close()


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:", isolation_level=None)
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")
    db.executescript(SCHEMA_PATH.read_text())

    yield db

    db.close()


@pytest.fixture
def memory_core(test_db):
    """Core wrapping the in-memory test database."""
    return Core(test_db)


@pytest.fixture
def token_config():
    return TokenConfig(secret=TEST_SECRET, expires_in="24h")


@pytest.fixture
def issuer(token_config):
    return TokenIssuer(token_config)


@pytest.fixture
def verifier(token_config):
    return TokenVerifier(token_config)


@pytest.fixture
def registered_user(client):
    """Register kim through the API.

    Returns the response's data object: {"user": {...}, "token": ..., "tokenExpires": ...}
    """
    response = client.post(
        "/api/auth/register",
        json={"username": "kim", "email": "kim@x.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    return response.get_json()["data"]


@pytest.fixture
def auth_headers(registered_user):
    """Get authentication headers with the registered user's JWT token."""
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def seeded_catalog(app, test_settings):
    """Load the sample catalog into the app's database."""
    with get_core(atomic=True, database_path=test_settings.database_path) as core:
        seed_catalog(core)
