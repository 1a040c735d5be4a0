import pytest
from fastapi.testclient import TestClient

from jobquote.config import get_settings
from jobquote.services.catalog import DEFAULT_CATALOG


@pytest.fixture(autouse=True)
def settings_env(tmp_path, monkeypatch):
    """Fresh settings per test: temp SQLite database, no email transport."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'jobquote-test.db'}")
    monkeypatch.setenv("RESEND_API_KEY", "")
    monkeypatch.setenv("SMTP_USER", "")
    monkeypatch.setenv("SMTP_PASSWORD", "")
    monkeypatch.setenv("CATALOG_PATH", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from jobquote.main import app

    with TestClient(app) as c:
        yield c


def register(client, email="dan@brightsparkelectrical.com.au", business_name="Bright Spark Electrical"):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "sparky123", "business_name": business_name},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


@pytest.fixture
def electrician():
    return DEFAULT_CATALOG.get("residential_electrician")


@pytest.fixture
def plumber():
    return DEFAULT_CATALOG.get("maintenance_plumber")


@pytest.fixture
def handyman():
    return DEFAULT_CATALOG.get("general_handyman")
