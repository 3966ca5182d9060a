from __future__ import annotations

import os
import sys
import tempfile
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode runtime guards:
# - throwaway SQLite database, never a developer's Postgres
# - fixed signing secret so tokens can be minted in tests
_DB_DIR = Path(tempfile.mkdtemp(prefix="witti-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'witti.db'}"
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET", "witti-test-signing-secret-0123456789abcdef")
os.environ.setdefault("SEED_CATALOG_ON_START", "true")

from witti.db.database import SessionLocal  # noqa: E402
from witti.main import app  # noqa: E402

DEFAULT_PASSWORD = "teach1234!"


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def run_db(client):
    """Run ``fn(session)`` on the app's event loop and return its result."""

    def _run(fn):
        async def _call():
            async with SessionLocal() as session:
                return await fn(session)

        return client.portal.call(_call)

    return _run


def unique_email(prefix: str = "teacher") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}@witti.kr"


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def member(client) -> dict:
    """A freshly registered and logged-in member."""
    email = unique_email()
    signup = client.post(
        "/api/auth/signup",
        json={"email": email, "password": DEFAULT_PASSWORD, "name": "Park Sujin", "phone": "010-1234-5678"},
    )
    assert signup.status_code == 201, signup.text
    login = client.post("/api/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert login.status_code == 200, login.text
    body = login.json()
    return {
        "email": email,
        "user": body["user"],
        "token": body["token"],
        "headers": auth_headers(body["token"]),
    }
