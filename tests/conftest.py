import json
import os
import shutil
import tempfile

# Configuration is read at import time, so the environment is prepared first.
_TMP = tempfile.mkdtemp(prefix="aila-admin-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'main.db')}"
os.environ["LAWYER_DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'lawyers.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["GENERATION_SERVICE_URL"] = "http://generation.test/chat"
os.environ["KYC_ENABLED"] = "true"
os.environ["CREATE_TABLES"] = "true"
os.environ["ENVIRONMENT"] = "test"

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from aila_admin.api.generation import GenerationClient, get_generation_client  # noqa: E402
from aila_admin.database.config.config import settings  # noqa: E402
from aila_admin.database.config.connection_engine import (  # noqa: E402
    connection_engine,
    lawyer_connection_engine,
    lawyer_metadata,
    metadata,
)
from aila_admin.database.core.accounts import grant_admin  # noqa: E402
from aila_admin.database.helpers.transactionManagement import LawyerSessionLocal  # noqa: E402
from aila_admin.main import app  # noqa: E402

DEFAULT_PASSWORD = "secret123"


class FakeGeneration:
    """Stands in for the generation service; records every request body."""

    def __init__(self):
        self.requests = []
        self.respond = lambda request: httpx.Response(200, json={"reply": "Model reply"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        return self.respond(request)

    def client(self) -> GenerationClient:
        return GenerationClient(
            url=settings.GENERATION_SERVICE_URL,
            timeout=1.0,
            fallback=settings.GENERATION_FALLBACK_REPLY,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def generation():
    fake = FakeGeneration()
    app.dependency_overrides[get_generation_client] = fake.client
    yield fake
    app.dependency_overrides.pop(get_generation_client, None)


@pytest.fixture
def client(generation):
    with TestClient(app) as c:
        yield c
    metadata.drop_all(connection_engine)
    lawyer_metadata.drop_all(lawyer_connection_engine)
    shutil.rmtree(settings.UPLOAD_DIR, ignore_errors=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, username, email=None, password=DEFAULT_PASSWORD, full_name="Test User", **extra):
    body = {
        "fullName": full_name,
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
        **extra,
    }
    return client.post("/accounts", json=body)


def login(client, email, password=DEFAULT_PASSWORD) -> str:
    resp = client.post("/sessions", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def signup_and_login(client, username, **kwargs) -> str:
    resp = register(client, username, **kwargs)
    assert resp.status_code == 201, resp.text
    return login(client, resp.json()["user"]["email"], kwargs.get("password", DEFAULT_PASSWORD))


def seed_lawyer_db(*records):
    session = LawyerSessionLocal()
    try:
        session.add_all(records)
        session.commit()
        return [r.id for r in records]
    finally:
        session.close()


@pytest.fixture
def user_token(client):
    return signup_and_login(client, "alice")


@pytest.fixture
def admin_token(client):
    resp = register(client, "admin", full_name="Site Admin")
    assert resp.status_code == 201, resp.text
    grant_admin(email="admin@example.com")
    return login(client, "admin@example.com")
