"""
Shared fixtures: in-memory SQLite behind the real app, bearer tokens, and API clients
(one driving the app through TestClient, one factory over httpx.MockTransport).
"""
import os

# Settings are read at import time; point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-ishaazi-livestock-services-0123456789"
os.environ["JWT_ALG"] = "HS256"
os.environ["ADMIN_ROLES"] = "admin,system_admin"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import ishaazi.models  # noqa: F401
from ishaazi.client.api_client import ApiClient
from ishaazi.client.config import ClientConfig
from ishaazi.db.base import Base
from ishaazi.db.session import get_db
from ishaazi.main import app
from ishaazi.security.jwt_utils import create_token
from ishaazi.services.content_service import publish_content


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    # No context manager: the lifespan (and its scheduler) is not started in tests
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token():
    return create_token("editor-1", role="admin")


@pytest.fixture
def reader_token():
    return create_token("reader-1")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def reader_headers(reader_token):
    return {"Authorization": f"Bearer {reader_token}"}


@pytest.fixture
def blog(db):
    item, _ = publish_content(db, "blogs", "Feeding calves through the dry season", notify=False)
    return item


@pytest.fixture
def app_api(client, tmp_path):
    """ApiClient talking to the real app (TestClient is an httpx.Client)."""
    config = ClientConfig(base_url="http://testserver", storage_path=tmp_path / "storage.json")
    return ApiClient(config, http_client=client)


class RecordingHandler:
    """MockTransport handler that records requests and answers from a callable."""

    def __init__(self, respond):
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def make_api(tmp_path):
    """Factory: make_api(respond, token=None) -> (ApiClient, RecordingHandler)."""
    clients = []

    def _make(respond, token=None):
        handler = RecordingHandler(respond)
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        config = ClientConfig(base_url="http://api.test", storage_path=tmp_path / "storage.json")
        api = ApiClient(config, http_client=http_client)
        if token:
            api.token_store.token = token
        return api, handler

    yield _make
    for c in clients:
        c.close()
