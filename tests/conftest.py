"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database wired in through the
get_db dependency override.
"""

import os

# must be set before the inventory package reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.client.sdk import InventoryClient
from inventory.client.storage import SessionStore
from inventory.db.init_db import init_db
from inventory.db.session import get_db
from inventory.main import app as fastapi_app
from inventory.models.base import Base


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def app(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    client.post("/api/auth/register", json={"username": "alice", "password": "s3cret"})
    resp = client.post("/api/auth/login", json={"username": "alice", "password": "s3cret"})
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def sample_product():
    return {"name": "Widget", "category": "Tools", "quantity": 5, "price": 9.99}


@pytest.fixture
def api_client(client):
    """SDK talking to the test app, with an in-memory session store."""
    return InventoryClient(store=SessionStore(path=None), http=client)
