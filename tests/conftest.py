import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_tasklist.db")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database import SessionLocal, Base, engine

PASSWORD = "SecurePass123!"


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def new_email(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def register_and_login(client: TestClient, email: str, password: str = PASSWORD) -> dict:
    """Return Authorization headers for a freshly registered user."""
    r = client.post("/register", json={"email": email, "password": password})
    assert r.status_code == 201
    r = client.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client, new_email())
