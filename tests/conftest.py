"""
Shared test fixtures — SQLite test database, test client, vocabulary seed.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from effort_estimator.database import Base, get_db
from effort_estimator.main import app
from effort_estimator.vocabulary import seed_activity_types


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables and seed the activity vocabulary before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        seed_activity_types(session)
    finally:
        session.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def estimation(client):
    """An empty estimation, as returned by the API."""
    response = client.post("/api/estimations/", json={"name": "Portal rollout"})
    assert response.status_code == 200
    return response.json()
