import os

# Settings are read at import time; point the app at SQLite before importing it.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from catalog.main import app
from catalog.db.session import enable_sqlite_foreign_keys, get_db
from catalog.models.base import Base

# One shared in-memory database for the API and the direct-session fixtures
test_engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)
TestSessionLocal = sessionmaker(
    bind=test_engine, autocommit=False, autoflush=False, expire_on_commit=False
)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def create_author(test_client):
    """Factory: create an author through the API and return its JSON."""

    def _create(**overrides):
        unique_suffix = uuid.uuid4().hex[:8]
        payload = {
            "name": f"Test Author {unique_suffix}",
            "email": f"test-{unique_suffix}@author.com",
        }
        payload.update(overrides)
        response = test_client.post("/api/authors", json=payload)
        assert response.status_code == 201, f"Failed to create author: {response.text}"
        return response.json()

    return _create


@pytest.fixture
def create_book(test_client):
    """Factory: create a book for an author through the API and return its JSON."""

    def _create(author_id, **overrides):
        unique_suffix = uuid.uuid4().hex[:8]
        payload = {
            "title": f"Test Book {unique_suffix}",
            "description": "A book created for tests",
            "authorId": author_id,
        }
        payload.update(overrides)
        response = test_client.post("/api/books", json=payload)
        assert response.status_code == 201, f"Failed to create book: {response.text}"
        return response.json()

    return _create


@pytest.fixture
def sample_author(create_author):
    """Create a sample author for testing using the API."""
    return create_author(
        name="Gabriel García Márquez",
        email="gabo@example.com",
        nationality="Colombiano",
        birthYear=1927,
    )


@pytest.fixture
def sample_book(create_book, sample_author):
    """Create a sample book for testing using the API."""
    return create_book(
        sample_author["id"],
        title="Cien años de soledad",
        description="Una obra maestra del realismo mágico",
        isbn="978-0307474728",
        publishedYear=1967,
        genre="Realismo mágico",
        pages=417,
    )


@pytest.fixture
def sample_author_model(db_session):
    """Create a sample author model for repository tests."""
    from catalog.models.author import Author

    unique_suffix = uuid.uuid4().hex[:8]
    author = Author(
        name=f"Test Author {unique_suffix}",
        email=f"test-{unique_suffix}@author.com",
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
