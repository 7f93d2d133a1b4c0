"""
Pytest configuration and fixtures for category admin tests.
"""

import os

# Settings are read at import time; configure them before importing the app
os.environ.setdefault("SECRET_KEY", "test_secret_key_for_testing_only")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("CATEGORY_UPDATE_BACKOFF_MULTIPLIER", "0")
os.environ.setdefault("CATEGORY_UPDATE_BACKOFF_MAX", "0")

import pytest
from datetime import datetime
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from app.core.database import Base, get_db
from app.models.category import Category
from app.repositories import CategoryRepository
from app.services.category_service import CategoryService


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def repository(db_session) -> CategoryRepository:
    """Repository with backoff disabled."""
    return CategoryRepository(db_session, backoff_multiplier=0, backoff_max=0)


@pytest.fixture(scope="function")
def service(repository) -> CategoryService:
    return CategoryService(repository)


@pytest.fixture(scope="function")
def test_app(db_session):
    """Create a FastAPI test app without lifespan events."""
    from fastapi import FastAPI
    from app.api.endpoints import categories

    # Create app without lifespan to avoid event loop issues
    test_app = FastAPI(title="Category Admin - Test", version="1.0.0")
    test_app.add_middleware(
        SessionMiddleware, secret_key="test_secret_key_for_testing_only"
    )
    test_app.include_router(
        categories.router, prefix="/categories", tags=["categories"]
    )

    # Add health endpoint for testing
    @test_app.get("/health")
    def health():
        return {"status": "ok"}

    # Override database dependency
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db

    return test_app


@pytest.fixture(scope="function")
def client(test_app) -> TestClient:
    """Create a test client without entering context manager."""
    return TestClient(test_app, raise_server_exceptions=False)


@pytest.fixture(scope="function")
def test_category(db_session) -> Category:
    """Create a test category."""
    category = Category(name="Technology")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture(scope="function")
def multiple_categories(db_session) -> list[Category]:
    """Create categories with distinct, known creation dates."""
    rows = [
        ("Science", datetime(2024, 1, 1, 12, 0, 0)),
        ("Technology", datetime(2024, 1, 5, 12, 0, 0)),
        ("Sports", datetime(2024, 1, 10, 12, 0, 0)),
        ("Arts", datetime(2024, 1, 15, 12, 0, 0)),
        ("Tech Policy", datetime(2024, 1, 20, 12, 0, 0)),
    ]
    categories = [Category(name=name, created_at=created) for name, created in rows]
    db_session.add_all(categories)
    db_session.commit()
    for category in categories:
        db_session.refresh(category)
    return categories
