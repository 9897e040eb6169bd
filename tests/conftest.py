"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users, postings and session tokens
"""

import os

# Settings are read once at import time, so the environment is prepared first
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.database import Base, get_db
from jobboard.core.security import create_access_token, get_password_hash
from jobboard.models import JobPosting, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "TestPass123!"


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db_session):
    """Factory for users with a known password."""
    def _create_user(username, password=DEFAULT_PASSWORD, is_admin=False, **profile):
        user = User(
            username=username,
            password_hash=get_password_hash(password),
            is_admin=is_admin,
            **profile
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create_user


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user without going through sign-in."""
    def _auth_headers(user):
        token = create_access_token(data={"sub": str(user.id), "username": user.username})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def admin_user(create_user):
    return create_user("admin", is_admin=True)


@pytest.fixture
def owner(create_user):
    """A user who posts jobs."""
    return create_user("teacher_tom", is_teacher=True)


@pytest.fixture
def applicant(create_user):
    return create_user("student_sam")


@pytest.fixture
def posting(db_session, owner):
    """A pending job posting owned by `owner`."""
    job = JobPosting(
        owner_id=owner.id,
        title="Math Tutor",
        description="Help students with algebra after school",
        job_type_tag="part-time",
        industry_tag="education",
    )
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job
