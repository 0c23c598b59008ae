"""
Pytest configuration and shared fixtures.

The environment is set before anything from the project is imported so the
engine binds to an in-memory SQLite database and a default school is configured.
"""

import os
import sys
from pathlib import Path

TEST_DEFAULT_SCHOOL_ID = "0f0f0f0f-0000-4000-8000-000000000001"

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEFAULT_SCHOOL_ID"] = TEST_DEFAULT_SCHOOL_ID
os.environ["DEFAULT_SCHOOL_NAME"] = "Default School"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("INITIAL_ADMIN_EMAIL", None)
os.environ.pop("INITIAL_ADMIN_PASSWORD", None)

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from app.config import settings
from domain.constants import ROLE_ADMIN, ROLE_KITCHEN, ROLE_STUDENT
from domain.models import Base, SessionLocal, engine
from domain.models.seed import seed_reference_data


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema and reference data for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_reference_data(db, settings)
    finally:
        db.close()
    yield


@pytest.fixture
def admin_headers(db_session):
    from test_fixtures import auth_headers

    return auth_headers(db_session, ROLE_ADMIN)


@pytest.fixture
def kitchen_headers(db_session):
    from test_fixtures import auth_headers

    return auth_headers(db_session, ROLE_KITCHEN)


@pytest.fixture
def student_headers(db_session):
    from test_fixtures import auth_headers

    return auth_headers(db_session, ROLE_STUDENT)


@pytest.fixture
def db_session():
    """
    Database session for tests that touch the database directly.

    Shares the in-memory database with the API; helpers commit their writes.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
