"""Pytest bootstrap: environment, in-memory database and shared fixtures."""

import os
import sys
from pathlib import Path

# Settings() is built at import time, so required values must exist first.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")

# Ensure project root (for `import marketadmin`) and tests/ (for `import factories`) are on sys.path
TESTS_DIR = Path(__file__).resolve().parent
for path in (str(TESTS_DIR.parent), str(TESTS_DIR)):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketadmin import models
from marketadmin.context import AdminContext
from marketadmin.database import Base

from factories import make_admin, make_profile


# ======================
# TEST DATABASE SETUP
# ======================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """Create test database session"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def super_admin(db_session):
    return make_admin(db_session, models.AdminRole.SUPER_ADMIN)


@pytest.fixture
def actor(super_admin):
    """Request context for the super admin, as the auth dependency would build it."""
    return AdminContext.from_admin_user(super_admin, ip_address="203.0.113.7")


@pytest.fixture
def seller(db_session):
    return make_profile(db_session, display_name="Seller")


@pytest.fixture
def reporter(db_session):
    return make_profile(db_session, display_name="Reporter")
