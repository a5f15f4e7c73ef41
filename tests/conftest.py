# tests/conftest.py
"""
Shared fixtures for the ThaiKick test suite.

Tests run against an in-memory SQLite database. Tables are created fresh
for every test and dropped afterwards, so tests never see each other's
rows.
"""

from datetime import time
from decimal import Decimal
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from thaikick.database import Base, get_db  # noqa: E402
from thaikick.core.config import settings  # noqa: E402
from thaikick.core.enums import AffiliateStatus  # noqa: E402
from thaikick.main import app  # noqa: E402
from thaikick.models import Gym, Trainer, User  # noqa: E402

from .factories import create_gym, create_slot, create_trainer, create_user  # noqa: E402

# ============================================================================
# PRODUCTION DATABASE PROTECTION
# ============================================================================

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

if settings.is_production_database(TEST_DATABASE_URL):
    raise RuntimeError(
        "Refusing to run tests against a hosted production database: "
        f"{TEST_DATABASE_URL[:30]}..."
    )

settings.is_testing = True

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if TEST_DATABASE_URL.startswith("sqlite") else {},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False
)


@pytest.fixture(scope="function")
def db():
    """
    Create a new database session for each test.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db: Session):
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def customer(db: Session) -> User:
    return create_user(db)


@pytest.fixture
def affiliate(db: Session) -> User:
    return create_user(
        db,
        name="Nok Affiliate",
        email="affiliate@example.com",
        is_affiliate=True,
        affiliate_code="NOK10",
        affiliate_status=AffiliateStatus.ACTIVE.value,
    )


@pytest.fixture
def gym(db: Session) -> Gym:
    return create_gym(db)


@pytest.fixture
def flash_sale_gym(db: Session) -> Gym:
    return create_gym(
        db, name="Flash Sale Gym", is_flash_sale=True, flash_sale_discount=Decimal("20")
    )


@pytest.fixture
def trainer(db: Session, gym: Gym) -> Trainer:
    return create_trainer(db, gym)


@pytest.fixture
def monday_slots(db: Session, trainer: Trainer):
    return [
        create_slot(db, trainer, "Monday", time(9, 0), time(10, 0)),
        create_slot(db, trainer, "Monday", time(10, 0), time(11, 0)),
    ]
