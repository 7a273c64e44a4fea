"""
Pytest configuration - shared fixtures
"""
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

# Keep the module-level engine off disk
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from household_hub.config import Settings
from household_hub.core.readiness import ReadinessState
from household_hub.database import Base, enable_sqlite_foreign_keys, get_db
from household_hub.main import create_app
from household_hub.models import (
    Department,
    Item,
    ShoppingListEntry,
    Store,
    StoreZone,
)
from household_hub.services.janitor import PurchasedItemJanitor


class FakeClock:
    """Callable clock the tests can move forward."""

    def __init__(self, start: datetime = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def test_engine():
    """In-memory SQLite shared by every connection, with foreign keys on"""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def test_db(test_engine) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


@pytest.fixture
def populated_db(test_db):
    """
    Departments Dairy(1), Produce(2), Bakery(3); store "Corner Grocer"(1)
    with Produce at zone 1 ("Fresh") and Dairy at zone 2 ("Cold"); Bakery
    has no zone. Shopping list: Milk, Apples, Bread, Batteries (no department).
    """
    test_db.add_all(
        [
            Department(id=1, name="Dairy"),
            Department(id=2, name="Produce"),
            Department(id=3, name="Bakery"),
            Store(id=1, name="Corner Grocer"),
            Store(id=2, name="Big Mart"),
        ]
    )
    test_db.flush()
    test_db.add_all(
        [
            StoreZone(store_id=1, zone_sequence=1, zone_name="Fresh", department_id=2),
            StoreZone(store_id=1, zone_sequence=2, zone_name="Cold", department_id=1),
            Item(id=1, name="Milk", department_id=1, qty=2),
        ]
    )
    test_db.flush()
    test_db.add_all(
        [
            ShoppingListEntry(name="Milk", quantity="2", department_id=1, item_id=1, purchased=0),
            ShoppingListEntry(name="Apples", quantity="6", department_id=2, purchased=0),
            ShoppingListEntry(name="Bread", quantity="1", department_id=3, purchased=0),
            ShoppingListEntry(name="Batteries", quantity="4", purchased=0),
        ]
    )
    test_db.commit()
    return test_db


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def janitor(clock):
    return PurchasedItemJanitor(interval=timedelta(hours=24), clock=clock)


@pytest.fixture
def readiness():
    return ReadinessState()


def build_app(test_db, app_settings, readiness, janitor):
    app = create_app(
        app_settings=app_settings,
        readiness=readiness,
        janitor=janitor,
        initialize_database=False,
    )

    def _get_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_db
    return app


@pytest.fixture
def kitchen_app(test_db, readiness, janitor):
    return build_app(
        test_db, Settings(APP_DOMAIN="kitchen", RATE_LIMIT_ENABLED=False), readiness, janitor
    )


@pytest.fixture
def client(kitchen_app):
    """Kitchen API client; entering the context runs startup and marks the app ready"""
    with TestClient(kitchen_app) as c:
        yield c


@pytest.fixture
def vehicle_client(test_db, readiness, janitor):
    app = build_app(
        test_db, Settings(APP_DOMAIN="vehicle", RATE_LIMIT_ENABLED=False), readiness, janitor
    )
    with TestClient(app) as c:
        yield c


@pytest.fixture
def app_factory(test_db, readiness, janitor):
    """Build an app with custom settings over the test database"""

    def _factory(app_settings: Settings):
        return build_app(test_db, app_settings, readiness, janitor)

    return _factory
