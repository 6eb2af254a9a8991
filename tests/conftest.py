"""Shared fixtures for the short links service tests."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shortlinks.core.config import Settings
from shortlinks.core.database import Database
from shortlinks.core.store import MemoryLinkStore
from shortlinks.main import create_app

START = 1_700_000_000_000


class FakeClock:
    """Manually advanced clock returning epoch milliseconds."""

    def __init__(self, now: int = START):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = Database(":memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Each link store implementation in turn."""
    if request.param == "memory":
        yield MemoryLinkStore()
        return
    db = Database(":memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url=":memory:", base_url="http://sho.rt")


@pytest.fixture
def client(test_db, settings, clock):
    """Create a test client over the in-memory database."""
    app = create_app(settings=settings, store=test_db, clock=clock)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
