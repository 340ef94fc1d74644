"""
Pytest configuration for liteorm.

Provides fixtures for:
- Settings pointing at a per-test database file
- An open Database with the sample record types synchronized
- Seeded users for query tests
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator, List

import pytest

from liteorm import Database, Settings, get_settings
from sample_models import Book, User


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """
    Database file inside a directory that does not exist yet.
    """
    return tmp_path / "database" / "test.db"


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(db_path=str(db_path), log_level="DEBUG")


@pytest.fixture
def db(test_settings: Settings) -> Generator[Database, None, None]:
    """
    Open database with the User and Book tables in place.
    """
    database = Database(settings=test_settings)
    database.tables(User, Book)
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def seeded_users(db: Database) -> List[User]:
    """
    Five users aged 18..26, every other one a VIP.
    """
    users = [
        User(name="user1", age=18, vip=False, uid=1001),
        User(name="user2", age=20, vip=True, uid=1002),
        User(name="user3", age=22, vip=False, uid=1003),
        User(name="user4", age=24, vip=True, uid=1004),
        User(name="user5", age=26, vip=True, uid=1005, labels=["a", "b"]),
    ]
    for user in users:
        db.insert(user)
    return users
