"""Pytest fixtures shared by the API tests.

Every test runs against its own SQLite file under ``tmp_path``; the
module level ``settings`` object is patched so that all connections
opened by the services point at it.
"""

from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from formula_finder_api.app.core.config import settings
from formula_finder_api.app.core.db import get_cursor, init_db, utcnow
from formula_finder_api.app.core.security import create_access_token
from formula_finder_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch) -> str:
    """Point the application at a fresh, migrated database."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "formula_finder_test.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def client(database) -> TestClient:
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def auth() -> Callable[[str], Dict[str, str]]:
    """Return a factory building the Authorization header for a user id."""

    def _headers(user_id: str) -> Dict[str, str]:
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def insert_group(database) -> Callable[..., int]:
    """Insert a group row directly, e.g. a shared group without an owner."""

    def _insert(name: str = "Shared", owner_id: Optional[str] = None, is_active: bool = True) -> int:
        now = utcnow()
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO formula_groups (owner_id, name, is_active, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (owner_id, name, int(is_active), now, now),
            )
            return cursor.lastrowid

    return _insert
