"""
Shared test fixtures for the railway-auth test suite.

Provides a sample user, a users file on disk, and resets structlog after
every test so configuration done by the CLI never leaks between tests.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from railway_auth.adapters.passwords import hash_password
from railway_auth.domain.models import User

# Low iteration count keeps hashing fast in tests.
TEST_ITERATIONS = 1_000


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture()
def alice() -> User:
    """The user from the canonical scenario: id "1", password "secret"."""
    return User(id="1", name="alice", email="a@test.com", password="secret")


def write_users_file(path: Path, users: list[dict[str, str]]) -> Path:
    path.write_text(json.dumps(users), encoding="utf-8")
    return path


@pytest.fixture()
def users_file(tmp_path: Path) -> Path:
    """
    A users file with two accounts:
      - alice / secret   (stored as a pbkdf2 hash)
      - bob   / hunter2  (stored in plain text, no valid email)
    """
    return write_users_file(
        tmp_path / "users.json",
        [
            {
                "id": "1",
                "name": "alice",
                "email": "a@test.com",
                "password": hash_password("secret", iterations=TEST_ITERATIONS),
            },
            {"id": "2", "name": "bob", "email": "bob-at-nowhere", "password": "hunter2"},
        ],
    )
