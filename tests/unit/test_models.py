"""
Unit tests for domain models — value objects.

Verifies frozen dataclass behavior and that passwords stay out of repr.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime

import pytest

from railway_auth.domain.models import Credentials, LoginRecord, User, UserLogin


class TestUser:
    """Verify User value object behavior."""

    def test_is_immutable(self, alice: User) -> None:
        """
        GIVEN a User
        WHEN an attribute is reassigned
        THEN FrozenInstanceError is raised.
        """
        with pytest.raises(FrozenInstanceError):
            alice.email = "other@test.com"  # type: ignore[misc]

    def test_repr_hides_password(self, alice: User) -> None:
        assert "secret" not in repr(alice)
        assert "alice" in repr(alice)

    def test_equality_by_value(self, alice: User) -> None:
        assert alice == User(id="1", name="alice", email="a@test.com", password="secret")


class TestCredentials:
    def test_repr_hides_password(self) -> None:
        assert "hunter2" not in repr(Credentials(username="bob", password="hunter2"))


class TestUserLogin:
    def test_repr_hides_provided_password(self, alice: User) -> None:
        login = UserLogin(user=alice, password="typed-in")
        assert "typed-in" not in repr(login)
        assert login.user is alice


class TestLoginRecord:
    def test_holds_user_id_and_time(self) -> None:
        at = datetime(2026, 1, 1, tzinfo=UTC)
        record = LoginRecord(user_id="1", logged_in_at=at)
        assert (record.user_id, record.logged_in_at) == ("1", at)
