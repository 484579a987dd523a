"""
User directory adapter — in-memory user lookup, optionally seeded from JSON.

Implements the UserLookup port. The JSON file is a list of user objects:

    [
      {"id": "1", "name": "alice", "email": "alice@example.com",
       "password": "pbkdf2_sha256$600000$...$..."}
    ]

Records are validated with a pydantic TypeAdapter; any problem with the
file is reported as a CONFIGURATION_ERROR failure, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import TypeAdapter
from railway import ErrorCode, ResultFailures
from railway.result import Result

from railway_auth.domain.models import User

_USERS_ADAPTER = TypeAdapter(list[User])


class InMemoryUserDirectory:
    """Look users up by exact username."""

    def __init__(self, users: Iterable[User]) -> None:
        self._users: dict[str, User] = {}
        for user in users:
            if user.name in self._users:
                raise ValueError(f"Duplicate username in user directory: {user.name!r}")
            self._users[user.name] = user

    def __call__(self, username: str) -> Result[User]:
        user = self._users.get(username)
        if user is None:
            return ResultFailures.not_found("User", username)
        return Result.success(user)

    def __len__(self) -> int:
        return len(self._users)

    @classmethod
    def from_json_file(cls, path: Path) -> Result[InMemoryUserDirectory]:
        """
        Load and validate a users file.

        Returns Result.failure(CONFIGURATION_ERROR, ...) when the file is
        missing, is not valid JSON, has invalid records, or repeats a username.
        """
        log = structlog.get_logger()
        return (
            Result.from_computation(
                lambda: cls(_USERS_ADAPTER.validate_json(path.read_bytes())),
                ErrorCode.CONFIGURATION_ERROR,
                f"Cannot load users from {path}",
            )
            .peek(lambda directory: log.info("users.loaded", path=str(path), count=len(directory)))
            .peek_failure(
                lambda error: log.error("users.load_failed", path=str(path), error=str(error.exception))
            )
        )
