"""
Login history adapter — append-only, in-memory record of successful sign-ins.

Implements the HistoryRecorder port. Safe to share between concurrent
pipeline invocations. Records live only as long as the process; each one is
also emitted as a `history.recorded` event so a short-lived CLI run leaves
a trace.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog
from railway.result import Result

from railway_auth.domain.models import LoginRecord, User


class InMemoryLoginHistory:
    """Keep a LoginRecord for every recorded sign-in."""

    def __init__(
        self,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
        log: Any = None,
    ) -> None:
        self._clock = clock
        self._log = log if log is not None else structlog.get_logger("railway_auth.history")
        self._lock = threading.Lock()
        self._records: list[LoginRecord] = []

    def __call__(self, user: User) -> Result[None]:
        record = LoginRecord(user_id=user.id, logged_in_at=self._clock())
        with self._lock:
            self._records.append(record)
        self._log.info("history.recorded", user_id=record.user_id, logged_in_at=record.logged_in_at.isoformat())
        return Result.success(None)

    @property
    def records(self) -> tuple[LoginRecord, ...]:
        with self._lock:
            return tuple(self._records)
