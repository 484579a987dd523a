"""
Audit adapter — the pipeline's logging collaborator, backed by structlog.

Implements the AuditLog port. The caller owns the logger's lifecycle and
passes it in; by default a `railway_auth.audit` logger is used.
Passwords are never logged.
"""

from __future__ import annotations

from typing import Any

import structlog
from railway import FailureDescription

from railway_auth.domain.models import User, UserLogin


class StructlogAuditLog:
    """Write one structured event per authentication outcome."""

    def __init__(self, log: Any = None) -> None:
        self._log = log if log is not None else structlog.get_logger("railway_auth.audit")

    def login_succeeded(self, login: UserLogin) -> None:
        self._log.info("auth.succeeded", user_id=login.user.id)

    def login_failed(self, username: str, error: FailureDescription) -> None:
        self._log.warning(
            "auth.failed",
            username=username,
            error_code=error.code.value,
            reason=error.message,
        )

    def side_effect_failed(self, step: str, user: User, error: FailureDescription) -> None:
        self._log.warning(
            "auth.side_effect_failed",
            step=step,
            user_id=user.id,
            error_code=error.code.value,
            reason=error.message,
        )
