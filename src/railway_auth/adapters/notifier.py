"""
Notification adapter — sign-in confirmations written to the structured log.

Implements the Notifier port without a mail transport: the confirmation is
emitted as a `notify.sent` event, which is enough for local runs and for
asserting on in tests. A real transport would satisfy the same port.
"""

from __future__ import annotations

from typing import Any

import structlog
from railway import ResultFailures
from railway.result import Result


class LoggingNotifier:
    """Deliver notifications as structlog events."""

    def __init__(self, log: Any = None) -> None:
        self._log = log if log is not None else structlog.get_logger("railway_auth.notify")

    def __call__(self, email: str, message: str) -> Result[None]:
        if "@" not in email:
            self._log.warning("notify.rejected", recipient=email, reason="invalid address")
            return ResultFailures.notify_failed(f"Invalid recipient address: {email!r}")
        self._log.info("notify.sent", recipient=email, message=message)
        return Result.success(None)
