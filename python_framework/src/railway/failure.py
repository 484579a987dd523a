"""
Failure description — the single error shape carried on the failure track.

A closed ErrorCode enumeration plus a human-readable message. There is no
exception hierarchy: every failing step, whatever it wraps, reports through
one FailureDescription so callers never compare raw strings.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Closed set of error kinds for the failure track.

    The first four are the authentication kinds; the rest classify
    infrastructure faults raised by wrapped operations.
    """

    INVALID_INPUT = "INVALID_INPUT"
    """Missing, blank, or malformed input."""

    NOT_FOUND = "NOT_FOUND"
    """The requested record does not exist."""

    CREDENTIAL_MISMATCH = "CREDENTIAL_MISMATCH"
    """The provided credential does not match the stored one."""

    NOTIFY_FAILED = "NOTIFY_FAILED"
    """A notification could not be delivered."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Misconfiguration: unreadable data files, malformed stored credentials."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """A backing store or remote service is unavailable."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """An operation exceeded its own time limit."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected fault caught at an execution boundary."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unclassified fault."""

    @staticmethod
    def from_exception(exception: BaseException) -> ErrorCode:
        """
        Classify a Python exception.

        FileNotFoundError and TimeoutError are OSError subclasses, so they are
        matched before the generic OSError arm.
        """
        match exception:
            case LookupError() | FileNotFoundError():
                return ErrorCode.NOT_FOUND
            case ValueError() | TypeError():
                return ErrorCode.INVALID_INPUT
            case TimeoutError():
                return ErrorCode.TIMEOUT_ERROR
            case ConnectionError() | OSError():
                return ErrorCode.EXTERNAL_SERVICE_ERROR
            case _:
                return ErrorCode.UNKNOWN_ERROR


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message, optional cause, timestamp.

    >>> desc = FailureDescription(ErrorCode.INVALID_INPUT, "Invalid params")
    >>> desc.code
    <ErrorCode.INVALID_INPUT: 'INVALID_INPUT'>
    >>> desc.message
    'Invalid params'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("FailureDescription message must not be empty")

    @staticmethod
    def from_exception(
        exception: BaseException,
        message: str | None = None,
    ) -> FailureDescription:
        """
        Describe a caught exception.

        The message defaults to the exception's own text, falling back to
        its class name when that text is empty.
        """
        return FailureDescription(
            code=ErrorCode.from_exception(exception),
            message=message or str(exception) or type(exception).__name__,
            exception=exception,
        )

    def full_stack_trace(self) -> str:
        """Message followed by the formatted traceback of the cause, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"
