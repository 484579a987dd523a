"""
Factory shortcuts for the common failures.

    from railway import ResultFailures

    ResultFailures.invalid_input("Invalid params")
    ResultFailures.not_found("User", "alice")
"""

from __future__ import annotations

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result


class ResultFailures:
    """One static factory per ErrorCode the authentication flow reports."""

    @staticmethod
    def invalid_input(message: str) -> Result:
        """Missing, blank, or malformed input."""
        return Result.failure(ErrorCode.INVALID_INPUT, message)

    @staticmethod
    def not_found(resource_type: str, identifier: str) -> Result:
        return Result.failure(
            ErrorCode.NOT_FOUND,
            f"{resource_type} not found with identifier: {identifier}",
        )

    @staticmethod
    def credential_mismatch(message: str = "Password mismatch") -> Result:
        return Result.failure(ErrorCode.CREDENTIAL_MISMATCH, message)

    @staticmethod
    def notify_failed(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.NOTIFY_FAILED, message, exception)

    @staticmethod
    def configuration_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.CONFIGURATION_ERROR, message, exception)

    @staticmethod
    def external_service_error(message: str, exception: BaseException | None = None) -> Result:
        """Backing store or remote service unavailable."""
        return Result.failure(ErrorCode.EXTERNAL_SERVICE_ERROR, message, exception)

    @staticmethod
    def technical_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.TECHNICAL_ERROR, message, exception)

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """Failure with a custom message, code classified from the exception type."""
        return Result.failure_from(FailureDescription.from_exception(exception, message))

    @staticmethod
    def from_exception_auto(exception: BaseException) -> Result:
        """Failure using the exception's own message."""
        return Result.failure_from(FailureDescription.from_exception(exception))
