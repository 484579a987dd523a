"""
Railway-Oriented Programming (ROP) for Python.

Compose fallible steps into one pipeline whose failures bypass every
remaining step automatically.

    from railway import ErrorCode, Result

    def validate(name: str) -> Result[str]:
        if not name.strip():
            return Result.failure(ErrorCode.INVALID_INPUT, "Invalid params")
        return Result.success(name)

    result = (
        validate("alice")
        .flat_map(lookup_user)
        .tee(send_greeting)
        .map(lambda user: user.id)
    )

The same combinators in function form live in `railway.combinators`.
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.0.0"
