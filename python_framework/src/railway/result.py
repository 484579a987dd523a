"""
Result — the two-track container at the heart of Railway-Oriented Programming.

A Result[T] is either Success(value: T) or Failure(error: FailureDescription).
Each combinator returns a new Result; once a step fails, every later
transform is skipped and the failure rides the lower track to the end.

    validate ──flat_map──▶ lookup ──tee──▶ check ──tee──▶ notify ──map──▶ Result[T]
       │                     │               │               │
       └──── Failure ────────┴───────────────┴───────────────┴──────────▶ Result[T]

Four combinators carry the weight:
  - flat_map (bind): chain a step that itself returns a Result
  - map:             adapt a step that cannot fail
  - tee:             run a fallible side effect, keep the value in flight
  - try_with:        flat_map inside a fault boundary (exceptions → Failure)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Optional,
    TypeVar,
)

from railway.failure import ErrorCode, FailureDescription

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Result(Generic[T]):
    """
    Railway-Oriented Programming Result.

    Two possible states:
      - Success(value: T)  — the happy path
      - Failure(error: FailureDescription) — the error track

    Usage:
        >>> Result.success(21).map(lambda x: x * 2).value()
        42

        >>> Result.failure(ErrorCode.INVALID_INPUT, "bad").map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError on a Failure.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err.message}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> FailureDescription:
        """Extract the failure description. Raises ValueError on a Success."""
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Combinators ────────────────────────

    def either(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[FailureDescription], R],
    ) -> R:
        """
        Collapse both tracks into a single value.

            result.either(
                on_success=lambda user: 0,
                on_failure=lambda err: 1,
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, binder: Callable[[T], Result[U]]) -> Result[U]:
        """
        Chain a Result-returning step. Short-circuits on failure.

        The step's Result is returned as-is, never wrapped twice.

            Result.success("alice").flat_map(lookup_user)  # → lookup_user("alice")
            Result.failure(...).flat_map(lookup_user)      # → same Failure, lookup not called
        """
        match self:
            case Success(v):
                return binder(v)
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    bind = flat_map

    def map(self, mapper: Callable[[T], U]) -> Result[U]:
        """
        Transform the success value with a step that cannot fail.

            Result.success(login).map(lambda l: l.user)  # → Success(user)
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def tee(self, action: Callable[[T], Result[Any]]) -> Result[T]:
        """
        Run a fallible side effect without altering the value in flight.

        On success, `action(v)` is called and only its pass/fail signal is
        used: a Failure replaces this Result, any success payload is thrown
        away and the original Success(v) continues down the track.

        An action that returns anything other than a Result (a bare bool,
        None) fails the track with TECHNICAL_ERROR rather than passing it.

            Result.success(login).tee(lambda l: check_password(l.user.password, l.password))
        """
        match self:
            case Success(v):
                match action(v):
                    case Success(_):
                        return self
                    case Failure(err):
                        return Failure(err)
                    case other:
                        return Result.failure(
                            ErrorCode.TECHNICAL_ERROR,
                            f"tee action must return a Result, got {type(other).__name__}",
                        )
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def try_with(self, binder: Callable[[T], Result[U]]) -> Result[U]:
        """
        flat_map inside a fault boundary.

        An Exception raised by `binder` becomes Failure carrying the
        exception's message, classified by ErrorCode.from_exception.
        Use it to adapt operations that fail by raising.

            Result.success(path).try_with(lambda p: Result.success(p.read_bytes()))
        """
        match self:
            case Success(v):
                try:
                    return binder(v)
                except Exception as e:
                    return Failure(FailureDescription.from_exception(e))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def try_map(self, mapper: Callable[[T], U]) -> Result[U]:
        """map inside the same fault boundary as try_with."""
        match self:
            case Success(v):
                try:
                    return Success(mapper(v))
                except Exception as e:
                    return Failure(FailureDescription.from_exception(e))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(
        self, mapper: Callable[[FailureDescription], FailureDescription]
    ) -> Result[T]:
        """Transform the failure description. Passes success through unchanged."""
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: FailureDescription | ErrorCode,
        message: str = "",
    ) -> Result[T]:
        """
        Keep the success value only if it satisfies `predicate`.

            Result.success(matches).ensure(bool, ErrorCode.CREDENTIAL_MISMATCH, "Password mismatch")
        """
        if isinstance(error, ErrorCode):
            error = FailureDescription(code=error, message=message)

        return self.flat_map(
            lambda v: Result.success(v) if predicate(v) else Result.failure_from(error)
        )

    # ──────────────────────── Observation ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> Result[T]:
        """Call `action` on the success value for its effect; the Result is returned unchanged."""
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[FailureDescription], Any]) -> Result[T]:
        """Call `action` on the failure; the Result is returned unchanged."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[FailureDescription], T]) -> Result[T]:
        """Switch back to the success track with a value computed from the failure."""
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: T) -> T:
        match self:
            case Success(v):
                return v
            case _:
                return default

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: Any) -> Result[T]:
        """Hand this Result to an execution context (see railway.execution)."""
        return execution_context.execute(lambda: self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T]:
        return Success(value)

    @staticmethod
    def failure_from(error: FailureDescription) -> Result[T]:
        return Failure(error)

    @staticmethod
    def failure(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> Result[T]:
        """
        Create a failed Result.

            Result.failure(ErrorCode.NOT_FOUND, "User not found")
            Result.failure(ErrorCode.EXTERNAL_SERVICE_ERROR, "Directory unavailable", ex)
        """
        return Failure(FailureDescription(code=code, message=message, exception=exception))

    @staticmethod
    def from_computation(
        computation: Callable[[], T],
        error_code: ErrorCode,
        error_message: str,
    ) -> Result[T]:
        """
        Run a computation that may raise; an exception becomes a Failure
        with the given code and message, keeping the exception as its cause.

            Result.from_computation(
                lambda: path.read_bytes(),
                ErrorCode.CONFIGURATION_ERROR,
                f"Cannot read {path}",
            )
        """
        try:
            return Result.success(computation())
        except Exception as e:
            return Result.failure(error_code, error_message, e)

    @staticmethod
    def from_optional(
        value: Optional[T],
        error_message: str,
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
    ) -> Result[T]:
        """Success for a present value, Failure for None."""
        if value is not None:
            return Result.success(value)
        return Result.failure(error_code, error_message)

    @staticmethod
    def all_of(results: List[Result[T]]) -> Result[List[T]]:
        """Collect Results into a Result of list; the first failure wins."""
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    return Failure(err)
        return Success(values)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()


@dataclass(frozen=True, slots=True, eq=False)
class Success(Result[T]):
    """The success track. `Success(None)` is the unit outcome of a side effect."""

    _value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


# Enable structural pattern matching: case Success(value)
Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True, eq=False)
class Failure(Result[T]):
    """The failure track. Equality compares error code and message only."""

    _error: FailureDescription

    def __init__(self, error: FailureDescription) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error.code.value}: {self._error.message!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._error.code == other._error.code and self._error.message == other._error.message
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._error.code, self._error.message))


# Enable structural pattern matching: case Failure(error)
Failure.__match_args__ = ("_error",)
