"""
Function-form combinators: `bind(f, result)` instead of `result.flat_map(f)`.

The function argument comes first so stages can be partially applied and
composed left to right, the way `validate >> bind lookup >> tee check` reads
in ML-family languages:

    from functools import partial
    from railway import combinators as rop

    authenticate = rop.compose(
        validate,
        partial(rop.bind, lookup_user),
        partial(rop.tee, rop.guarded(check_password)),
        partial(rop.map, lambda login: login.user),
    )
    authenticate("alice", "secret")  # → Result[User]
"""

from __future__ import annotations

from functools import reduce, wraps
from typing import Any, Callable, TypeVar

from railway.failure import FailureDescription
from railway.result import Failure, Result

T = TypeVar("T")
U = TypeVar("U")

Stage = Callable[[Result[Any]], Result[Any]]


def bind(binder: Callable[[T], Result[U]], result: Result[T]) -> Result[U]:
    """Call `binder` on a success value; failures pass through untouched."""
    return result.flat_map(binder)


def map(mapper: Callable[[T], U], result: Result[T]) -> Result[U]:  # noqa: A001
    """Wrap `mapper(value)` in Success; failures pass through untouched."""
    return result.map(mapper)


def tee(action: Callable[[T], Result[Any]], result: Result[T]) -> Result[T]:
    """Run a fallible side effect and keep the original success value."""
    return result.tee(action)


def try_with(binder: Callable[[T], Result[U]], result: Result[T]) -> Result[U]:
    """bind, but an exception raised by `binder` becomes a Failure."""
    return result.try_with(binder)


def unwrap(check: Callable[[T], Any], result: Result[T]) -> Result[T]:
    """
    Apply a plain check to the success value and hand the Result back.

    Lets test assertions be chained one after another:

        rop.unwrap(assert_has_email, rop.unwrap(assert_has_id, result))
    """
    return result.peek(check)


def guarded(fn: Callable[..., Result[U]]) -> Callable[..., Result[U]]:
    """
    Adapt a Result-returning callable that might still raise.

    The returned callable has the same signature; an Exception becomes a
    Failure classified by ErrorCode.from_exception.

        result.tee(guarded(notify_user))
    """

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Result[U]:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            return Failure(FailureDescription.from_exception(e))

    return wrapper


def compose(first: Callable[..., Result[Any]], *stages: Stage) -> Callable[..., Result[Any]]:
    """
    Compose a Result-producing entry function with Result → Result stages.

    The stages run left to right on whatever `first` returns.
    """

    def pipeline(*args: Any, **kwargs: Any) -> Result[Any]:
        return reduce(lambda acc, stage: stage(acc), stages, first(*args, **kwargs))

    return pipeline


__all__ = [
    "bind",
    "map",
    "tee",
    "try_with",
    "unwrap",
    "guarded",
    "compose",
]

