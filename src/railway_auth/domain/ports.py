"""
Ports — what the authentication pipeline needs from the outside world.

Each dependency is a callable Protocol, so a plain function and an adapter
object with `__call__` satisfy it equally well. Every port is substitutable
on its own, which keeps the pipeline testable with lambdas.

  Pipeline ← Ports (protocols) ← Adapters (implementations)

The fallible ports return Result and report failure on the failure track.
AuditLog is the exception: it observes outcomes and must never fail.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway import FailureDescription
from railway.result import Result

from railway_auth.domain.models import User, UserLogin


@runtime_checkable
class UserLookup(Protocol):
    """Port: find a user by username. Fails with NOT_FOUND or a store error."""

    def __call__(self, username: str) -> Result[User]: ...


@runtime_checkable
class PasswordChecker(Protocol):
    """
    Port: compare a stored credential with the provided password.

    Returns Success(None) on a match, CREDENTIAL_MISMATCH otherwise.
    """

    def __call__(self, stored: str, provided: str) -> Result[None]: ...


@runtime_checkable
class Notifier(Protocol):
    """Port: deliver `message` to `email`. Fails with NOTIFY_FAILED."""

    def __call__(self, email: str, message: str) -> Result[None]: ...


@runtime_checkable
class HistoryRecorder(Protocol):
    """Port: remember that `user` signed in."""

    def __call__(self, user: User) -> Result[None]: ...


@runtime_checkable
class AuditLog(Protocol):
    """
    Port: observability side channel for the pipeline.

    Implementations must not raise; the pipeline calls exactly one of
    login_succeeded / login_failed per invocation.
    """

    def login_succeeded(self, login: UserLogin) -> None: ...

    def login_failed(self, username: str, error: FailureDescription) -> None: ...

    def side_effect_failed(self, step: str, user: User, error: FailureDescription) -> None:
        """A non-fatal side effect (history, optional notification) failed."""
        ...
