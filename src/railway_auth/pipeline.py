"""
Pipeline — authenticate a username/password pair on the railway.

Domain layer: PURE ORCHESTRATION. Every outside effect comes in through a
port (see domain/ports.py); the pipeline owns no state between calls.

  validate_credentials(username, password)
    → try_with  lookup_user(username)            → UserLogin(user, password)
      → tee     check_password(stored, provided)
        → tee   notify(email, confirmation)
          → peek record_history(user)             (never fatal)
            → peek / peek_failure  audit log      (always runs)
              → map  UserLogin → User

Short-circuiting belongs to the combinators: no step checks whether an
earlier one failed.
"""

from __future__ import annotations

from typing import Callable

from railway import ResultFailures
from railway.combinators import guarded
from railway.result import Result

from railway_auth.domain.models import Credentials, User, UserLogin
from railway_auth.domain.ports import (
    AuditLog,
    HistoryRecorder,
    Notifier,
    PasswordChecker,
    UserLookup,
)

INVALID_PARAMS = "Invalid params"
CONFIRMATION_MESSAGE = "A new sign-in to your account was just completed."


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_credentials(username: str | None, password: str | None) -> Result[Credentials]:
    """
    First step: both values must be present and contain something other
    than whitespace.

    Returns Failure(INVALID_INPUT, "Invalid params") otherwise.
    """
    if _is_blank(username) or _is_blank(password):
        return ResultFailures.invalid_input(INVALID_PARAMS)
    return Result.success(Credentials(username=username, password=password))


def _pair_with_user(credentials: Credentials, lookup_user: UserLookup) -> Result[UserLogin]:
    """Look the user up and keep the provided password alongside it."""
    return lookup_user(credentials.username).map(
        lambda user: UserLogin(user=user, password=credentials.password)
    )


def _observe(hook: Callable[..., object]) -> Callable[..., None]:
    """
    Wrap an audit hook so that it can only observe.

    Whatever the hook returns is ignored, and an Exception it raises is
    contained, so the outcome in flight is never altered.
    """
    contained = guarded(hook)

    def observe(*args: object) -> None:
        contained(*args)

    return observe


def _notification_step(
    notify: Notifier,
    message: str,
    is_fatal: bool,
    audit_log: AuditLog,
) -> Callable[[UserLogin], Result[None]]:
    """
    Build the tee target for the confirmation notification.

    When the failure is not fatal it is reported to the audit log and the
    step recovers onto the success track.
    """
    send = guarded(notify)

    def step(login: UserLogin) -> Result[None]:
        sent = send(login.user.email, message)
        if is_fatal:
            return sent
        return sent.peek_failure(
            lambda error: _observe(audit_log.side_effect_failed)("notify", login.user, error)
        ).recover(lambda _: None)

    return step


def _record_history(
    login: UserLogin,
    record_history: HistoryRecorder | None,
    audit_log: AuditLog,
) -> None:
    if record_history is None:
        return
    guarded(record_history)(login.user).peek_failure(
        lambda error: _observe(audit_log.side_effect_failed)("record_history", login.user, error)
    )


def run_authentication(
    username: str,
    password: str,
    *,
    lookup_user: UserLookup,
    check_password: PasswordChecker,
    notify: Notifier,
    audit_log: AuditLog,
    record_history: HistoryRecorder | None = None,
    confirmation_message: str = CONFIRMATION_MESSAGE,
    notify_failure_is_fatal: bool = True,
) -> Result[User]:
    """
    Authenticate `username` with `password`.

    Flow:
      1. Validate — blank username or password fails with "Invalid params"
      2. Lookup — lookup_user(username), paired with the provided password
      3. Password check — check_password(user.password, password)
      4. Notify — notify(user.email, confirmation_message)
      5. Record history — record_history(user), failures only audited
      6. Audit — login_succeeded or login_failed, exactly once; a raising
         audit hook is contained
      7. Build response — the User, without the provided password

    Each dependency is called at most once, and only if every earlier step
    succeeded. A dependency that raises instead of returning Failure is
    converted to a Failure, so this function does not raise.

    Returns Result[User] on success, or the first failure encountered.
    """
    return (
        validate_credentials(username, password)
        .try_with(lambda credentials: _pair_with_user(credentials, lookup_user))
        .tee(lambda login: guarded(check_password)(login.user.password, login.password))
        .tee(_notification_step(notify, confirmation_message, notify_failure_is_fatal, audit_log))
        .peek(lambda login: _record_history(login, record_history, audit_log))
        .peek(_observe(audit_log.login_succeeded))
        .peek_failure(lambda error: _observe(audit_log.login_failed)(username, error))
        .map(lambda login: login.user)
    )
