"""
Application entry point — wires adapters into the pipeline and exposes the CLI.

Composition root: the ONLY place where concrete adapters are instantiated.
Everything else depends on the ports in domain/ports.py.

Responsibilities:
  1. Configure structlog (to stderr; stdout carries the command's result)
  2. Load and validate configuration from environment
  3. Create the concrete adapters and partially apply them to the pipeline
  4. Marshal the final Result into JSON output and a process exit code
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Annotated

import structlog
import typer
from pydantic import ValidationError
from railway import ErrorCode, FailureDescription, LoggingExecutionContext
from railway.result import Result

from railway_auth import __version__
from railway_auth.adapters.audit import StructlogAuditLog
from railway_auth.adapters.history import InMemoryLoginHistory
from railway_auth.adapters.notifier import LoggingNotifier
from railway_auth.adapters.passwords import (
    DEFAULT_ITERATIONS,
    ConstantTimePasswordChecker,
    hash_password,
)
from railway_auth.adapters.user_directory import InMemoryUserDirectory
from railway_auth.config import AppSettings
from railway_auth.domain.models import User
from railway_auth.pipeline import run_authentication

EXIT_OK = 0
EXIT_AUTHENTICATION_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_SERVICE_FAILURE = 3
EXIT_CONFIGURATION = 4

_EXIT_CODES: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: EXIT_INVALID_INPUT,
    ErrorCode.NOT_FOUND: EXIT_AUTHENTICATION_FAILED,
    ErrorCode.CREDENTIAL_MISMATCH: EXIT_AUTHENTICATION_FAILED,
    ErrorCode.NOTIFY_FAILED: EXIT_SERVICE_FAILURE,
    ErrorCode.EXTERNAL_SERVICE_ERROR: EXIT_SERVICE_FAILURE,
    ErrorCode.TIMEOUT_ERROR: EXIT_SERVICE_FAILURE,
    ErrorCode.CONFIGURATION_ERROR: EXIT_CONFIGURATION,
}

type Authenticator = Callable[[str, str], Result[User]]

app = typer.Typer(
    name="railway-auth",
    help="Authenticate users against a local user directory.",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console output on stderr.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def exit_code_for(result: Result[User]) -> int:
    """Map a pipeline outcome to a process exit code."""
    return result.either(
        on_success=lambda _: EXIT_OK,
        on_failure=lambda error: _EXIT_CODES.get(error.code, EXIT_AUTHENTICATION_FAILED),
    )


def build_authenticator(settings: AppSettings) -> Result[Authenticator]:
    """
    Instantiate the adapters and bind them to run_authentication.

    Fails with CONFIGURATION_ERROR when the users file cannot be loaded.
    """
    history = InMemoryLoginHistory() if settings.history.enabled else None
    return InMemoryUserDirectory.from_json_file(settings.users_file).map(
        lambda directory: partial(
            run_authentication,
            lookup_user=directory,
            check_password=ConstantTimePasswordChecker(),
            notify=LoggingNotifier(),
            audit_log=StructlogAuditLog(),
            record_history=history,
            confirmation_message=settings.notification.message,
            notify_failure_is_fatal=settings.notification.failure_is_fatal,
        )
    )


def _user_summary(user: User) -> dict[str, str]:
    return {"id": user.id, "name": user.name, "email": user.email}


def _error_body(error: FailureDescription) -> dict[str, str]:
    return {
        "error_code": error.code.value,
        "message": error.message,
        "timestamp": error.timestamp.isoformat(),
    }


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as e:
        typer.echo(f"FATAL: Configuration error — {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIGURATION) from e


@app.command()
def authenticate(
    username: Annotated[str, typer.Argument(help="Username to authenticate")],
    password: Annotated[
        str,
        typer.Option("--password", "-p", prompt=True, hide_input=True, help="Password (prompted when omitted)"),
    ],
    users_file: Annotated[
        Path | None,
        typer.Option("--users-file", dir_okay=False, help="Users JSON file (overrides USERS_FILE)"),
    ] = None,
) -> None:
    """Authenticate USERNAME and print the user as JSON."""
    settings = _load_settings()
    if users_file is not None:
        settings = settings.model_copy(update={"users_file": users_file})

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info("app.authenticate", version=__version__, username=username, users_file=str(settings.users_file))

    ctx = LoggingExecutionContext(operation="AuthenticateUser")
    result = ctx.execute(
        lambda: build_authenticator(settings).flat_map(lambda run: run(username, password))
    )

    result.either(
        on_success=lambda user: typer.echo(json.dumps(_user_summary(user))),
        on_failure=lambda error: typer.echo(json.dumps(_error_body(error)), err=True),
    )
    raise typer.Exit(code=exit_code_for(result))


@app.command("hash-password")
def hash_password_command(
    password: Annotated[
        str,
        typer.Option(prompt=True, hide_input=True, confirmation_prompt=True, help="Password to hash"),
    ],
    iterations: Annotated[int, typer.Option(min=1, help="PBKDF2 iteration count")] = DEFAULT_ITERATIONS,
) -> None:
    """Print a pbkdf2_sha256 credential for the users file."""
    typer.echo(hash_password(password, iterations=iterations))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
