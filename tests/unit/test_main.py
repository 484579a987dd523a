"""
Unit tests for the main module — composition root and CLI.

The CLI is driven through typer's CliRunner against a temporary users
file; no real mail transport or store is involved.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog
from railway import ErrorCode, Result, ResultAssertions
from typer.testing import CliRunner

from railway_auth.adapters.passwords import ConstantTimePasswordChecker
from railway_auth.config import AppSettings
from railway_auth.domain.models import User
from railway_auth.main import (
    EXIT_AUTHENTICATION_FAILED,
    EXIT_CONFIGURATION,
    EXIT_INVALID_INPUT,
    EXIT_OK,
    EXIT_SERVICE_FAILURE,
    app,
    build_authenticator,
    configure_structlog,
    exit_code_for,
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point settings at an empty directory so no real users file or .env is used."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    for name in ("USERS_FILE", "NOTIFICATION__FAILURE_IS_FATAL", "HISTORY__ENABLED"):
        monkeypatch.delenv(name, raising=False)


class TestConfigureStructlog:
    """Verify structlog configuration function."""

    def test_configure_structlog_sets_log_level(self) -> None:
        """
        GIVEN log_level="WARNING"
        WHEN configure_structlog is called
        THEN structlog is configured (no exception raised).
        """
        configure_structlog("WARNING")
        assert structlog.is_configured()

    def test_configure_structlog_invalid_level_falls_back(self) -> None:
        """
        GIVEN an invalid log_level string
        WHEN configure_structlog is called
        THEN it falls back to INFO (no crash).
        """
        configure_structlog("NONEXISTENT")
        assert structlog.is_configured()


class TestExitCodeFor:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (ErrorCode.INVALID_INPUT, EXIT_INVALID_INPUT),
            (ErrorCode.NOT_FOUND, EXIT_AUTHENTICATION_FAILED),
            (ErrorCode.CREDENTIAL_MISMATCH, EXIT_AUTHENTICATION_FAILED),
            (ErrorCode.NOTIFY_FAILED, EXIT_SERVICE_FAILURE),
            (ErrorCode.CONFIGURATION_ERROR, EXIT_CONFIGURATION),
            (ErrorCode.UNKNOWN_ERROR, EXIT_AUTHENTICATION_FAILED),
        ],
    )
    def test_failure_codes(self, code: ErrorCode, expected: int) -> None:
        assert exit_code_for(Result.failure(code, "x")) == expected

    def test_success(self, alice: User) -> None:
        assert exit_code_for(Result.success(alice)) == EXIT_OK


class TestBuildAuthenticator:
    def test_wires_users_file_into_pipeline(self, users_file: Path) -> None:
        """
        GIVEN a valid users file
        WHEN build_authenticator is called
        THEN the returned function authenticates against it.
        """
        settings = AppSettings(_env_file=None, users_file=users_file)
        authenticate = ResultAssertions.assert_success(build_authenticator(settings))

        user = ResultAssertions.assert_success(authenticate("alice", "secret"))
        assert user.id == "1"
        ResultAssertions.assert_failure(authenticate("alice", "wrong"), ErrorCode.CREDENTIAL_MISMATCH)

    def test_binds_configured_adapters(self, users_file: Path) -> None:
        settings = AppSettings(_env_file=None, users_file=users_file, history={"enabled": False})
        authenticate = ResultAssertions.assert_success(build_authenticator(settings))

        assert isinstance(authenticate.keywords["check_password"], ConstantTimePasswordChecker)
        assert authenticate.keywords["record_history"] is None
        assert authenticate.keywords["notify_failure_is_fatal"] is True

    def test_missing_users_file(self, tmp_path: Path) -> None:
        settings = AppSettings(_env_file=None, users_file=tmp_path / "absent.json")
        ResultAssertions.assert_failure(build_authenticator(settings), ErrorCode.CONFIGURATION_ERROR)


class TestAuthenticateCommand:
    def test_success_prints_user_without_password(self, users_file: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "alice", "--password", "secret", "--users-file", str(users_file)]
        )

        assert result.exit_code == EXIT_OK
        assert json.loads(result.stdout.strip().splitlines()[-1]) == {
            "id": "1",
            "name": "alice",
            "email": "a@test.com",
        }
        assert "secret" not in result.stdout

    def test_prompts_for_password(self, users_file: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "alice", "--users-file", str(users_file)], input="secret\n"
        )
        assert result.exit_code == EXIT_OK

    def test_wrong_password(self, users_file: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "alice", "--password", "wrong", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_AUTHENTICATION_FAILED
        assert "CREDENTIAL_MISMATCH" in result.output

    def test_unknown_user(self, users_file: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "mallory", "--password", "x", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_AUTHENTICATION_FAILED
        assert "NOT_FOUND" in result.output

    def test_blank_password(self, users_file: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "alice", "--password", "  ", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_INVALID_INPUT
        assert "Invalid params" in result.output

    def test_notification_failure_is_fatal_by_default(self, users_file: Path) -> None:
        """bob's email has no '@', so the confirmation cannot be delivered."""
        result = runner.invoke(
            app, ["authenticate", "bob", "--password", "hunter2", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_SERVICE_FAILURE
        assert "NOTIFY_FAILED" in result.output

    def test_notification_failure_tolerated_when_configured(
        self, users_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NOTIFICATION__FAILURE_IS_FATAL", "false")
        result = runner.invoke(
            app, ["authenticate", "bob", "--password", "hunter2", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_OK
        assert '"id": "2"' in result.output

    def test_users_file_from_environment(self, users_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USERS_FILE", str(users_file))
        result = runner.invoke(app, ["authenticate", "alice", "--password", "secret"])
        assert result.exit_code == EXIT_OK

    @pytest.mark.parametrize(("enabled", "expected"), [("true", True), ("false", False)])
    def test_history_recording_is_logged(
        self, users_file: Path, monkeypatch: pytest.MonkeyPatch, enabled: str, expected: bool
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("HISTORY__ENABLED", enabled)
        result = runner.invoke(
            app, ["authenticate", "alice", "--password", "secret", "--users-file", str(users_file)]
        )
        assert result.exit_code == EXIT_OK
        assert ("history.recorded" in result.output) is expected

    def test_missing_users_file(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["authenticate", "alice", "--password", "secret", "--users-file", str(tmp_path / "nope.json")]
        )
        assert result.exit_code == EXIT_CONFIGURATION
        assert "CONFIGURATION_ERROR" in result.output

    def test_invalid_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["authenticate", "alice", "--password", "secret"])
        assert result.exit_code == EXIT_CONFIGURATION
        assert "Configuration error" in result.output


class TestHashPasswordCommand:
    def test_prints_verifiable_hash(self) -> None:
        result = runner.invoke(
            app, ["hash-password", "--iterations", "1000"], input="secret\nsecret\n"
        )

        assert result.exit_code == EXIT_OK
        stored = result.stdout.strip().splitlines()[-1]
        assert stored.startswith("pbkdf2_sha256$1000$")
        assert ConstantTimePasswordChecker()(stored, "secret").is_success()
