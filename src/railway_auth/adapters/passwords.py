"""
Password adapter — constant-time credential comparison.

Implements the PasswordChecker port. Stored credentials come in two forms:

  - pbkdf2_sha256$<iterations>$<salt-b64>$<hash-b64>   (see hash_password)
  - anything else is compared as a plain secret

Both paths compare with hmac.compare_digest.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

from railway import ErrorCode, ResultFailures
from railway.result import Result

PBKDF2_SCHEME = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 600_000
_SALT_BYTES = 16


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def hash_password(
    password: str,
    *,
    iterations: int = DEFAULT_ITERATIONS,
    salt: bytes | None = None,
) -> str:
    """Hash `password` into the pbkdf2_sha256 storage format."""
    salt = salt if salt is not None else secrets.token_bytes(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_SCHEME}${iterations}${_b64encode(salt)}${_b64encode(digest)}"


def _matches(stored: str, provided: str) -> bool:
    """Raises ValueError for a malformed pbkdf2 credential."""
    if not stored.startswith(f"{PBKDF2_SCHEME}$"):
        return hmac.compare_digest(stored.encode("utf-8"), provided.encode("utf-8"))

    parts = stored.split("$")
    if len(parts) != 4:
        raise ValueError(f"Expected 4 '$'-separated fields, got {len(parts)}")
    _, iterations, salt, expected = parts
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        provided.encode("utf-8"),
        base64.b64decode(salt, validate=True),
        int(iterations),
    )
    return hmac.compare_digest(digest, base64.b64decode(expected, validate=True))


class ConstantTimePasswordChecker:
    """Compare a stored credential with the provided password."""

    def __call__(self, stored: str, provided: str) -> Result[None]:
        return (
            Result.from_computation(
                lambda: _matches(stored, provided),
                ErrorCode.CONFIGURATION_ERROR,
                "Stored credential is malformed",
            )
            .flat_map(lambda matched: Result.success(None) if matched else ResultFailures.credential_mismatch())
        )
