"""
Domain models — immutable values threaded through the authentication pipeline.

All models are frozen dataclasses. Passwords are excluded from repr so they
never end up in logs or assertion messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class User:
    """
    A user record as returned by the user directory.

    `name` is the username used for lookup; `password` is the stored
    credential (plain or a pbkdf2_sha256 hash).
    """

    id: str
    name: str
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Credentials:
    """Raw pipeline input, after validation."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class UserLogin:
    """
    The looked-up user paired with the password that was provided.

    Carried through the password check and notification steps so both
    remain available; the final step projects it down to `user`.
    """

    user: User
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class LoginRecord:
    """One successful sign-in, as kept by the login history."""

    user_id: str
    logged_in_at: datetime
