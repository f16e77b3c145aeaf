"""Shared guards for plaintext credential inputs."""

from __future__ import annotations

import hmac
from typing import Final

from credential_manager.domain.auth.errors import (
    InvalidInputError,
    PasswordConfirmationMismatchError,
)

BCRYPT_MAX_PASSWORD_BYTES: Final[int] = 72


def require_password(*, password: str, min_length: int) -> bytes:
    """Validate one plaintext password and return the bytes bcrypt consumes."""

    if not password:
        raise InvalidInputError("password cannot be blank")
    if len(password) < min_length:
        raise InvalidInputError(f"password must be at least {min_length} characters")
    return bcrypt_input(password)


def bcrypt_input(password: str) -> bytes:
    """Return UTF-8 password bytes cut to bcrypt's 72-byte window.

    Other bcrypt implementations truncate silently; cutting here keeps their
    stored hashes verifiable.
    """

    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def require_matching_confirmation(*, password: str, password_confirm: str | None) -> None:
    """Reject a supplied confirmation that differs from the password."""

    if password_confirm is None:
        return
    if not hmac.compare_digest(password.encode("utf-8"), password_confirm.encode("utf-8")):
        raise PasswordConfirmationMismatchError()
