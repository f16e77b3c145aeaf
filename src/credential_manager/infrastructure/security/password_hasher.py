"""Bcrypt password hasher adapter."""

from __future__ import annotations

import re
from typing import Final

import bcrypt

from credential_manager.application.ports.password_hasher_port import PasswordHasherPort
from credential_manager.domain.auth.credentials import bcrypt_input, require_password
from credential_manager.domain.auth.errors import MalformedHashError

DEFAULT_BCRYPT_ROUNDS: Final[int] = 12
DEFAULT_MIN_PASSWORD_LENGTH: Final[int] = 8

# $2a$/$2y$ come from other bcrypt implementations and verify the same way.
_BCRYPT_HASH_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\$2[aby]\$(?P<cost>0[4-9]|[12][0-9]|3[01])\$[./A-Za-z0-9]{53}$"
)


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt with an embedded cost factor."""

    def __init__(
        self,
        *,
        rounds: int = DEFAULT_BCRYPT_ROUNDS,
        min_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self._rounds = rounds
        self._min_length = min_length

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash_password(self, password: str) -> str:
        encoded = require_password(password=password, min_length=self._min_length)
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        _parse_cost(password_hash)
        if not password:
            return False

        try:
            return bcrypt.checkpw(bcrypt_input(password), password_hash.encode("utf-8"))
        except ValueError as error:
            raise MalformedHashError("stored password hash is malformed") from error

    def needs_rehash(self, password_hash: str) -> bool:
        return _parse_cost(password_hash) != self._rounds


def _parse_cost(password_hash: str) -> int:
    """Return cost factor embedded in a bcrypt digest, rejecting malformed values."""

    match = _BCRYPT_HASH_PATTERN.fullmatch(password_hash or "")
    if match is None:
        raise MalformedHashError("stored password hash is malformed")
    return int(match.group("cost"))
