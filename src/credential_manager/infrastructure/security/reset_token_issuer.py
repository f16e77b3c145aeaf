"""Password-reset token issuer backed by the OS secure random source."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from typing import Final

from credential_manager.application.ports.reset_token_port import (
    ResetTokenIssue,
    ResetTokenIssuerPort,
)
from credential_manager.domain.auth.errors import RandomSourceError
from credential_manager.domain.auth.reset_status import ResetStatus, reset_status

DEFAULT_TOKEN_BYTES: Final[int] = 32
DEFAULT_TOKEN_TTL_SECONDS: Final[int] = 10 * 60


class SecureResetTokenIssuer(ResetTokenIssuerPort):
    """Issue hex reset tokens and store only their SHA-256 fingerprint."""

    def __init__(
        self,
        *,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    ) -> None:
        if token_bytes < DEFAULT_TOKEN_BYTES:
            raise ValueError(f"token_bytes must be at least {DEFAULT_TOKEN_BYTES}")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._token_bytes = token_bytes
        self._ttl = timedelta(seconds=ttl_seconds)

    def issue(self, *, now: datetime | None = None) -> ResetTokenIssue:
        try:
            raw_token = secrets.token_hex(self._token_bytes)
        except (NotImplementedError, OSError) as error:
            raise RandomSourceError("secure random source is unavailable") from error

        issued_at = now if now is not None else datetime.now(tz=UTC)
        return ResetTokenIssue(
            raw_token=raw_token,
            fingerprint=self.fingerprint(raw_token),
            expires_at=issued_at + self._ttl,
        )

    def fingerprint(self, raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()

    def validate(
        self,
        *,
        presented_raw_token: str,
        stored_fingerprint: str | None,
        stored_expires_at: datetime | None,
        now: datetime | None = None,
    ) -> bool:
        if not presented_raw_token:
            return False
        status = reset_status(
            fingerprint=stored_fingerprint,
            expires_at=stored_expires_at,
            now=now,
        )
        if status is not ResetStatus.PENDING_RESET or stored_fingerprint is None:
            return False

        presented_fingerprint = self.fingerprint(presented_raw_token)
        return hmac.compare_digest(
            presented_fingerprint.encode("utf-8"),
            stored_fingerprint.encode("utf-8"),
        )
