"""Application service for the credential lifecycle of one user record."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import UTC, datetime

from credential_manager.application.ports.credential_record_port import CredentialRecord
from credential_manager.application.ports.password_hasher_port import PasswordHasherPort
from credential_manager.application.ports.reset_token_port import ResetTokenIssuerPort
from credential_manager.domain.auth.credentials import require_matching_confirmation
from credential_manager.domain.auth.errors import MalformedHashError
from credential_manager.domain.auth.password_change import (
    DEFAULT_BACKDATE_SECONDS,
    next_password_changed_at,
    record_password_change,
    was_changed_after,
)
from credential_manager.domain.auth.reset_status import ResetStatus, reset_status

logger = logging.getLogger(__name__)


class CredentialService:
    """Compute credential updates that the account collaborator persists.

    Every method takes the current record and returns values to store; nothing
    is retained between calls. Concurrent updates to one record must be
    serialized by storage (last write wins).
    """

    def __init__(
        self,
        *,
        password_hasher: PasswordHasherPort,
        reset_token_issuer: ResetTokenIssuerPort,
        password_change_backdate_seconds: int = DEFAULT_BACKDATE_SECONDS,
    ) -> None:
        self._password_hasher = password_hasher
        self._reset_token_issuer = reset_token_issuer
        self._backdate_seconds = password_change_backdate_seconds

    async def set_password(
        self,
        *,
        record: CredentialRecord,
        password: str,
        is_new_record: bool,
        password_confirm: str | None = None,
        now: datetime | None = None,
    ) -> CredentialRecord:
        """Hash a new password and stamp the change time for existing records."""

        require_matching_confirmation(password=password, password_confirm=password_confirm)
        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        changed_at = record_password_change(
            is_new_record=is_new_record,
            now=now,
            backdate_seconds=self._backdate_seconds,
        )
        return replace(
            record,
            password_hash=password_hash,
            password_changed_at=next_password_changed_at(
                previous=record.password_changed_at,
                candidate=changed_at,
            ),
        )

    async def verify_password(self, *, record: CredentialRecord, password: str) -> bool:
        """Return whether password matches the stored hash."""

        if not record.password_hash:
            return False
        try:
            return await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=record.password_hash,
            )
        except MalformedHashError:
            logger.error("credential_integrity_fault reason=malformed_password_hash")
            return False

    def needs_rehash(self, *, record: CredentialRecord) -> bool:
        """Return whether stored hash should be recomputed with the current cost."""

        if not record.password_hash:
            return False
        try:
            return self._password_hasher.needs_rehash(record.password_hash)
        except MalformedHashError:
            logger.error("credential_integrity_fault reason=malformed_password_hash")
            return False

    def is_session_stale(
        self,
        *,
        record: CredentialRecord,
        issued_at: int | float | datetime,
    ) -> bool:
        """Return whether a session issued at `issued_at` predates the last password change."""

        return was_changed_after(record.password_changed_at, issued_at)

    def request_password_reset(
        self,
        *,
        record: CredentialRecord,
        now: datetime | None = None,
    ) -> tuple[CredentialRecord, str]:
        """Issue a reset token, superseding any outstanding one.

        Returns the record to persist and the raw token for out-of-band delivery.
        """

        superseded = self._reset_status(record=record, now=now) is ResetStatus.PENDING_RESET
        issued = self._reset_token_issuer.issue(now=now)
        logger.info(
            "password_reset_issued superseded=%s expires_at=%s",
            superseded,
            issued.expires_at.isoformat(),
        )
        updated = replace(
            record,
            reset_token_fingerprint=issued.fingerprint,
            reset_token_expires_at=issued.expires_at,
        )
        return updated, issued.raw_token

    def validate_reset_token(
        self,
        *,
        record: CredentialRecord,
        raw_token: str,
        now: datetime | None = None,
    ) -> bool:
        """Return whether raw_token redeems the record's pending reset."""

        return self._reset_token_issuer.validate(
            presented_raw_token=raw_token,
            stored_fingerprint=record.reset_token_fingerprint,
            stored_expires_at=record.reset_token_expires_at,
            now=now,
        )

    async def redeem_password_reset(
        self,
        *,
        record: CredentialRecord,
        raw_token: str,
        password: str,
        password_confirm: str | None = None,
        now: datetime | None = None,
    ) -> CredentialRecord | None:
        """Change the password through a reset token and clear the pending reset.

        Returns None when the token does not redeem the record. The returned
        record must be persisted in one update so the token cannot be replayed.
        """

        if not self.validate_reset_token(record=record, raw_token=raw_token, now=now):
            logger.info("password_reset_rejected")
            return None

        changed = await self.set_password(
            record=record,
            password=password,
            password_confirm=password_confirm,
            is_new_record=False,
            now=now,
        )
        logger.info("password_reset_redeemed")
        return _without_reset(changed)

    def clear_expired_reset(
        self,
        *,
        record: CredentialRecord,
        now: datetime | None = None,
    ) -> CredentialRecord:
        """Drop reset fields that no longer describe a pending reset."""

        if record.reset_token_fingerprint is None and record.reset_token_expires_at is None:
            return record
        if self._reset_status(record=record, now=now) is ResetStatus.PENDING_RESET:
            return record
        return _without_reset(record)

    def _reset_status(self, *, record: CredentialRecord, now: datetime | None) -> ResetStatus:
        return reset_status(
            fingerprint=record.reset_token_fingerprint,
            expires_at=record.reset_token_expires_at,
            now=now if now is not None else datetime.now(tz=UTC),
        )


def _without_reset(record: CredentialRecord) -> CredentialRecord:
    return replace(record, reset_token_fingerprint=None, reset_token_expires_at=None)
