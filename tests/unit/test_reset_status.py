from __future__ import annotations

from datetime import UTC, datetime, timedelta

from credential_manager.domain.auth.reset_status import ResetStatus, reset_status

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def test_record_without_reset_fields_has_no_pending_reset() -> None:
    assert reset_status(fingerprint=None, expires_at=None, now=T0) is ResetStatus.NO_PENDING_RESET


def test_fingerprint_without_expiry_is_not_pending() -> None:
    assert reset_status(fingerprint="abc", expires_at=None, now=T0) is ResetStatus.NO_PENDING_RESET


def test_unexpired_fingerprint_is_pending() -> None:
    status = reset_status(fingerprint="abc", expires_at=T0 + timedelta(minutes=10), now=T0)

    assert status is ResetStatus.PENDING_RESET


def test_expired_fingerprint_is_not_pending() -> None:
    status = reset_status(fingerprint="abc", expires_at=T0, now=T0 + timedelta(seconds=1))

    assert status is ResetStatus.NO_PENDING_RESET


def test_expiry_boundary_is_still_pending() -> None:
    status = reset_status(fingerprint="abc", expires_at=T0, now=T0)

    assert status is ResetStatus.PENDING_RESET


def test_blank_fingerprint_is_not_pending() -> None:
    status = reset_status(fingerprint="", expires_at=T0 + timedelta(minutes=10), now=T0)

    assert status is ResetStatus.NO_PENDING_RESET
