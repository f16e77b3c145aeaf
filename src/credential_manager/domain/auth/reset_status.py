"""Password-reset state of one credential record."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum


class ResetStatus(StrEnum):
    """Reset-token states a credential record can be in.

    Issuing moves a record to PENDING_RESET, superseding any outstanding token.
    Redemption and observed expiry move it back to NO_PENDING_RESET.
    """

    NO_PENDING_RESET = "NO_PENDING_RESET"
    PENDING_RESET = "PENDING_RESET"


def reset_status(
    *,
    fingerprint: str | None,
    expires_at: datetime | None,
    now: datetime | None = None,
) -> ResetStatus:
    """Derive reset state from stored fingerprint/expiry fields."""

    if not fingerprint or expires_at is None:
        return ResetStatus.NO_PENDING_RESET

    current = now if now is not None else datetime.now(tz=UTC)
    if _as_utc(current) > _as_utc(expires_at):
        return ResetStatus.NO_PENDING_RESET
    return ResetStatus.PENDING_RESET


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
