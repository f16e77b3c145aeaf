"""Port for password-reset token issuance and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class ResetTokenIssue:
    """Freshly issued reset token.

    Only `fingerprint` and `expires_at` are persisted; `raw_token` goes to the
    user out-of-band.
    """

    raw_token: str = field(repr=False)
    fingerprint: str
    expires_at: datetime


class ResetTokenIssuerPort(Protocol):
    """Reset token issuance/validation contract."""

    def issue(self, *, now: datetime | None = None) -> ResetTokenIssue:
        """Generate a new raw token with its fingerprint and expiry."""

    def fingerprint(self, raw_token: str) -> str:
        """Return deterministic one-way digest of one raw token."""

    def validate(
        self,
        *,
        presented_raw_token: str,
        stored_fingerprint: str | None,
        stored_expires_at: datetime | None,
        now: datetime | None = None,
    ) -> bool:
        """Return whether presented token matches stored, unexpired fingerprint."""
