"""Credential fields read and written on behalf of the account collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CredentialRecord:
    """Credential state of one user account.

    The collaborator owns the record's lifetime and persists every value the
    credential service returns.
    """

    password_hash: str | None = field(default=None, repr=False)
    password_changed_at: datetime | None = None
    reset_token_fingerprint: str | None = field(default=None, repr=False)
    reset_token_expires_at: datetime | None = None
