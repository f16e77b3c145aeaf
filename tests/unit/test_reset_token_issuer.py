from __future__ import annotations

import hashlib
from datetime import UTC, datetime, timedelta

import pytest

from credential_manager.domain.auth.errors import RandomSourceError
from credential_manager.infrastructure.security import reset_token_issuer as issuer_module
from credential_manager.infrastructure.security.reset_token_issuer import SecureResetTokenIssuer

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def test_issue_returns_hex_token_sha256_fingerprint_and_ten_minute_expiry() -> None:
    issuer = SecureResetTokenIssuer()

    issued = issuer.issue(now=T0)

    assert len(issued.raw_token) == 64
    int(issued.raw_token, 16)
    assert issued.fingerprint == hashlib.sha256(issued.raw_token.encode("utf-8")).hexdigest()
    assert issued.fingerprint != issued.raw_token
    assert issued.expires_at == T0 + timedelta(minutes=10)


def test_issue_repr_hides_raw_token() -> None:
    issued = SecureResetTokenIssuer().issue(now=T0)

    assert issued.raw_token not in repr(issued)


def test_issued_tokens_are_unique() -> None:
    issuer = SecureResetTokenIssuer()

    tokens = {issuer.issue(now=T0).raw_token for _ in range(20)}

    assert len(tokens) == 20


def test_validate_accepts_until_expiry_inclusive() -> None:
    issuer = SecureResetTokenIssuer()
    issued = issuer.issue(now=T0)

    def _validate(*, at_seconds: int, token: str = issued.raw_token) -> bool:
        return issuer.validate(
            presented_raw_token=token,
            stored_fingerprint=issued.fingerprint,
            stored_expires_at=issued.expires_at,
            now=T0 + timedelta(seconds=at_seconds),
        )

    assert _validate(at_seconds=599) is True
    assert _validate(at_seconds=600) is True
    assert _validate(at_seconds=601) is False
    assert _validate(at_seconds=601, token="forged") is False


def test_validate_rejects_one_character_mutation() -> None:
    issuer = SecureResetTokenIssuer()
    issued = issuer.issue(now=T0)
    last = issued.raw_token[-1]
    mutated = issued.raw_token[:-1] + ("0" if last != "0" else "1")

    assert (
        issuer.validate(
            presented_raw_token=mutated,
            stored_fingerprint=issued.fingerprint,
            stored_expires_at=issued.expires_at,
            now=T0,
        )
        is False
    )


@pytest.mark.parametrize(
    ("fingerprint", "expires_at"),
    [
        (None, None),
        (None, T0 + timedelta(minutes=10)),
        ("fingerprint", None),
        ("", T0 + timedelta(minutes=10)),
    ],
)
def test_validate_returns_false_for_missing_state(
    fingerprint: str | None,
    expires_at: datetime | None,
) -> None:
    issuer = SecureResetTokenIssuer()

    assert (
        issuer.validate(
            presented_raw_token="anything",
            stored_fingerprint=fingerprint,
            stored_expires_at=expires_at,
            now=T0,
        )
        is False
    )


def test_validate_rejects_blank_token_and_non_ascii_fingerprint() -> None:
    issuer = SecureResetTokenIssuer()
    expires_at = T0 + timedelta(minutes=10)

    assert (
        issuer.validate(
            presented_raw_token="",
            stored_fingerprint=issuer.fingerprint(""),
            stored_expires_at=expires_at,
            now=T0,
        )
        is False
    )
    assert (
        issuer.validate(
            presented_raw_token="token",
            stored_fingerprint="é" * 64,
            stored_expires_at=expires_at,
            now=T0,
        )
        is False
    )


def test_issue_fails_when_random_source_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unavailable(nbytes: int) -> str:
        raise NotImplementedError("no entropy source")

    monkeypatch.setattr(issuer_module.secrets, "token_hex", _unavailable)

    with pytest.raises(RandomSourceError):
        SecureResetTokenIssuer().issue(now=T0)


def test_issuer_rejects_weak_configuration() -> None:
    with pytest.raises(ValueError):
        SecureResetTokenIssuer(token_bytes=16)
    with pytest.raises(ValueError):
        SecureResetTokenIssuer(ttl_seconds=0)
