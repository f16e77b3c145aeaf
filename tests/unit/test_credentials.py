from __future__ import annotations

import pytest

from credential_manager.domain.auth.credentials import (
    require_matching_confirmation,
    require_password,
)
from credential_manager.domain.auth.errors import (
    InvalidInputError,
    PasswordConfirmationMismatchError,
)


def test_require_password_returns_utf8_bytes() -> None:
    assert require_password(password="pässword", min_length=8) == "pässword".encode("utf-8")


def test_require_password_counts_characters_not_bytes_for_minimum() -> None:
    with pytest.raises(InvalidInputError):
        require_password(password="ääää", min_length=8)


def test_require_password_accepts_long_multibyte_password() -> None:
    password = "ä" * 45

    encoded = require_password(password=password, min_length=8)

    assert len(password.encode("utf-8")) == 90
    assert encoded == password.encode("utf-8")[:72]


def test_missing_confirmation_is_accepted() -> None:
    require_matching_confirmation(password="Sunshine1", password_confirm=None)


def test_mismatched_confirmation_is_invalid_input() -> None:
    with pytest.raises(PasswordConfirmationMismatchError) as exc_info:
        require_matching_confirmation(password="Sunshine1", password_confirm="Sunshine2")

    assert isinstance(exc_info.value, InvalidInputError)
