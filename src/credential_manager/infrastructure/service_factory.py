"""Composition helpers wiring credential adapters from settings."""

from __future__ import annotations

from credential_manager.application.services.credential_service import CredentialService
from credential_manager.config.settings import Settings, load_settings
from credential_manager.infrastructure.logging import configure_credential_logging
from credential_manager.infrastructure.security.password_hasher import BcryptPasswordHasher
from credential_manager.infrastructure.security.reset_token_issuer import (
    SecureResetTokenIssuer,
)


def build_credential_service(*, settings: Settings | None = None) -> CredentialService:
    """Build credential service from settings and apply the configured log level."""

    resolved = settings if settings is not None else load_settings()
    configure_credential_logging(level=resolved.log_level)
    return CredentialService(
        password_hasher=BcryptPasswordHasher(
            rounds=resolved.bcrypt_rounds,
            min_length=resolved.password_min_length,
        ),
        reset_token_issuer=SecureResetTokenIssuer(
            token_bytes=resolved.reset_token_bytes,
            ttl_seconds=resolved.reset_token_ttl_seconds,
        ),
        password_change_backdate_seconds=resolved.password_change_backdate_seconds,
    )
