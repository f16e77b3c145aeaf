"""Error taxonomy for credential lifecycle operations."""

from __future__ import annotations


class CredentialError(Exception):
    """Base class for credential lifecycle failures."""


class InvalidInputError(CredentialError, ValueError):
    """Raised when a plaintext password is blank, too short or too long."""


class PasswordConfirmationMismatchError(InvalidInputError):
    """Raised when password confirmation does not match the password."""

    def __init__(self) -> None:
        super().__init__("password confirmation does not match password")


class MalformedHashError(CredentialError, ValueError):
    """Raised when a stored password hash is not a well-formed digest."""


class RandomSourceError(CredentialError, RuntimeError):
    """Raised when the secure random source is unavailable."""
