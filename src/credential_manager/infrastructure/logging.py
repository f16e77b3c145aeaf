"""Level setup for credential event loggers."""

from __future__ import annotations

import logging

CREDENTIAL_LOGGER_NAME = "credential_manager"


def configure_credential_logging(*, level: str) -> logging.Logger:
    """Apply runtime level to the credential package logger.

    Handlers and formatting stay with the host process; events propagate to it.
    """

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    package_logger = logging.getLogger(CREDENTIAL_LOGGER_NAME)
    package_logger.setLevel(resolved_level)
    return package_logger
