"""Custom exception hierarchy for pyfootprint.

Business-rule failures (duplicate e-mail, bad credentials, ...) are never
raised; they are returned as :class:`pyfootprint.models.account.OperationResult`.
The exceptions below cover infrastructure problems only.
"""

from __future__ import annotations


class FootprintError(Exception):
    """Base exception for all pyfootprint errors."""


class FootprintConfigError(FootprintError):
    """Invalid configuration (usually from environment variables)."""


class FootprintStorageError(FootprintError):
    """Durable storage could not be written or cleared."""

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
    ) -> None:
        self.key = key
        super().__init__(message)
