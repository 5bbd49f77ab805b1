from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class OutOfWindowError(ValidationError):
    """Scan time is outside the supported capture window."""

    def __init__(self, message: str):
        super().__init__(message, field="scan_time")


class InvalidCredentialError(ValidationError):
    """Password re-confirmation failed."""

    def __init__(self, message: str = "The provided password is incorrect."):
        super().__init__(message, field="password")


class AlreadyCompleteError(DomainError):
    """Both time in and time out are already recorded for the day."""


class MissingConfigurationError(DomainError):
    """No attendance settings are stored and no fallback is configured."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ExtractionFailed(DomainError):
    """Text extraction returned no content."""


class EmbeddingFailed(DomainError):
    """Embedding generation failed (non-fatal for the pipeline)."""


class IndexingFailed(DomainError):
    """Search indexing failed (non-fatal, extraction stays completed)."""


class ExtractionInProgress(DomainError):
    """Another pipeline run currently holds the document in processing."""
