"""
Exception hierarchy for CorpHub.

Every error raised by the repositories and services is a subclass of
CorpHubError and carries the HTTP status the API layer reports for it.
"""

from typing import Any, Dict, Optional


class CorpHubError(Exception):
    """Base class for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(CorpHubError):
    """The targeted resource does not exist."""

    status_code = 404


class ConflictError(CorpHubError):
    """A uniqueness rule would be violated."""

    status_code = 409


class InvalidArgumentError(CorpHubError):
    """The caller supplied an unusable argument."""

    status_code = 400


class TransientStoreError(CorpHubError):
    """The database failed for a reason unrelated to constraints (pool exhaustion, lost connection)."""

    status_code = 500


class ExternalServiceError(CorpHubError):
    """A third-party service (media host, broker) failed."""

    status_code = 502


class ConfigurationError(CorpHubError):
    """Required configuration is missing or invalid."""

    status_code = 500
