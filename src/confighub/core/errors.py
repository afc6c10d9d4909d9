"""Domain error taxonomy shared by services and the HTTP layer.

Every error carries a stable machine-checkable ``category`` and the HTTP
status it maps to. Services raise these; the exception handler registered in
``confighub.main`` renders them as ``{"error": category, "detail": message}``.
"""

from __future__ import annotations

from fastapi import status


class ConfigHubError(RuntimeError):
    """Base exception for all expected ConfigHub failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    category: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(ConfigHubError):
    """Raised when no valid caller identity accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    category = "authentication_required"
    default_message = "Authentication required"


class PermissionDenied(ConfigHubError):
    """Raised on role or ownership violations, including self-votes."""

    status_code = status.HTTP_403_FORBIDDEN
    category = "permission_denied"
    default_message = "Permission denied"


class NotFound(ConfigHubError):
    """Raised when a config, version, comment, game or user is absent."""

    status_code = status.HTTP_404_NOT_FOUND
    category = "not_found"
    default_message = "Resource not found"


class ValidationError(ConfigHubError):
    """Raised for malformed vote values, empty summaries or oversized content."""

    status_code = status.HTTP_400_BAD_REQUEST
    category = "validation_error"
    default_message = "Invalid request data"


class ConflictError(ConfigHubError):
    """Raised when a user already has a config for the same game."""

    status_code = status.HTTP_409_CONFLICT
    category = "conflict"
    default_message = "Resource already exists"


class InternalError(ConfigHubError):
    """Raised when a transaction fails and has been rolled back."""


__all__ = [
    "AuthenticationRequired",
    "ConfigHubError",
    "ConflictError",
    "InternalError",
    "NotFound",
    "PermissionDenied",
    "ValidationError",
]
