"""Domain exceptions raised by the service layer."""
from __future__ import annotations


class PlatformError(Exception):
    """Base class for errors the API translates into client responses."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PlatformError):
    status_code = 404


class ConflictError(PlatformError):
    status_code = 409


class InvalidOperationError(PlatformError):
    status_code = 400


class AuthenticationError(PlatformError):
    status_code = 401


class PermissionDeniedError(PlatformError):
    status_code = 403
