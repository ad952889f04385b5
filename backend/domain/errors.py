"""Error taxonomy shared by the service layer and the HTTP handlers."""
from __future__ import annotations


class RevenueError(Exception):
    """Base class; ``status_code`` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RevenueError):
    status_code = 400


class AuthenticationError(RevenueError):
    status_code = 401


class PermissionDeniedError(RevenueError):
    status_code = 403


class NotFoundError(RevenueError):
    status_code = 404


class PersistenceError(RevenueError):
    """Storage fault. The message is logged, callers only see a generic error."""

    status_code = 500
