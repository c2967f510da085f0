from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ApiError(Exception):
    """Raised when the backend answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}


class UnauthorizedError(Exception):
    """Raised on 401/403 so the web layer can drop the stored auth and go to /login.

    Note: not an ApiError subclass; per-page ``except ApiError`` blocks must not catch it.
    """

    def __init__(self, status_code: int = 401):
        super().__init__("Unauthorized")
        self.status_code = status_code
