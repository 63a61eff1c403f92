"""
Exception hierarchy for authentication, authorization and store failures.

All service exceptions inherit from AuthServiceError so API routes can catch
broadly or narrowly. The message is safe to show to end users; internal
causes go to the logs, not into the message.
"""

from __future__ import annotations


class AuthServiceError(Exception):
    """Base exception for service-layer failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthServiceError):
    """Malformed input: weak password, missing field, bad reference."""


class DuplicateEmailError(ValidationError):
    """Registration with an email that already exists."""

    def __init__(self, message: str = "Email already registered") -> None:
        super().__init__(message)


class AuthenticationError(AuthServiceError):
    """Wrong credentials or a missing/invalid/expired token."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class AccountInactiveError(AuthenticationError):
    """Credentials are correct but the account has been deactivated."""

    def __init__(
        self,
        message: str = "Account is inactive. Please contact administrator.",
    ) -> None:
        super().__init__(message)


class AuthorizationError(AuthServiceError):
    """Authenticated, but the role level is insufficient for the target or action."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotFoundError(AuthServiceError):
    """Referenced row does not exist."""


class StoreError(AuthServiceError):
    """Credential store unreachable or returned an unexpected result."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        operation: str | None = None,
    ) -> None:
        self.operation = operation
        super().__init__(message)
