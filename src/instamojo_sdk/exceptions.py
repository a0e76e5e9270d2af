"""
Custom exceptions for the Instamojo SDK.
Provides meaningful error classes for client consumers.
"""

from typing import Any, Optional


class InstamojoAPIError(Exception):
    """
    Base exception for all SDK-level failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., the decoded envelope).
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(InstamojoAPIError):
    """Raised when no usable session token can be obtained."""


class TransportError(InstamojoAPIError):
    """Raised by transports when the server could not be reached."""

    def __init__(self, message: str, url: str, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.url = url
