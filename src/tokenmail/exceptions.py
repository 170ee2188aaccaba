"""Errors raised by the token lifecycle.

Every error is scoped to a single request. The HTTP layer maps each subclass to
its ``status_code`` and reports ``error_code`` so callers can tell the cases
apart.
"""

from typing import Optional


class TokenServiceError(Exception):
    """Base class for recoverable token service errors."""

    error_code = "token_service_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TokenServiceError):
    """Missing or invalid input. Raised before any side effect."""

    error_code = "validation_error"
    status_code = 400


class DeliveryError(TokenServiceError):
    """The mail transport failed; nothing was stored."""

    error_code = "delivery_error"
    status_code = 502

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NotFoundError(TokenServiceError):
    """No token is held for the address."""

    error_code = "not_found"
    status_code = 404


class ExpiredError(TokenServiceError):
    """The token outlived its TTL and has been evicted."""

    error_code = "expired"
    status_code = 410
