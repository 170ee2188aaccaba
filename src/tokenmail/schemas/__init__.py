"""Schema exports for API request/response models."""

from .token import (
    ErrorResponse,
    IssueTokenRequest,
    IssueTokenResponse,
    EmailCheckResponse,
    TokenLookupRequest,
    TokenLookupResponse,
    issued_to_response,
    record_to_response,
)

__all__ = [
    # Token schemas
    "IssueTokenRequest",
    "IssueTokenResponse",
    "TokenLookupRequest",
    "TokenLookupResponse",
    "issued_to_response",
    "record_to_response",
    # Diagnostics / errors
    "EmailCheckResponse",
    "ErrorResponse",
]
