from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..domain.token import IssuedToken, TokenRecord


class IssueTokenRequest(BaseModel):
    # optional here so the service reports missing fields itself
    email: Optional[str] = None
    purpose: Optional[str] = None


class IssueTokenResponse(BaseModel):
    message: str = "email sent"
    token: str
    purpose: str
    timestamp: datetime
    message_id: Optional[str] = None


class TokenLookupRequest(BaseModel):
    email: Optional[str] = None


class TokenLookupResponse(BaseModel):
    message: str = "token available"
    email: str
    token: str
    purpose: str
    created_at: datetime
    expires_at: datetime


class ErrorResponse(BaseModel):
    detail: str
    error: str


class EmailCheckResponse(BaseModel):
    ok: bool
    message: str
    message_id: Optional[str] = None


def issued_to_response(issued: IssuedToken) -> IssueTokenResponse:
    return IssueTokenResponse(
        token=issued.token,
        purpose=str(issued.purpose),
        timestamp=issued.timestamp,
        message_id=issued.message_id,
    )


def record_to_response(email: str, record: TokenRecord) -> TokenLookupResponse:
    return TokenLookupResponse(
        email=email,
        token=record.token,
        purpose=str(record.purpose),
        created_at=record.created_at,
        expires_at=record.expires_at,
    )
