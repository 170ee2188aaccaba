from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_token_service
from ..logging_config import get_logger
from ..schemas.token import (
    ErrorResponse,
    IssueTokenRequest,
    IssueTokenResponse,
    TokenLookupRequest,
    TokenLookupResponse,
    issued_to_response,
    record_to_response,
)
from ..services.email_token_service import EmailTokenService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/tokens", tags=["tokens"])

ISSUE_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing or invalid email/purpose"},
    502: {"model": ErrorResponse, "description": "The token email could not be sent"},
}
LOOKUP_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing email"},
    404: {"model": ErrorResponse, "description": "No token for this email"},
    410: {"model": ErrorResponse, "description": "The token has expired"},
}


@router.post("", response_model=IssueTokenResponse, responses=ISSUE_ERRORS)
async def issue_token(
    req: IssueTokenRequest,
    token_svc: EmailTokenService = Depends(get_token_service),
):
    """Generate a token and email it to the address."""
    logger.debug("issue_token endpoint called", email=req.email, purpose=req.purpose)
    issued = await token_svc.issue_token(req.email, req.purpose)
    return issued_to_response(issued)


async def _lookup(email: Optional[str], token_svc: EmailTokenService) -> TokenLookupResponse:
    record = await token_svc.lookup_token(email)
    return record_to_response(email or "", record)


@router.post("/lookup", response_model=TokenLookupResponse, responses=LOOKUP_ERRORS)
async def lookup_token(
    req: TokenLookupRequest,
    token_svc: EmailTokenService = Depends(get_token_service),
):
    return await _lookup(req.email, token_svc)


@router.get("/lookup", response_model=TokenLookupResponse, responses=LOOKUP_ERRORS)
async def lookup_token_query(
    email: Optional[str] = None,
    token_svc: EmailTokenService = Depends(get_token_service),
):
    return await _lookup(email, token_svc)
