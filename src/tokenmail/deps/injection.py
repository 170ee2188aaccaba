"""Service dependency injection for FastAPI routes."""

from fastapi import Depends

from ..config import Settings
from ..ports.clock import Clock
from ..ports.email import EmailSender
from ..services.email_token_service import EmailTokenService, build_token_service
from .providers import get_clock, get_email_sender, get_settings, get_token_store


async def get_token_service(
    store=Depends(get_token_store),
    sender: EmailSender = Depends(get_email_sender),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> EmailTokenService:
    """Get EmailTokenService bound to the app's store, sender and clock."""
    return build_token_service(store, sender, clock, settings)
