"""Mail transport self-check."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import Settings
from ..deps import get_email_sender, get_settings
from ..logging_config import get_logger
from ..ports.email import EmailSender
from ..schemas.token import EmailCheckResponse
from ..services.token_messages import compose_test_email

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["diagnostics"])


@router.post("/test-email", response_model=EmailCheckResponse)
async def send_test_email(
    sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_settings),
):
    """Send a test message to the configured sender address."""
    subject, html = compose_test_email(datetime.now(timezone.utc).isoformat())
    try:
        message_id = await sender.send(settings.sender_address, subject, html)
    except Exception as e:
        logger.exception("test_email_failed", recipient=settings.sender_address, error=str(e))
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    return EmailCheckResponse(ok=True, message="email sent", message_id=message_id)


@router.get("/test-email")
async def test_email_usage():
    return {"message": "use POST to send a test email"}
