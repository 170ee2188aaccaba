import asyncio
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from ...config import Settings
from ...logging_config import get_logger

logger = get_logger(__name__)


class SendGridEmailSender:
    def __init__(self, api_key: Optional[str] = None, from_email: Optional[str] = None):
        s = Settings()
        self.api_key = api_key or s.sendgrid_api_key
        self.from_email = from_email or s.sender_address
        if not self.api_key:
            raise RuntimeError("SendGrid API key is not configured")

    async def send(self, recipient: str, subject: str, html_body: str) -> Optional[str]:
        # SendGrid client is synchronous; wrap in thread via asyncio to avoid blocking event loop
        client = SendGridAPIClient(self.api_key)
        message = Mail(
            from_email=self.from_email,
            to_emails=recipient,
            subject=subject,
            html_content=html_body,
        )
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, client.send, message)
        except Exception as e:
            logger.warning("sendgrid_send_failed", recipient=recipient, error=str(e))
            raise
        status = getattr(response, "status_code", None)
        if status is not None and status >= 400:
            raise RuntimeError(f"SendGrid rejected message with status {status}")
        headers = getattr(response, "headers", None) or {}
        return headers.get("X-Message-Id")
