from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import Optional

import aiosmtplib

from ...config import Settings
from ...logging_config import get_logger

logger = get_logger(__name__)


class SmtpEmailSender:
    """Sends HTML mail over SMTP.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS when
    ``use_tls`` is set.
    """

    def __init__(self, settings: Optional[Settings] = None):
        s = settings or Settings()
        if not s.smtp_host:
            raise RuntimeError("SMTP host is not configured")
        self.host = s.smtp_host
        self.port = s.smtp_port
        self.username = s.smtp_username
        self.password = s.smtp_password
        self.use_tls = s.smtp_use_tls
        self.timeout = s.smtp_timeout_seconds
        self.from_email = s.sender_address
        self.from_name = s.email_from_name

    def build_message(self, recipient: str, subject: str, html_body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = recipient
        msg["Message-ID"] = make_msgid()
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html_body, subtype="html")
        return msg

    async def send(self, recipient: str, subject: str, html_body: str) -> Optional[str]:
        msg = self.build_message(recipient, subject, html_body)
        implicit_tls = self.use_tls and self.port == 465
        try:
            await aiosmtplib.send(
                msg,
                hostname=self.host,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=implicit_tls,
                start_tls=self.use_tls and not implicit_tls,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as e:
            logger.warning("smtp_send_failed", recipient=recipient, host=self.host, error=str(e))
            raise
        return msg["Message-ID"]
