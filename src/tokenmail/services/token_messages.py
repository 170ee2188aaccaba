from html import escape
from typing import Tuple

from ..domain.token import TokenPurpose

SUBJECTS = {
    TokenPurpose.REGISTRATION: "Verify your account",
    TokenPurpose.RECOVERY: "Recover your account",
}


def compose_token_email(purpose: TokenPurpose, token: str, ttl_minutes: int) -> Tuple[str, str]:
    """Build the (subject, html body) pair for a token email."""
    subject = SUBJECTS[purpose]
    html = (
        '<div style="font-family: Arial, sans-serif; padding: 1rem;">'
        f"<h2>{escape(subject)}</h2>"
        f"<p>Your <b>{escape(str(purpose))}</b> token is:</p>"
        f'<h3 style="color: #007BFF;">{escape(token)}</h3>'
        f"<p>This code expires in {int(ttl_minutes)} minutes.</p>"
        "</div>"
    )
    return subject, html


def compose_test_email(timestamp: str) -> Tuple[str, str]:
    """Build the message used to check the mail transport end to end."""
    subject = "Test email from the authentication service"
    html = f"<p>Test message sent successfully at {escape(timestamp)}</p>"
    return subject, html
