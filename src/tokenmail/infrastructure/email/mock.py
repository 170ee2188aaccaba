import asyncio
import uuid
from typing import Optional


class MockEmailSender:
    def __init__(self, fail_with: Optional[Exception] = None):
        self.sent = []
        # when set, every send raises this instead of recording
        self.fail_with = fail_with

    async def send(self, recipient: str, subject: str, html_body: str) -> Optional[str]:
        # simulate async send
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        message_id = f"<{uuid.uuid4().hex}@mock>"
        self.sent.append(
            {"to": recipient, "subject": subject, "html": html_body, "message_id": message_id}
        )
        return message_id
