from typing import Optional, Protocol


class EmailSender(Protocol):
    """Protocol for email sending operations.

    ``send`` returns the transport's message id when it has one and raises on
    any delivery failure.
    """

    async def send(self, recipient: str, subject: str, html_body: str) -> Optional[str]: ...
