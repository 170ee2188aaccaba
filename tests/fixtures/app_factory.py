from types import SimpleNamespace
from typing import Any

from tokenmail.config import Settings
from tokenmail.wiring import create_app


def create_test_app(
    settings: Settings | None = None,
    clock: Any = None,
    email_sender: Any = None,
    token_store: Any = None,
) -> SimpleNamespace:
    """Create an app without running startup wiring.

    Returns a lightweight object exposing the FastAPI app as `.app` along with
    the collaborators placed on app.state. Tests build an httpx.ASGITransport
    from client.app.
    """
    app = create_app(settings, clock=clock, email_sender=email_sender, token_store=token_store)
    return SimpleNamespace(
        app=app,
        clock=app.state.clock,
        email_sender=app.state.email_sender,
        token_store=app.state.token_store,
    )
