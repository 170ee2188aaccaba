from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI

from .config import Settings
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class WireResult:
    app: Any
    sweeper: Any
    teardown: Any


def select_email_sender(settings: Settings) -> Any:
    """Pick the mail transport: SMTP, then SendGrid, then the in-memory mock."""
    if settings.smtp_host:
        from .infrastructure.email.smtp import SmtpEmailSender

        logger.info(
            "initialized smtp email sender", host=settings.smtp_host, port=settings.smtp_port
        )
        return SmtpEmailSender(settings)
    if settings.sendgrid_api_key:
        from .infrastructure.email.sendgrid import SendGridEmailSender

        logger.info("initialized sendgrid email sender")
        return SendGridEmailSender(settings.sendgrid_api_key, settings.sender_address)

    from .infrastructure.email.mock import MockEmailSender

    logger.warning("no mail transport configured, using mock email sender")
    return MockEmailSender()


async def wire_app(app: FastAPI, select_sender: bool = True) -> WireResult:
    """Run runtime wiring at startup.

    Replaces the placeholder email sender with the configured transport (unless
    ``select_sender`` is False, which keeps whatever the app was created with),
    starts the expired-token sweeper and marks the service as up. The returned
    teardown stops the sweeper.
    """
    from .metrics import SERVICE_UP
    from .services.email_token_service import build_token_service
    from .services.sweeper import TokenSweeper

    settings = getattr(app.state, "settings", None) or Settings()

    if select_sender:
        app.state.email_sender = select_email_sender(settings)

    service = build_token_service(
        app.state.token_store, app.state.email_sender, app.state.clock, settings
    )
    sweeper = TokenSweeper(service, interval_seconds=settings.token_sweep_interval_seconds)
    sweeper.start()
    app.state.sweeper = sweeper

    if SERVICE_UP is not None:
        SERVICE_UP.set(1)
    logger.info(
        "token service wired",
        ttl_minutes=settings.token_ttl_minutes,
        sweep_interval_minutes=settings.token_sweep_interval_minutes,
    )

    async def _teardown():
        await sweeper.stop()
        app.state.sweeper = None
        if SERVICE_UP is not None:
            SERVICE_UP.set(0)

    return WireResult(app=app, sweeper=sweeper, teardown=_teardown)
