import sys
from pathlib import Path

# Ensure the project's src directory is on sys.path for tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))
sys.path.insert(0, str(ROOT))

import pytest

from tests.fixtures.clock import FrozenClock
from tokenmail.config import Settings
from tokenmail.infrastructure.email.mock import MockEmailSender
from tokenmail.infrastructure.repositories.token_store import InMemoryTokenStore
from tokenmail.services.email_token_service import EmailTokenService


@pytest.fixture
def clock():
    """A clock frozen at 2024-01-01 12:00 UTC; tests move it with advance()."""
    return FrozenClock()


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
def email_sender():
    """Recording sender; set ``fail_with`` to make every send raise."""
    return MockEmailSender()


@pytest.fixture
def settings():
    # explicit values so a local .env or environment never leaks into tests
    return Settings(
        _env_file=None,
        environment="production",
        token_ttl_minutes=15,
        token_sweep_interval_minutes=10,
        token_length=8,
        email_from="auth@example.com",
        smtp_host="",
        sendgrid_api_key="",
        cors_allowed_origins=["http://localhost:5173"],
    )


@pytest.fixture
def token_service(token_store, email_sender, clock):
    return EmailTokenService(token_store, email_sender, clock, ttl_minutes=15)


@pytest.fixture
def test_app(settings, clock, email_sender, token_store):
    """Create a routed app wired to the test clock, sender and store.

    Yields a namespace with `.app` plus the collaborators for assertions.
    """
    from tests.fixtures.app_factory import create_test_app

    yield create_test_app(
        settings=settings, clock=clock, email_sender=email_sender, token_store=token_store
    )
