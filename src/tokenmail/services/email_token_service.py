"""Service layer for issuing and looking up emailed tokens."""

from datetime import timedelta
from typing import Any, Optional

from ..domain.token import IssuedToken, TokenPurpose, TokenRecord
from ..exceptions import DeliveryError, ExpiredError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..metrics import TOKEN_DELIVERIES, TOKEN_LOOKUPS, TOKENS_GENERATED, TOKENS_SWEPT
from ..ports.clock import Clock
from ..ports.email import EmailSender
from ..ports.repositories import TokenRepository
from .token_generator import DEFAULT_TOKEN_LENGTH, generate_token
from .token_messages import compose_token_email

logger = get_logger(__name__)


def _require_email(email: Any) -> str:
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("email is required")
    return email


class EmailTokenService:
    """Issues tokens by email and serves them back until they expire.

    The store keeps one record per address. A record is committed only after
    the sender accepted the message; reissuing replaces the previous token.
    Lookups do not consume the token.
    """

    def __init__(
        self,
        repo: TokenRepository,
        sender: EmailSender,
        clock: Clock,
        ttl_minutes: int = 15,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ):
        self.repo = repo
        self.sender = sender
        self.clock = clock
        self.ttl_minutes = ttl_minutes
        self.token_length = token_length

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)

    def generate_token(self) -> str:
        return generate_token(self.token_length)

    async def issue_token(self, email: Any, purpose: Any) -> IssuedToken:
        """Generate a token, mail it to ``email`` and remember it.

        Raises:
            ValidationError: email or purpose missing, or purpose unknown.
            DeliveryError: the sender failed; nothing was stored.
        """
        email = _require_email(email)
        if purpose is None or purpose == "":
            raise ValidationError("purpose is required")
        parsed = TokenPurpose.parse(purpose)
        if parsed is None:
            allowed = ", ".join(p.value for p in TokenPurpose)
            raise ValidationError(f"purpose must be one of: {allowed}")

        token = self.generate_token()
        # counts generation attempts, including ones whose delivery fails
        if TOKENS_GENERATED is not None:
            TOKENS_GENERATED.inc()

        subject, html = compose_token_email(parsed, token, self.ttl_minutes)
        try:
            message_id = await self.sender.send(email, subject, html)
        except Exception as e:
            if TOKEN_DELIVERIES is not None:
                TOKEN_DELIVERIES.labels(result="failure").inc()
            logger.warning(
                "token_delivery_failed", email=email, purpose=parsed.value, error=str(e)
            )
            raise DeliveryError("could not send the token email", cause=e) from e
        if TOKEN_DELIVERIES is not None:
            TOKEN_DELIVERIES.labels(result="success").inc()

        now = self.clock.now()
        await self.repo.put(email, TokenRecord.issue(token, parsed, now, self.ttl))
        logger.info("token_issued", email=email, purpose=parsed.value, message_id=message_id)
        return IssuedToken(token=token, purpose=parsed, timestamp=now, message_id=message_id)

    async def lookup_token(self, email: Any) -> TokenRecord:
        """Return the live token record for ``email``.

        Raises:
            ValidationError: email missing.
            NotFoundError: nothing stored for the address.
            ExpiredError: the record expired; it is evicted as part of the lookup.
        """
        email = _require_email(email)
        now = self.clock.now()
        record = await self.repo.get(email, now)
        if record is None:
            self._count_lookup("not_found")
            raise NotFoundError("no recent token found for this email")
        if record.is_expired(now):
            self._count_lookup("expired")
            logger.info("token_lookup_expired", email=email, expires_at=record.expires_at)
            raise ExpiredError("the token has expired")
        self._count_lookup("found")
        return record

    async def sweep_expired(self) -> int:
        """Remove every expired record from the store."""
        removed = await self.repo.sweep(self.clock.now())
        if removed and TOKENS_SWEPT is not None:
            TOKENS_SWEPT.inc(removed)
        return removed

    @staticmethod
    def _count_lookup(result: str) -> None:
        if TOKEN_LOOKUPS is not None:
            TOKEN_LOOKUPS.labels(result=result).inc()


def build_token_service(
    repo: TokenRepository,
    sender: EmailSender,
    clock: Clock,
    settings: Optional[Any] = None,
) -> EmailTokenService:
    """Create an EmailTokenService configured from ``settings``."""
    if settings is None:
        from ..config import Settings

        settings = Settings()
    return EmailTokenService(
        repo,
        sender,
        clock,
        ttl_minutes=settings.token_ttl_minutes,
        token_length=settings.token_length,
    )
