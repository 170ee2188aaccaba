from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Settings
from .exceptions import TokenServiceError, ValidationError
from .logging_config import get_logger

logger = get_logger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"]


def _create_minimal_app(
    settings: Settings,
    clock: Any = None,
    email_sender: Any = None,
    token_store: Any = None,
) -> FastAPI:
    """Create the FastAPI app object without running side-effectful wiring.
    Tests can import and call this to create fresh apps.
    """
    from .infrastructure.clock import SystemClock
    from .infrastructure.email.mock import MockEmailSender
    from .infrastructure.repositories.token_store import InMemoryTokenStore

    app = FastAPI(title="Token Mail Service")

    # The mock sender is a placeholder until composition.wire_app selects the
    # configured transport at startup.
    app.state.settings = settings
    app.state.clock = clock or SystemClock()
    app.state.email_sender = email_sender or MockEmailSender()
    app.state.token_store = token_store or InMemoryTokenStore()
    app.state.sweeper = None

    return app


def _add_cors(app: FastAPI, settings: Settings) -> None:
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=CORS_METHODS,
            allow_headers=CORS_HEADERS,
        )
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )


def create_app(
    settings: Settings | None = None,
    *,
    clock: Any = None,
    email_sender: Any = None,
    token_store: Any = None,
) -> FastAPI:
    """Create and wire a FastAPI application.

    This returns a fully routed app (routers + middleware) but intentionally
    doesn't start the sweeper or pick the mail transport; that is performed by
    the composition root at runtime.
    """
    if settings is None:
        settings = Settings()

    app = _create_minimal_app(
        settings, clock=clock, email_sender=email_sender, token_store=token_store
    )

    from .metrics import metrics_response
    from .middleware.metrics_middleware import MetricsMiddleware
    from .routers import diagnostics, health, tokens

    app.include_router(health.router)
    app.include_router(tokens.router)
    app.include_router(diagnostics.router)

    app.add_middleware(MetricsMiddleware)
    _add_cors(app, settings)

    @app.get("/metrics")
    async def _metrics():
        data, content_type = metrics_response()
        return Response(content=data, media_type=content_type)

    @app.exception_handler(TokenServiceError)
    async def _token_service_error_handler(request: Request, exc: TokenServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error": exc.error_code},
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error_handler(request: Request, exc: RequestValidationError):
        # malformed bodies report the same error kind as service-level validation
        errors = exc.errors()
        detail = "invalid request body"
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"detail": detail, "error": ValidationError.error_code},
        )

    return app


__all__ = ["create_app", "_create_minimal_app"]
